"""기본 제공 참조 규격 카탈로그

저장소에 보관되는 원본 페이로드 형태(스페인어 키)를 그대로 유지합니다.
load_norm_schema()가 이 형태를 모델로 변환합니다.

# 규칙
# - 전역 필드만 있는 규격 먼저, 시편 규격은 뒤에
# - 필드 id는 규격 내 고유, 한 번 배포된 id는 재사용 금지
# - 명시적 수량 규격(ACI 318, NMX-C-083)은 수량 필드에 scope='global' 지정
"""
from __future__ import annotations

from typing import Dict, List, Optional

from normlab.models.norms import NormSchema, load_norm_schema

REFERENCE_NORMS = [

    # --------------------------------------------------------
    # 단일 값 규격 (전역 필드만)
    # --------------------------------------------------------
    {
        "id": "norma_nmx_c414",
        "codigo": "NMX-C-414",
        "nombre": "Concreto Hidráulico - Cabecería",
        "tipo": "NMX",
        "descripcion": "Norma mexicana para especificaciones de concreto hidráulico",
        "activa": True,
        "tiposMuestraCompatibles": ["Concreto"],
        "campos": [
            {"id": "f1", "nombre": "Resistencia Compresión", "tipo": "number", "unidad": "kg/cm²", "limiteMin": 200, "esRequerido": True},
            {"id": "f2", "nombre": "Revenimiento", "tipo": "number", "unidad": "cm", "limiteMin": 8, "limiteMax": 12, "esRequerido": True},
        ],
    },
    {
        "id": "norma_nmx_c155",
        "codigo": "NMX-C-155-ONNCCE-2014",
        "nombre": "Concreto Hidráulico - Especificaciones",
        "tipo": "NMX",
        "descripcion": "Establece las especificaciones para el concreto hidráulico en estado fresco y endurecido.",
        "activa": True,
        "tiposMuestraCompatibles": ["Concreto"],
        "campos": [
            {"id": "f_c155_cement", "nombre": "Tipo de Cemento", "tipo": "text", "esRequerido": True},
            {"id": "f_c155_wc", "nombre": "Relación Agua/Cemento", "tipo": "number", "limiteMin": 0.3, "limiteMax": 0.8, "esRequerido": True},
            {"id": "f_c155_class", "nombre": "Clase de Concreto", "tipo": "select", "opciones": ["Clase 1", "Clase 2"], "esRequerido": True},
            {"id": "f_c155_struct", "nombre": "Uso Estructural", "tipo": "boolean", "esRequerido": True},
        ],
    },
    {
        "id": "norma_nmx_c161",
        "codigo": "NMX-C-161-ONNCCE-2013",
        "nombre": "Concreto Fresco - Muestreo",
        "tipo": "NMX",
        "descripcion": "Método para la obtención de muestras de concreto fresco en obra.",
        "activa": True,
        "tiposMuestraCompatibles": ["Concreto"],
        "campos": [
            {"id": "f_c161_place", "nombre": "Lugar de Muestreo", "tipo": "text", "esRequerido": True},
            {"id": "f_c161_time", "nombre": "Hora de Muestreo", "tipo": "text", "esRequerido": True},
            {"id": "f_c161_method", "nombre": "Método de Muestreo", "tipo": "select", "opciones": ["Descarga de Camión", "Bomba", "Molde"], "esRequerido": True},
        ],
    },

    # --------------------------------------------------------
    # 시편 규격 (명시적 수량 필드 + 시편 필드)
    # --------------------------------------------------------
    {
        "id": "norma_aci_318",
        "codigo": "ACI 318",
        "nombre": "Building Code Requirements for Structural Concrete",
        "tipo": "ACI",
        "descripcion": "Standard for structural concrete",
        "activa": True,
        "tiposMuestraCompatibles": ["Concreto"],
        "campos": [
            {"id": "f_aci_qty", "nombre": "Cantidad de Cilindros", "tipo": "number", "limiteMin": 1, "limiteMax": 10, "esRequerido": True, "scope": "global"},
            {"id": "f_aci_fc", "nombre": "f'c de Diseño", "tipo": "number", "unidad": "MPa", "limiteMin": 20, "esRequerido": True, "scope": "specimen"},
            {"id": "f_aci_age", "nombre": "Edad de Evaluación", "tipo": "select", "opciones": ["7 días", "14 días", "28 días"], "esRequerido": True, "scope": "specimen"},
            {"id": "f_aci_method", "nombre": "Método de Aceptación", "tipo": "select", "opciones": ["Promedio de 3", "Promedio de 2", "Valor Individual"], "esRequerido": True, "scope": "specimen"},
            {"id": "f_aci_pass", "nombre": "Cumplimiento", "tipo": "boolean", "esRequerido": True, "scope": "specimen"},
        ],
    },
    {
        "id": "norma_nmx_c083",
        "codigo": "NMX-C-083-ONNCCE-2014",
        "nombre": "Resistencia a la Compresión",
        "tipo": "NMX",
        "descripcion": "Determinación de la resistencia a la compresión de cilindros de concreto.",
        "activa": True,
        "tiposMuestraCompatibles": ["Concreto"],
        "campos": [
            {"id": "f_c083_qty", "nombre": "Número de Cilindros", "tipo": "number", "limiteMin": 1, "limiteMax": 6, "esRequerido": True, "scope": "global"},
            {"id": "f_c083_age", "nombre": "Edad de Ensayo", "tipo": "select", "opciones": ["3 días", "7 días", "14 días", "28 días", "56 días"], "esRequerido": True, "scope": "specimen"},
            {"id": "f_c083_1", "nombre": "Diámetro", "tipo": "number", "unidad": "cm", "limiteMin": 14.8, "limiteMax": 15.2, "esRequerido": True, "scope": "specimen"},
            {"id": "f_c083_2", "nombre": "Altura", "tipo": "number", "unidad": "cm", "limiteMin": 29.5, "limiteMax": 30.5, "esRequerido": True, "scope": "specimen"},
            {"id": "f_c083_3", "nombre": "Carga Máxima", "tipo": "number", "unidad": "kgf", "esRequerido": True, "scope": "specimen"},
            {"id": "f_c083_4", "nombre": "Resistencia Calculada", "tipo": "number", "unidad": "kg/cm²", "esRequerido": True, "scope": "specimen"},
        ],
    },
]

_CATALOG_CACHE: Optional[Dict[str, NormSchema]] = None


def build_catalog() -> Dict[str, NormSchema]:
    """REFERENCE_NORMS를 검증하여 id → NormSchema 사전 생성"""
    return {payload["id"]: load_norm_schema(payload) for payload in REFERENCE_NORMS}


def get_catalog(force_rebuild: bool = False) -> Dict[str, NormSchema]:
    """전역 캐시된 카탈로그를 반환합니다. force_rebuild=True 면 재생성."""
    global _CATALOG_CACHE
    if force_rebuild or _CATALOG_CACHE is None:
        _CATALOG_CACHE = build_catalog()
    return _CATALOG_CACHE


def get_reference_norm(norm_id: str) -> Optional[NormSchema]:
    """id로 참조 규격 조회 (없으면 None)"""
    return get_catalog().get(norm_id)


def list_reference_norms() -> List[NormSchema]:
    """참조 규격 목록 (카탈로그 순서)"""
    return list(get_catalog().values())
