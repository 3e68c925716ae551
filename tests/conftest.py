"""테스트 픽스처 및 설정"""

import pytest
from fixtures import load_fixture_results

from normlab.models.norms import (
    BooleanField,
    NormSchema,
    NumberField,
    SelectField,
    TextField,
)
from normlab.services.entry.store import InMemoryResultStore
from normlab.services.norm_fields.reference import get_catalog, get_reference_norm


@pytest.fixture
def concrete_schema():
    """전역 숫자 필드 2개 (f1: min 200, f2: 8~12)"""
    return NormSchema(
        id="norma_test_414",
        code="NMX-C-414",
        fields=[
            NumberField(id="f1", name="Resistencia Compresión", min_limit=200, required=True),
            NumberField(id="f2", name="Revenimiento", min_limit=8, max_limit=12, required=True),
        ],
    )


@pytest.fixture
def specimen_schema():
    """시편 숫자 필드 1개 (fc: min 20)"""
    return NormSchema(
        id="norma_test_fc",
        fields=[
            NumberField(id="fc", name="f'c", unit="MPa", min_limit=20, required=True, scope="specimen"),
        ],
    )


@pytest.fixture
def mixed_schema():
    """범위 미지정 필드가 섞인 스키마 (multi_mode 해석 확인용)"""
    return NormSchema(
        id="norma_test_mixed",
        fields=[
            TextField(id="obra", name="Obra", required=True, scope="global"),
            NumberField(id="h", name="Altura", min_limit=1, max_limit=10, required=True),
            BooleanField(id="ok", name="Cumple", required=False),
            SelectField(id="edad", name="Edad", options=["7 días", "28 días"], required=False, scope="specimen"),
        ],
    )


@pytest.fixture
def c083_schema():
    """명시적 수량 필드가 있는 참조 규격 (NMX-C-083)"""
    return get_reference_norm("norma_nmx_c083")


@pytest.fixture
def aci_schema():
    """명시적 수량 필드가 있는 참조 규격 (ACI 318)"""
    return get_reference_norm("norma_aci_318")


@pytest.fixture
def memory_store():
    """참조 규격과 시료 2개가 들어 있는 메모리 저장소"""
    return InMemoryResultStore(
        norms=list(get_catalog().values()),
        samples=[
            {
                "id": "m1",
                "codigo": "M-001",
                "proyectoId": "p1",
                "normaId": "norma_nmx_c414",
                "tipoMaterial": "Concreto",
                "resultados": {"f1": 210},
                "estado": "en_proceso",
            },
            {
                "id": "m2",
                "codigo": "M-002",
                "normaId": "norma_aci_318",
                "tipoMaterial": "Concreto",
                "resultados": None,
                "estado": "pendiente",
            },
        ],
    )


@pytest.fixture
def flat_results():
    """저장 결과 JSON 픽스처 로더 (tests/fixtures/results/*.json)"""
    return load_fixture_results
