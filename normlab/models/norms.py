"""규격(Norm) 스키마 모델

시험 규격 하나를 타입이 지정된 필드들의 순서 있는 목록으로 표현하는
Pydantic 모델 정의. 필드 타입별 페이로드(number의 한계값, select의 옵션)는
해당 변형(variant)에만 존재하므로 한 필드가 options와 min_limit을
동시에 가질 수 없습니다.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Literal, Mapping, Optional, Union
from typing_extensions import Annotated, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from normlab.errors import InvalidSchema

logger = logging.getLogger(__name__)


# =============================================================================
# 기본 타입 정의
# =============================================================================

DataType: TypeAlias = Literal['number', 'text', 'boolean', 'select']
"""필드 데이터 타입"""

FieldScope: TypeAlias = Literal['global', 'specimen']
"""필드 범위: 시험당 한 값(global) 또는 시편당 한 값(specimen)"""

RESERVED_QTY_KEY = '_qty'
RESERVED_MULTI_KEY = '_is_multi_implicit'
RESERVED_KEYS = frozenset({RESERVED_QTY_KEY, RESERVED_MULTI_KEY})


# =============================================================================
# 필드 변형 모델
# =============================================================================

class _BaseNormField(BaseModel):
    """모든 필드 변형이 공유하는 속성"""
    model_config = ConfigDict(frozen=True, extra='forbid')

    id: str = Field(..., description="스키마 내 고유 필드 id (재사용 금지)")
    name: str = Field(default='', description="표시 이름")
    required: bool = Field(default=False, description="필수 입력 여부")
    scope: Optional[FieldScope] = Field(
        default=None, description="global | specimen (없으면 multi_mode에 따라 해석)"
    )


class NumberField(_BaseNormField):
    """숫자 필드 (단위와 선택적 최소/최대 한계값)"""
    data_type: Literal['number'] = 'number'
    unit: Optional[str] = Field(default=None, description="표시 단위")
    min_limit: Optional[float] = Field(default=None, description="허용 최소값 (포함)")
    max_limit: Optional[float] = Field(default=None, description="허용 최대값 (포함)")

    @property
    def has_limits(self) -> bool:
        return self.min_limit is not None or self.max_limit is not None


class TextField(_BaseNormField):
    """자유 텍스트 필드"""
    data_type: Literal['text'] = 'text'


class BooleanField(_BaseNormField):
    """적합/부적합(Cumple/No Cumple) 필드"""
    data_type: Literal['boolean'] = 'boolean'


class SelectField(_BaseNormField):
    """열거형 선택 필드"""
    data_type: Literal['select'] = 'select'
    options: List[str] = Field(..., min_length=1, description="선택 가능한 값 (순서 유지)")


NormField = Annotated[
    Union[NumberField, TextField, BooleanField, SelectField],
    Field(discriminator='data_type'),
]

FIELD_TYPES: Dict[str, type] = {
    'number': NumberField,
    'text': TextField,
    'boolean': BooleanField,
    'select': SelectField,
}


def find_field_id_problems(field_ids: List[str]) -> List[str]:
    """필드 id 목록의 문제점(빈 id, 예약 키 충돌, 중복) 반환"""
    problems = []
    seen = set()
    for fid in field_ids:
        if not fid:
            problems.append("빈 필드 id")
            continue
        if fid in RESERVED_KEYS:
            problems.append(f"예약된 키와 충돌하는 필드 id: {fid}")
        if fid in seen:
            problems.append(f"중복 필드 id: {fid}")
        seen.add(fid)
    return problems


# =============================================================================
# 규격 스키마 모델
# =============================================================================

class NormSchema(BaseModel):
    """시험 규격 스키마 (로드 후 불변)

    저장된 페이로드는 load_norm_schema()로 로드합니다. 이 함수만 검증 실패를
    InvalidSchema로 변환합니다. 직접 생성하면 같은 검증 실패가 pydantic
    ValidationError(ValueError 하위 클래스)로 발생합니다.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(default='', description="규격 id")
    code: str = Field(default='', description="규격 코드 (예: NMX-C-414)")
    name: str = Field(default='', description="규격 이름")
    kind: Optional[str] = Field(default=None, description="NMX | ACI | ASTM | Local | Privada")
    description: str = Field(default='', description="설명")
    active: bool = Field(default=True, description="사용 여부")
    compatible_categories: List[str] = Field(
        default_factory=list, description="호환 시료 분류 (Concreto, Suelo, ...)"
    )
    fields: List[NormField] = Field(default_factory=list, description="필드 정의 (순서 유지)")

    @model_validator(mode='after')
    def _check_field_ids(self) -> 'NormSchema':
        problems = find_field_id_problems([f.id for f in self.fields])
        if problems:
            raise ValueError("; ".join(problems))
        return self

    @property
    def field_ids(self) -> List[str]:
        return [f.id for f in self.fields]

    def field(self, field_id: str) -> Optional[Union[NumberField, TextField, BooleanField, SelectField]]:
        """id로 필드 조회 (없으면 None)"""
        for f in self.fields:
            if f.id == field_id:
                return f
        return None

    def has_field(self, field_id: str) -> bool:
        return self.field(field_id) is not None


# =============================================================================
# 페이로드 로더
# =============================================================================

# 저장된 원본 페이로드(스페인어 키, camelCase)를 모델 필드명으로 매핑
_NORM_KEY_MAP = {
    'codigo': 'code',
    'nombre': 'name',
    'tipo': 'kind',
    'descripcion': 'description',
    'activa': 'active',
    'tiposMuestraCompatibles': 'compatible_categories',
    'compatibleCategories': 'compatible_categories',
    'campos': 'fields',
}

_FIELD_KEY_MAP = {
    'nombre': 'name',
    'tipo': 'data_type',
    'dataType': 'data_type',
    'unidad': 'unit',
    'limiteMin': 'min_limit',
    'minLimit': 'min_limit',
    'limiteMax': 'max_limit',
    'maxLimit': 'max_limit',
    'esRequerido': 'required',
    'opciones': 'options',
}

_COMMON_FIELD_KEYS = {'id', 'name', 'required', 'scope', 'data_type'}

_VARIANT_KEYS = {
    'number': _COMMON_FIELD_KEYS | {'unit', 'min_limit', 'max_limit'},
    'text': _COMMON_FIELD_KEYS,
    'boolean': _COMMON_FIELD_KEYS,
    'select': _COMMON_FIELD_KEYS | {'options'},
}


def _normalize_field_payload(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """필드 페이로드 키를 정규화하고 변형과 무관한 키를 제거"""
    data: Dict[str, Any] = {}
    for key, value in raw.items():
        data[_FIELD_KEY_MAP.get(key, key)] = value

    # 빈 scope는 범위 미지정(레거시)으로 취급
    if data.get('scope') in ('', None):
        data.pop('scope', None)

    allowed = _VARIANT_KEYS.get(data.get('data_type'))
    if allowed is None:
        return data
    return {k: v for k, v in data.items() if k in allowed and v is not None}


def _field_payload_problems(fields: List[Dict[str, Any]]) -> List[str]:
    problems = []
    for i, f in enumerate(fields):
        label = f.get('id') or f"#{i}"
        data_type = f.get('data_type')
        if data_type not in FIELD_TYPES:
            problems.append(f"알 수 없는 dataType '{data_type}' (필드 {label})")
        elif data_type == 'select' and not f.get('options'):
            problems.append(f"select 필드에 options가 없습니다 (필드 {label})")
    problems.extend(find_field_id_problems([str(f.get('id') or '') for f in fields]))
    return problems


def _warn_inverted_limits(schema: NormSchema) -> None:
    for f in schema.fields:
        if isinstance(f, NumberField) and f.min_limit is not None and f.max_limit is not None:
            if f.min_limit > f.max_limit:
                logger.warning(
                    f"규격 {schema.code or schema.id}: 필드 {f.id}의 한계값이 뒤집혀 있습니다 "
                    f"(min {f.min_limit} > max {f.max_limit})"
                )


def load_norm_schema(payload: Union[NormSchema, Mapping[str, Any]]) -> NormSchema:
    """규격 페이로드를 검증하여 NormSchema로 로드

    모델 필드명과 저장된 원본 키(codigo, campos, limiteMin, esRequerido 등)를
    모두 허용합니다. 필드 변형과 무관한 키(예: number 필드의 opciones)는 무시됩니다.

    Args:
        payload: NormSchema 인스턴스 또는 dict 페이로드

    Returns:
        검증된 NormSchema

    Raises:
        InvalidSchema: select 필드 options 누락, 중복/빈/예약 id, 알 수 없는 dataType 등
    """
    if isinstance(payload, NormSchema):
        return payload

    data: Dict[str, Any] = {}
    for key, value in payload.items():
        data[_NORM_KEY_MAP.get(key, key)] = value
    norm_id = str(data.get('id') or data.get('code') or '') or None

    raw_fields = data.get('fields') or []
    if not isinstance(raw_fields, list):
        raise InvalidSchema(["fields는 리스트여야 합니다"], norm_id=norm_id)

    fields = []
    for raw in raw_fields:
        if not isinstance(raw, Mapping):
            raise InvalidSchema([f"필드 정의가 객체가 아닙니다: {raw!r}"], norm_id=norm_id)
        fields.append(_normalize_field_payload(raw))

    problems = _field_payload_problems(fields)
    if problems:
        raise InvalidSchema(problems, norm_id=norm_id)

    data['fields'] = fields
    try:
        schema = NormSchema.model_validate(data)
    except ValidationError as e:
        problems = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" if err['loc'] else err['msg']
            for err in e.errors()
        ]
        raise InvalidSchema(problems, norm_id=norm_id) from e

    _warn_inverted_limits(schema)
    return schema


__all__ = [
    'DataType',
    'FieldScope',
    'RESERVED_QTY_KEY',
    'RESERVED_MULTI_KEY',
    'RESERVED_KEYS',
    'NumberField',
    'TextField',
    'BooleanField',
    'SelectField',
    'NormField',
    'FIELD_TYPES',
    'NormSchema',
    'find_field_id_problems',
    'load_norm_schema',
]
