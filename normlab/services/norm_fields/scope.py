"""필드 범위(scope) 해석 및 수량 필드 탐지

범위가 지정되지 않은 필드(레거시)는 필드 자체가 아니라 현재 multi_mode에 따라
global 또는 specimen으로 해석됩니다. 이 정책은 effective_scope() 한 곳에만 둡니다.

수량 필드 탐지 규칙 (명시적 수량 규격, 예: "Número de Cilindros"):
- number 타입 필드 중
- id에 quantity_id_keywords 중 하나가 포함되거나 ("qty")
- 소문자 이름에 quantity_name_keywords 중 하나가 포함되면 ("cantidad", "número")
- 첫 번째로 일치하는 필드를 수량 필드로 사용
- 일치하는 필드가 없으면 None (수량 필드 없음, 수량 0으로 취급)
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from normlab.models.norms import NormSchema, NumberField
from normlab.models.results import StructuredResults
from normlab.services.norm_fields.coercion import coerce_to_count
from normlab.settings import settings

logger = logging.getLogger(__name__)


def effective_scope(field, multi_mode: bool) -> str:
    """필드의 실제 범위 ('global' | 'specimen')

    Args:
        field: 규격 필드
        multi_mode: 암묵적 다중 시편 모드 여부

    Returns:
        명시된 scope, 없으면 multi_mode일 때 'specimen', 아니면 'global'
    """
    if field.scope is not None:
        return field.scope
    return 'specimen' if multi_mode else 'global'


def partition_fields(schema: NormSchema, multi_mode: bool) -> Tuple[list, list]:
    """스키마 필드를 (전역 필드, 시편 필드)로 분리 (순서 유지)"""
    global_fields = []
    specimen_fields = []
    for f in schema.fields:
        if effective_scope(f, multi_mode) == 'specimen':
            specimen_fields.append(f)
        else:
            global_fields.append(f)
    return global_fields, specimen_fields


def has_specimen_fields(schema: NormSchema, multi_mode: bool) -> bool:
    return bool(partition_fields(schema, multi_mode)[1])


def is_quantity_field(
    field,
    id_keywords: Optional[Sequence[str]] = None,
    name_keywords: Optional[Sequence[str]] = None,
) -> bool:
    """필드가 시편 수량을 나타내는 필드인지 판정"""
    if not isinstance(field, NumberField):
        return False
    if id_keywords is None:
        id_keywords = settings.quantity_id_keywords
    if name_keywords is None:
        name_keywords = settings.quantity_name_keywords

    if any(k and k in field.id for k in id_keywords):
        return True
    name = field.name.lower()
    return any(k and k.lower() in name for k in name_keywords)


def find_quantity_field(schema: NormSchema) -> Optional[NumberField]:
    """스키마의 명시적 수량 필드 (없으면 None)"""
    for f in schema.fields:
        if is_quantity_field(f):
            return f
    return None


def declared_quantity(schema: NormSchema, results: StructuredResults) -> int:
    """수량 필드에 입력된 시편 수

    수량 필드가 없거나 값이 유효하지 않으면 0.
    settings.max_specimen_rows를 넘는 값은 그 값으로 제한합니다.
    """
    qty_field = find_quantity_field(schema)
    if qty_field is None or effective_scope(qty_field, results.multi_mode) != 'global':
        return 0
    count = coerce_to_count(results.global_values.get(qty_field.id)) or 0
    if count > settings.max_specimen_rows:
        logger.warning(
            f"수량 필드 {qty_field.id} 값 {count}이(가) 최대 시편 수 "
            f"{settings.max_specimen_rows}를 넘어 제한합니다"
        )
        count = settings.max_specimen_rows
    return count


def effective_specimen_count(schema: NormSchema, results: StructuredResults) -> int:
    """판정에 사용할 시편 수

    기본은 시편 행 수. multi_mode가 아니고 수량 필드 값이 행 수보다 크면
    수량 필드 값을 사용합니다 (행이 없는 시편은 미입력으로 판정됨).
    """
    count = results.specimen_count
    if not results.multi_mode:
        count = max(count, declared_quantity(schema, results))
    return count


__all__: List[str] = [
    'effective_scope',
    'partition_fields',
    'has_specimen_fields',
    'is_quantity_field',
    'find_quantity_field',
    'declared_quantity',
    'effective_specimen_count',
]
