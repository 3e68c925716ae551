"""구조화된 결과 인코더 (StructuredResults → FlatResultMap)

- 전역 값은 그대로 복사
- 시편 행 i의 (필드 id, 값)은 "<필드 id>_<i>" 키로 기록 (항상 0..n-1 연속 인덱스)
- multi_mode이면 _is_multi_implicit=True, _qty=행 수 기록
- multi_mode가 아니고 명시적 수량 필드가 있으며 시편 행이 있으면 수량 필드에
  max(선언된 수량, 행 수) 기록 (선언 값이 행 수 이상이면 그대로 둠)

입력에 없는 값은 출력에도 없습니다 (0 채우기 없음).
"""
from __future__ import annotations

import logging
from typing import Any, Dict

from normlab.models.norms import RESERVED_MULTI_KEY, RESERVED_QTY_KEY, NormSchema
from normlab.models.results import FlatResultMap, StructuredResults
from normlab.services.norm_fields.scope import (
    declared_quantity,
    effective_scope,
    find_quantity_field,
)

logger = logging.getLogger(__name__)


def specimen_key(field_id: str, index: int) -> str:
    """시편 값의 평면 키"""
    return f"{field_id}_{index}"


def encode(schema: NormSchema, results: StructuredResults) -> FlatResultMap:
    """구조화된 결과를 저장용 평면 맵으로 변환

    Args:
        schema: 규격 스키마 (명시적 수량 필드 탐지에 사용)
        results: 구조화된 결과

    Returns:
        평면 결과 맵
    """
    output: Dict[str, Any] = dict(results.global_values)

    for index, row in enumerate(results.specimen_rows):
        for field_id, value in row.items():
            output[specimen_key(field_id, index)] = value

    if results.multi_mode:
        output[RESERVED_MULTI_KEY] = True
        output[RESERVED_QTY_KEY] = results.specimen_count
    elif results.specimen_rows:
        qty_field = find_quantity_field(schema)
        if qty_field is not None and effective_scope(qty_field, False) == 'global':
            # 선언된 수량보다 작은 값으로 덮어쓰지 않음
            if declared_quantity(schema, results) < results.specimen_count:
                output[qty_field.id] = results.specimen_count

    logger.debug(
        f"결과 인코딩: 키 {len(output)}개, 시편 {results.specimen_count}행, "
        f"multi_mode={results.multi_mode}"
    )
    return output


__all__ = [
    'specimen_key',
    'encode',
]
