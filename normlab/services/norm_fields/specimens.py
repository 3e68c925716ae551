"""시편 행 편집 헬퍼

모든 함수는 StructuredResults를 받아 새 StructuredResults를 반환합니다 (입력 불변).
값으로 None을 주면 해당 칸을 삭제합니다.
"""
from __future__ import annotations

import logging
from typing import Optional

from normlab.errors import IndexOutOfRange, SpecimenRemovalRefused
from normlab.models.results import Scalar, StructuredResults
from normlab.settings import settings

logger = logging.getLogger(__name__)


def add_specimen(results: StructuredResults) -> StructuredResults:
    """빈 시편 행 추가 (multi_mode는 변경하지 않음)"""
    return results.replace(specimen_rows=results.specimen_rows + [{}])


def remove_specimen(
    results: StructuredResults,
    index: int,
    min_rows: Optional[int] = None,
    strict: bool = False,
) -> StructuredResults:
    """시편 행 삭제 (뒤 행들은 한 칸씩 당겨짐)

    Args:
        results: 현재 결과
        index: 삭제할 행 인덱스
        min_rows: 유지할 최소 행 수 (기본: settings.min_specimen_rows)
        strict: True이면 최소 행 수 위반 시 SpecimenRemovalRefused 발생,
            False이면 변경 없이 입력을 그대로 반환

    Raises:
        IndexOutOfRange: 존재하지 않는 행 인덱스
        SpecimenRemovalRefused: strict=True이고 최소 행 수 아래로 내려가는 경우
    """
    size = results.specimen_count
    if not 0 <= index < size:
        raise IndexOutOfRange(index, size)

    if min_rows is None:
        min_rows = settings.min_specimen_rows
    if size <= min_rows:
        if strict:
            raise SpecimenRemovalRefused(size, min_rows)
        logger.debug(f"시편 행 삭제 무시: 현재 {size}행, 최소 {min_rows}행")
        return results

    rows = results.specimen_rows[:index] + results.specimen_rows[index + 1:]
    return results.replace(specimen_rows=rows)


def set_specimen_field(
    results: StructuredResults,
    index: int,
    field_id: str,
    value: Optional[Scalar],
) -> StructuredResults:
    """시편 행 하나의 칸 설정

    index가 바로 다음 위치(현재 행 수)이면 새 행을 만듭니다.
    임의 위치의 행 생성은 허용하지 않습니다 (빈 행 방지).

    Raises:
        IndexOutOfRange: 기존 행도 아니고 바로 다음 위치도 아닌 경우
    """
    size = results.specimen_count
    if not 0 <= index <= size:
        raise IndexOutOfRange(index, size)

    rows = [dict(r) for r in results.specimen_rows]
    if index == size:
        rows.append({})

    if value is None:
        rows[index].pop(field_id, None)
    else:
        rows[index][field_id] = value
    return results.replace(specimen_rows=rows)


def apply_to_all_specimens(
    results: StructuredResults,
    field_id: str,
    value: Optional[Scalar],
) -> StructuredResults:
    """모든 기존 시편 행에 같은 값 일괄 설정 (행 추가/삭제 없음)"""
    rows = []
    for r in results.specimen_rows:
        row = dict(r)
        if value is None:
            row.pop(field_id, None)
        else:
            row[field_id] = value
        rows.append(row)
    return results.replace(specimen_rows=rows)


def set_global_field(
    results: StructuredResults,
    field_id: str,
    value: Optional[Scalar],
) -> StructuredResults:
    """전역 값 하나 설정 (None이면 삭제)"""
    values = dict(results.global_values)
    if value is None:
        values.pop(field_id, None)
    else:
        values[field_id] = value
    return results.replace(global_values=values)


def set_multi_mode(results: StructuredResults, enabled: bool) -> StructuredResults:
    """암묵적 다중 시편 모드 전환 (켤 때 최소 1행 보장)"""
    rows = results.specimen_rows
    if enabled and not rows:
        rows = [{}]
    return results.replace(specimen_rows=rows, multi_mode=enabled)


__all__ = [
    'add_specimen',
    'remove_specimen',
    'set_specimen_field',
    'apply_to_all_specimens',
    'set_global_field',
    'set_multi_mode',
]
