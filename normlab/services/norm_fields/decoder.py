"""평면 결과 맵 디코더 (FlatResultMap → StructuredResults)

저장된 평면 맵의 키를 다음 규칙으로 분류합니다.

1. 스키마의 필드 id와 정확히 같은 키 → 전역 값
2. "<필드 id>_<정수>" 형태 → 시편 값 (정수는 0 이상의 정규 십진수, 예: "0", "12")
3. "<필드 id>_<그 외>" 형태 (예: "_-1", "_1.5", "_01", "_x") → MalformedFlatKey 경고 후 무시
   인덱스가 max_specimen_rows 이상인 키도 경고 후 무시
4. 예약 키 (_qty, _is_multi_implicit) → 시편 수/모드 판정에만 사용
5. 그 밖의 키 → 전역 값으로 보존 (알 수 없는 레거시 키 포함)

과거 데이터에는 잘못된 키가 남아 있을 수 있으므로 키 하나 때문에
디코딩 전체를 중단하지 않습니다.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from normlab.errors import MalformedFlatKey
from normlab.models.norms import RESERVED_KEYS, RESERVED_MULTI_KEY, RESERVED_QTY_KEY, NormSchema
from normlab.models.results import StructuredResults
from normlab.services.norm_fields.coercion import coerce_to_count, is_truthy_flag
from normlab.settings import settings

logger = logging.getLogger(__name__)

_CANONICAL_INDEX_RE = re.compile(r"^(0|[1-9][0-9]*)$")


@dataclass
class DecodeResult:
    """디코딩 결과 (구조화된 값 + 무시된 키 경고)"""

    results: StructuredResults
    warnings: List[MalformedFlatKey] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)


def split_specimen_key(key: str, field_ids: Any) -> Optional[Tuple[str, str]]:
    """키를 (필드 id, 접미사)로 분리

    가장 긴 필드 id 접두사를 우선합니다 ("f_c083_1_0" → ("f_c083_1", "0")).

    Args:
        key: 평면 맵 키
        field_ids: 스키마 필드 id 집합

    Returns:
        (필드 id, 접미사) 또는 None (알려진 필드 id + "_" 로 시작하지 않음)
    """
    pos = key.rfind("_")
    while pos > 0:
        prefix = key[:pos]
        if prefix in field_ids:
            return prefix, key[pos + 1:]
        pos = key.rfind("_", 0, pos)
    return None


def parse_specimen_index(suffix: str) -> Optional[int]:
    """정규 십진 표기의 0 이상 정수만 인덱스로 인정"""
    if _CANONICAL_INDEX_RE.match(suffix):
        return int(suffix)
    return None


def _note(warnings: List[MalformedFlatKey], key: str, reason: str) -> None:
    note = MalformedFlatKey(key, reason)
    logger.warning(str(note))
    warnings.append(note)


def decode_results(
    schema: NormSchema,
    flat: Optional[Mapping[str, Any]],
    max_rows: Optional[int] = None,
) -> DecodeResult:
    """평면 결과 맵을 구조화된 결과로 복원

    Args:
        schema: 규격 스키마
        flat: 저장된 평면 결과 맵 (None 또는 빈 맵 허용)
        max_rows: 복원할 최대 시편 행 수 (기본: settings.max_specimen_rows)

    Returns:
        DecodeResult (results, warnings)
    """
    if not flat:
        return DecodeResult(results=StructuredResults())

    if max_rows is None:
        max_rows = settings.max_specimen_rows
    warnings: List[MalformedFlatKey] = []
    field_ids = set(schema.field_ids)

    global_values: Dict[str, Any] = {}
    entries: List[Tuple[str, int, Any, str]] = []  # (필드 id, 인덱스, 값, 원래 키)

    for key, value in flat.items():
        if key in RESERVED_KEYS:
            continue
        if key in field_ids:
            global_values[key] = value
            continue

        split = split_specimen_key(key, field_ids)
        if split is None:
            global_values[key] = value
            continue

        field_id, suffix = split
        index = parse_specimen_index(suffix)
        if index is None:
            _note(warnings, key, f"시편 인덱스가 0 이상의 정수가 아님: '{suffix}'")
            continue
        if index >= max_rows:
            _note(warnings, key, f"index_beyond_limit (max_specimen_rows={max_rows})")
            continue
        entries.append((field_id, index, value, key))

    multi_mode = is_truthy_flag(flat.get(RESERVED_MULTI_KEY))
    if multi_mode:
        raw_qty = flat.get(RESERVED_QTY_KEY)
        count = coerce_to_count(raw_qty) if raw_qty is not None else 0
        if count is None:
            _note(warnings, RESERVED_QTY_KEY, f"시편 수가 0 이상의 정수가 아님: {raw_qty!r}")
            count = 0
        elif count > max_rows:
            _note(warnings, RESERVED_QTY_KEY, f"시편 수가 최대 행 수를 넘음: {count} > {max_rows}")
            count = max_rows
    else:
        count = max((index for _, index, _, _ in entries), default=-1) + 1

    rows: List[Dict[str, Any]] = [{} for _ in range(count)]
    for field_id, index, value, key in entries:
        if index >= count:
            _note(warnings, key, f"index_beyond_quantity (_qty={count})")
            continue
        rows[index][field_id] = value

    # 명시적 다중 모드에서는 편집할 행이 최소 1개 있어야 함
    if multi_mode and not rows:
        rows = [{}]

    results = StructuredResults(
        global_values=global_values,
        specimen_rows=rows,
        multi_mode=multi_mode,
    )
    logger.debug(
        f"결과 디코딩: 전역 {len(global_values)}개, 시편 {len(rows)}행, "
        f"multi_mode={multi_mode}, 경고 {len(warnings)}개"
    )
    return DecodeResult(results=results, warnings=warnings)


def decode(schema: NormSchema, flat: Optional[Mapping[str, Any]]) -> StructuredResults:
    """decode_results()의 간편 버전 (경고는 로그로만 남김)"""
    return decode_results(schema, flat).results


__all__ = [
    'DecodeResult',
    'split_specimen_key',
    'parse_specimen_index',
    'decode_results',
    'decode',
]
