"""Deterministic 판정 모듈 (Verdict)

규격 스키마와 구조화된 결과를 받아 시험 판정을 계산합니다.

판정 정책:
- 필수 필드 중 하나라도 미입력(None 또는 빈 문자열) → en_proceso
- 모두 입력되었고 숫자 필드 하나라도 한계값 밖 → rechazado
- 그 외 → aprobado

한계값 비교는 경계 포함 (value < min, value > max 만 실패).
boolean/select/text 필드는 입력 여부만 판정하고 한계값 비교에 참여하지 않습니다.
숫자로 해석되지 않는 값은 한계값 실패로 보지 않고 not_numeric으로 표시합니다.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from normlab.models.norms import NormSchema, NumberField
from normlab.models.results import StructuredResults
from normlab.services.norm_fields.coercion import coerce_to_float, is_blank
from normlab.services.norm_fields.encoder import specimen_key
from normlab.services.norm_fields.scope import effective_specimen_count, partition_fields


class Verdict(Enum):
    """시험 판정"""
    EN_PROCESO = "en_proceso"
    APROBADO = "aprobado"
    RECHAZADO = "rechazado"


class CellStatus(Enum):
    """입력 칸 하나의 판정 상태"""
    MISSING = "missing"
    IN_RANGE = "in_range"
    BELOW_MIN = "below_min"
    ABOVE_MAX = "above_max"
    NOT_NUMERIC = "not_numeric"
    NOT_APPLICABLE = "not_applicable"  # 한계값 비교 대상이 아닌 필드

    @property
    def is_out_of_range(self) -> bool:
        return self in (CellStatus.BELOW_MIN, CellStatus.ABOVE_MAX)


@dataclass
class CellAssessment:
    """입력 칸 하나(전역 필드 또는 시편 필드)의 판정 결과"""

    key: str  # 평면 맵 키 (fieldId 또는 fieldId_<n>)
    field_id: str
    specimen_index: Optional[int]
    value: Any
    required: bool
    status: CellStatus
    reason: str

    @property
    def blocks_completion(self) -> bool:
        """필수 필드 미입력 여부"""
        return self.required and self.status == CellStatus.MISSING

    def to_dict(self) -> dict:
        """딕셔너리로 변환"""
        return {
            "key": self.key,
            "field_id": self.field_id,
            "specimen_index": self.specimen_index,
            "value": self.value,
            "required": self.required,
            "status": self.status.value,
            "reason": self.reason,
        }


@dataclass
class Evaluation:
    """전체 판정 결과"""

    verdict: Verdict
    assessments: List[CellAssessment] = field(default_factory=list)

    @property
    def missing_keys(self) -> List[str]:
        """미입력 필수 칸의 평면 키"""
        return [a.key for a in self.assessments if a.blocks_completion]

    @property
    def out_of_range_keys(self) -> List[str]:
        """한계값을 벗어난 칸의 평면 키"""
        return [a.key for a in self.assessments if a.status.is_out_of_range]

    def to_dict(self) -> dict:
        """딕셔너리로 변환 (JSON 직렬화에 편리)"""
        return {
            "verdict": self.verdict.value,
            "missing_keys": self.missing_keys,
            "out_of_range_keys": self.out_of_range_keys,
            "assessments": [a.to_dict() for a in self.assessments],
        }


def check_limits(norm_field, value: Any) -> CellStatus:
    """값 하나를 필드 한계값과 비교

    Args:
        norm_field: 규격 필드
        value: 입력 값

    Returns:
        CellStatus
    """
    if is_blank(value):
        return CellStatus.MISSING
    if not isinstance(norm_field, NumberField):
        return CellStatus.NOT_APPLICABLE

    num = coerce_to_float(value)
    if num is None:
        return CellStatus.NOT_NUMERIC
    if norm_field.min_limit is not None and num < norm_field.min_limit:
        return CellStatus.BELOW_MIN
    if norm_field.max_limit is not None and num > norm_field.max_limit:
        return CellStatus.ABOVE_MAX
    return CellStatus.IN_RANGE


def _reason(norm_field, value: Any, status: CellStatus) -> str:
    if status == CellStatus.BELOW_MIN:
        return f"below_min ({value} < {norm_field.min_limit})"
    if status == CellStatus.ABOVE_MAX:
        return f"above_max ({value} > {norm_field.max_limit})"
    if status == CellStatus.IN_RANGE:
        lo = norm_field.min_limit if norm_field.min_limit is not None else "-inf"
        hi = norm_field.max_limit if norm_field.max_limit is not None else "+inf"
        return f"within_limits ({lo} <= {value} <= {hi})"
    if status == CellStatus.MISSING:
        return "required_missing" if norm_field.required else "optional_missing"
    return status.value


def assess_cell(norm_field, value: Any, key: str, specimen_index: Optional[int] = None) -> CellAssessment:
    """단일 입력 칸을 평가하여 CellAssessment 반환"""
    status = check_limits(norm_field, value)
    return CellAssessment(
        key=key,
        field_id=norm_field.id,
        specimen_index=specimen_index,
        value=value,
        required=norm_field.required,
        status=status,
        reason=_reason(norm_field, value, status),
    )


def evaluate(schema: NormSchema, results: StructuredResults) -> Evaluation:
    """규격 스키마 기준으로 결과 전체를 평가

    Args:
        schema: 규격 스키마
        results: 구조화된 결과

    Returns:
        Evaluation (verdict + 칸별 assessments)
    """
    global_fields, specimen_fields = partition_fields(schema, results.multi_mode)
    assessments: List[CellAssessment] = []

    for f in global_fields:
        assessments.append(assess_cell(f, results.global_values.get(f.id), key=f.id))

    n = effective_specimen_count(schema, results)
    if n > 0 and specimen_fields:
        for i in range(n):
            row = results.specimen_rows[i] if i < results.specimen_count else {}
            for f in specimen_fields:
                assessments.append(
                    assess_cell(f, row.get(f.id), key=specimen_key(f.id, i), specimen_index=i)
                )

    all_filled = not any(a.blocks_completion for a in assessments)
    all_pass = not any(a.status.is_out_of_range for a in assessments)

    if not all_filled:
        verdict = Verdict.EN_PROCESO
    elif not all_pass:
        verdict = Verdict.RECHAZADO
    else:
        verdict = Verdict.APROBADO

    return Evaluation(verdict=verdict, assessments=assessments)


def compute_verdict(schema: NormSchema, results: StructuredResults) -> Verdict:
    """판정만 반환 (en_proceso | aprobado | rechazado)"""
    return evaluate(schema, results).verdict


__all__ = [
    'Verdict',
    'CellStatus',
    'CellAssessment',
    'Evaluation',
    'check_limits',
    'assess_cell',
    'evaluate',
    'compute_verdict',
]
