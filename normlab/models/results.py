"""시험 결과 값 타입

- FlatResultMap: 저장소에 보관되는 평면 결과 맵 (fieldId, fieldId_<n>, _qty, _is_multi_implicit)
- StructuredResults: 결과 입력 중 메모리에서 다루는 구조화된 값 (전역 값 + 시편 행 목록)
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Union

from typing_extensions import TypeAlias

from normlab.models.norms import RESERVED_KEYS

Scalar: TypeAlias = Union[bool, int, float, str]
"""JSON 호환 결과 값"""

ValueMap: TypeAlias = Dict[str, Scalar]
FlatResultMap: TypeAlias = Dict[str, Any]


@dataclass(frozen=True)
class StructuredResults:
    """한 시료의 결과 입력 작업 상태

    모든 편집 연산은 새 인스턴스를 반환하며 기존 인스턴스를 변경하지 않습니다.
    """

    global_values: ValueMap = field(default_factory=dict)  # field id -> 값 (입력된 필드만)
    specimen_rows: List[ValueMap] = field(default_factory=list)  # 인덱스 = 시편 번호 (0부터)
    multi_mode: bool = False  # 암묵적 다중 시편 모드

    def __post_init__(self):
        reserved = sorted(k for k in self.global_values if k in RESERVED_KEYS)
        if reserved:
            raise ValueError(f"예약된 키는 전역 값으로 저장할 수 없습니다: {reserved}")
        # 호출자의 dict/list와 공유하지 않도록 복사
        object.__setattr__(self, 'global_values', dict(self.global_values))
        object.__setattr__(self, 'specimen_rows', [dict(r) for r in self.specimen_rows])

    @classmethod
    def empty(cls, multi_mode: bool = False) -> 'StructuredResults':
        """빈 결과 (multi_mode이면 편집용 빈 행 1개 포함)"""
        return cls(specimen_rows=[{}] if multi_mode else [], multi_mode=multi_mode)

    @property
    def specimen_count(self) -> int:
        return len(self.specimen_rows)

    def row(self, index: int) -> ValueMap:
        """시편 행 복사본 반환"""
        return dict(self.specimen_rows[index])

    def replace(self, **changes: Any) -> 'StructuredResults':
        """일부 속성만 바꾼 새 인스턴스"""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """딕셔너리로 변환"""
        return {
            'global_values': dict(self.global_values),
            'specimen_rows': [dict(r) for r in self.specimen_rows],
            'multi_mode': self.multi_mode,
        }


__all__ = [
    'Scalar',
    'ValueMap',
    'FlatResultMap',
    'StructuredResults',
]
