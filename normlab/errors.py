"""규격 필드 엔진 오류 분류

- InvalidSchema: 규격 스키마 자체가 잘못됨 (설정 버그, 로드 시점에 발생)
- IndexOutOfRange: 존재하지 않고 바로 다음 위치도 아닌 시편 인덱스
- SpecimenRemovalRefused: 최소 시편 행 수 아래로 삭제 시도 (strict 모드)
- MalformedFlatKey: 디코딩 중 건너뛴 키 (발생시키지 않고 경고로 수집)
"""
from __future__ import annotations

from typing import List, Optional


class NormFieldError(Exception):
    """규격 필드 엔진 기본 예외"""


class InvalidSchema(NormFieldError, ValueError):
    """규격 스키마 검증 실패"""

    def __init__(self, problems: List[str], norm_id: Optional[str] = None):
        self.problems = list(problems)
        self.norm_id = norm_id
        where = f" ({norm_id})" if norm_id else ""
        super().__init__(f"잘못된 규격 스키마{where}: " + "; ".join(self.problems))


class IndexOutOfRange(NormFieldError, IndexError):
    """시편 인덱스 범위 오류"""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(
            f"시편 인덱스 범위 초과: {index} (현재 시편 수 {size}, 허용 범위 0..{size})"
        )


class SpecimenRemovalRefused(NormFieldError):
    """최소 시편 행 수 때문에 삭제 거부"""

    def __init__(self, size: int, min_rows: int):
        self.size = size
        self.min_rows = min_rows
        super().__init__(
            f"시편 행을 삭제할 수 없습니다: 현재 {size}행, 최소 {min_rows}행 필요"
        )


class MalformedFlatKey(NormFieldError):
    """시편 키처럼 보이지만 인덱스가 유효하지 않은 평면 키

    디코더는 이 예외를 발생시키지 않고 DecodeResult.warnings에 수집합니다.
    """

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"잘못된 결과 키 '{key}': {reason}")

    def to_dict(self) -> dict:
        """딕셔너리로 변환"""
        return {"key": self.key, "reason": self.reason}


class NormNotFound(NormFieldError, KeyError):
    """저장소에 규격이 없음"""


class SampleNotFound(NormFieldError, KeyError):
    """저장소에 시료가 없음"""


__all__ = [
    "NormFieldError",
    "InvalidSchema",
    "IndexOutOfRange",
    "SpecimenRemovalRefused",
    "MalformedFlatKey",
    "NormNotFound",
    "SampleNotFound",
]
