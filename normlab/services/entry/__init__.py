"""결과 입력 서비스 패키지

주요 모듈:
- store: 외부 결과 저장소 인터페이스 (BaseResultStore), 메모리 구현체
- entry_service: 로드 → 디코딩 → 판정 → 인코딩 → 저장 오케스트레이션
- compatibility: 시료 분류별 적용 가능 규격 필터
"""

from .store import BaseResultStore, InMemoryResultStore, SampleRecord, load_sample_record
from .entry_service import ResultEntry, ResultEntryService, SubmitResult
from .compatibility import compatible_norms, is_compatible

__all__ = [
    # store
    "BaseResultStore",
    "InMemoryResultStore",
    "SampleRecord",
    "load_sample_record",
    # entry_service
    "ResultEntry",
    "ResultEntryService",
    "SubmitResult",
    # compatibility
    "compatible_norms",
    "is_compatible",
]
