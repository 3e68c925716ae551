"""참조 데이터 패키지
실험실에서 자주 쓰는 시험 규격의 기본 스키마를 제공합니다.
주요 모듈:
- catalog: 참조 규격 페이로드 및 캐시된 NormSchema 카탈로그
"""
from .catalog import (
    REFERENCE_NORMS,
    build_catalog,
    get_catalog,
    get_reference_norm,
    list_reference_norms,
)
__all__ = [
    "REFERENCE_NORMS",
    "build_catalog",
    "get_catalog",
    "get_reference_norm",
    "list_reference_norms",
]
