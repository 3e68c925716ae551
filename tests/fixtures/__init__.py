"""테스트 픽스처 및 헬퍼 함수

이 모듈은 테스트에서 공통으로 사용하는 저장 결과 JSON 픽스처를 제공합니다.
"""

import json
from pathlib import Path
from typing import Any

# 테스트 픽스처 디렉토리 경로
FIXTURES_DIR = Path(__file__).parent
FIXTURES_RESULTS_DIR = FIXTURES_DIR / "results"


def get_fixture_results_path(filename: str) -> Path:
    """픽스처 결과 JSON 파일 경로를 반환합니다.

    Args:
        filename: 파일명 (예: "c083_two_cylinders.json")

    Returns:
        Path: 픽스처 파일의 절대 경로
    """
    return FIXTURES_RESULTS_DIR / filename


def load_fixture_results(filename: str) -> Any:
    """픽스처 결과 JSON을 읽어 반환합니다.

    Example:
        >>> flat = load_fixture_results("implicit_multi.json")
        >>> flat["_qty"]
        2
    """
    with open(get_fixture_results_path(filename), "r", encoding="utf-8") as f:
        return json.load(f)
