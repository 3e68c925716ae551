"""결과 값 강제 변환 유틸리티

입력 폼에서 들어오는 값은 문자열("25.4"), 숫자, 불리언이 섞여 있습니다.
필수 입력 판정과 한계값 비교 전에 이 모듈로 정규화합니다.
"""

import math
from typing import Any

from normlab.settings import settings


def is_blank(val: Any) -> bool:
    """필수 입력 판정에서 '미입력'으로 볼 값인지 (None 또는 빈 문자열)

    공백 문자열과 False는 입력된 값으로 취급합니다.
    """
    return val is None or val == ""


def coerce_to_float(val: Any, allow_decimal_comma: bool | None = None) -> float | None:
    """숫자로 변환, 불가하면 None

    불리언, NaN/무한대는 숫자로 보지 않습니다.
    """
    if val is None or isinstance(val, bool):
        return None
    if allow_decimal_comma is None:
        allow_decimal_comma = settings.allow_decimal_comma

    if isinstance(val, (int, float)):
        num = float(val)
    elif isinstance(val, str):
        s = val.strip()
        if allow_decimal_comma:
            s = s.replace(",", ".")
        try:
            num = float(s)
        except ValueError:
            return None
    else:
        return None

    return num if math.isfinite(num) else None


def coerce_to_count(val: Any) -> int | None:
    """시편 수로 변환 (0 이상의 정수만), 불가하면 None"""
    num = coerce_to_float(val, allow_decimal_comma=False)
    if num is None or num < 0 or not num.is_integer():
        return None
    return int(num)


def is_truthy_flag(val: Any) -> bool:
    """저장된 플래그 값이 참인지 (True 또는 문자열 "true")"""
    if isinstance(val, bool):
        return val
    if isinstance(val, str):
        return val.strip().lower() == "true"
    return False
