"""애플리케이션 설정 관리"""

from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# .env 파일 로드
load_dotenv()

# 프로젝트 루트 디렉토리
ROOT_DIR = Path(__file__).parent.parent


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 로깅 설정
    log_level: str = Field(default="INFO", description="로그 레벨")
    log_format: str = Field(
        default="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        description="로그 포맷 문자열",
    )

    # 시편 수량 필드 탐지 규칙
    quantity_id_keywords: List[str] = Field(
        default_factory=lambda: ["qty"],
        description="수량 필드로 간주할 필드 id 부분 문자열",
    )
    quantity_name_keywords: List[str] = Field(
        default_factory=lambda: ["cantidad", "número"],
        description="수량 필드로 간주할 필드 이름 부분 문자열 (소문자 비교)",
    )

    # 시편 행 편집 설정
    min_specimen_rows: int = Field(
        default=1, description="remove_specimen이 유지하는 최소 시편 행 수"
    )
    max_specimen_rows: int = Field(
        default=100, description="저장된 결과에서 복원/판정하는 최대 시편 행 수"
    )

    # 숫자 판정 설정
    allow_decimal_comma: bool = Field(
        default=True, description="'6,79' 같은 쉼표 소수점 허용 여부"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# 전역 설정 인스턴스
settings = Settings()


def validate_settings() -> dict[str, str]:
    """설정 유효성 검사 및 경고 메시지 반환"""
    warnings = {}

    if not settings.quantity_id_keywords and not settings.quantity_name_keywords:
        warnings["quantity"] = (
            "수량 필드 키워드가 비어 있어 명시적 수량 필드를 찾지 않습니다."
        )

    if settings.min_specimen_rows < 0:
        warnings["specimens"] = (
            f"min_specimen_rows는 0 이상이어야 합니다: {settings.min_specimen_rows}"
        )

    if settings.max_specimen_rows < max(settings.min_specimen_rows, 1):
        warnings["specimens_max"] = (
            f"max_specimen_rows가 너무 작습니다: {settings.max_specimen_rows}"
        )

    return warnings
