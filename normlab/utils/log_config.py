"""
로깅 설정 유틸리티

- setup_logging(): config/logging.yml 로깅 설정을 불러오고, 없으면 settings 기반 기본 로깅으로 대체

라이브러리 코드는 임포트 시점에 로깅을 설정하지 않습니다.
스크립트/애플리케이션 진입점에서 한 번 호출합니다.
"""
from __future__ import annotations

import logging
import logging.config
import os
from typing import Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from normlab.settings import ROOT_DIR, settings

DEFAULT_CONFIG_PATH = os.path.join(str(ROOT_DIR), "config", "logging.yml")


def setup_logging(config_path: Optional[str] = None, level: Optional[str] = None) -> None:
    """로깅 설정을 초기화합니다.

    - config_path (기본: 프로젝트 루트의 config/logging.yml) 파일이 있으면 dictConfig로 구성합니다.
    - level을 주면 루트 로거와 normlab 로거 레벨을 함께 바꿉니다.
    - 없거나 잘못된 파일이면 settings.log_level / settings.log_format으로 basicConfig를 호출합니다.

    Args:
        config_path: 로깅 YAML 파일 경로
        level: 로그 레벨 (기본: settings.log_level)
    """
    cfg_path = config_path or DEFAULT_CONFIG_PATH
    error: Optional[Exception] = None

    if os.path.exists(cfg_path):
        try:
            yaml = YAML(typ="safe")
            with open(cfg_path, "r", encoding="utf-8") as f:
                data = yaml.load(f) or {}
            if isinstance(data, dict) and data:
                logging.config.dictConfig(data)
                if level:
                    # 패키지 로거는 YAML에서 propagate: false 이므로 함께 조정
                    for name in ("", "normlab"):
                        logging.getLogger(name).setLevel(level.upper())
                return
        except (OSError, YAMLError, ValueError, TypeError) as e:
            error = e

    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=settings.log_format,
    )
    if error is not None:
        logging.getLogger(__name__).warning(f"로깅 설정 파일을 읽지 못했습니다 ({cfg_path}): {error}")
