"""
로깅 설정 유틸리티 테스트
"""

import logging
from unittest.mock import patch

from normlab.utils.log_config import DEFAULT_CONFIG_PATH, setup_logging


def test_default_config_exists():
    import os

    assert os.path.exists(DEFAULT_CONFIG_PATH)


def test_yaml_config_applied(tmp_path):
    cfg = tmp_path / "logging.yml"
    cfg.write_text(
        "version: 1\n"
        "disable_existing_loggers: false\n"
        "loggers:\n"
        "  normlab_log_config_probe:\n"
        "    level: DEBUG\n",
        encoding="utf-8",
    )
    with patch("normlab.utils.log_config.logging.basicConfig") as basic:
        setup_logging(str(cfg))
    assert logging.getLogger("normlab_log_config_probe").level == logging.DEBUG
    basic.assert_not_called()


def test_missing_file_falls_back(tmp_path):
    with patch("normlab.utils.log_config.logging.basicConfig") as basic:
        setup_logging(str(tmp_path / "missing.yml"), level="debug")
    basic.assert_called_once()
    assert basic.call_args.kwargs["level"] == "DEBUG"


def test_invalid_yaml_falls_back_with_warning(tmp_path, caplog):
    cfg = tmp_path / "broken.yml"
    cfg.write_text("version: [1\n", encoding="utf-8")
    with patch("normlab.utils.log_config.logging.basicConfig") as basic:
        with caplog.at_level(logging.WARNING, logger="normlab"):
            setup_logging(str(cfg))
    basic.assert_called_once()
    assert "broken.yml" in caplog.text


def test_level_applies_to_package_logger(tmp_path):
    cfg = tmp_path / "logging.yml"
    cfg.write_text(
        "version: 1\n"
        "disable_existing_loggers: false\n"
        "loggers:\n"
        "  normlab:\n"
        "    level: INFO\n",
        encoding="utf-8",
    )
    root = logging.getLogger()
    package = logging.getLogger("normlab")
    saved = (root.level, package.level)
    try:
        setup_logging(str(cfg), level="debug")
        assert package.level == logging.DEBUG
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(saved[0])
        package.setLevel(saved[1])
