"""ロギング設定.

structlog を標準 logging の上に構成する。各モジュールは
``get_logger(__name__)`` でロガーを取得する。
"""

from __future__ import annotations

import logging
import sys

from typing import Any

import structlog


_configured = False


def setup_logging(level: str = "INFO", json_output: bool = False) -> None:
    """structlog と標準 logging を初期化する.

    Args:
        level: ログレベル名（"DEBUG", "INFO" など）
        json_output: True の場合は JSON 形式、False の場合はコンソール形式で出力
    """
    global _configured

    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
        force=True,
    )

    renderer: Any = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str) -> Any:
    """モジュール用のロガーを取得する."""
    return structlog.get_logger(name)


def is_configured() -> bool:
    """setup_logging が呼ばれたかどうか."""
    return _configured
