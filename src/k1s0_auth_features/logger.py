"""structlog ベースのロガー設定"""

from __future__ import annotations

import logging
import sys

import structlog

from .models import LogSection

PACKAGE_LOGGER_NAME = "k1s0_auth_features"


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """stdlib ロガーを包んだ structlog ロガーを返す。

    configure_logging を呼ぶまでは stdlib のレベル判定に従うため、
    DEBUG の判定ログが標準出力に出ることはない。
    """
    return structlog.wrap_logger(
        logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger
    )


def configure_logging(section: LogSection) -> structlog.stdlib.BoundLogger:
    """log セクションに従ってパッケージのログ出力を構成する。

    k1s0_auth_features 配下の stdlib ロガーにだけハンドラを付け、
    レベル未満のイベントは整形前に filter_by_level で捨てる。
    """
    level = logging.getLevelName(section.level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.handlers = [handler]
    package_logger.setLevel(level)
    package_logger.propagate = False

    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if section.format == "json"
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
    return get_logger(PACKAGE_LOGGER_NAME)
