# backend/hostly/core/log_config.py
from __future__ import annotations

import logging

LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """
    Root logger 에 콘솔 핸들러를 한 번만 붙인다.

    여러 번 호출되어도 (테스트에서 create_app 반복 호출 등) 핸들러가
    중복되지 않고 레벨만 갱신된다.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in root_logger.handlers:
        if getattr(handler, "_hostly_handler", False):
            return

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    console_handler._hostly_handler = True  # type: ignore[attr-defined]
    root_logger.addHandler(console_handler)
