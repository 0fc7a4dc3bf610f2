# app/core/logging_config.py

"""
애플리케이션 로깅 설정 모듈입니다.

각 모듈은 `logging.getLogger(__name__)`으로 로거를 얻고,
루트 로거의 레벨과 포맷은 애플리케이션 시작 시 한 번만 설정합니다.
"""

import sys
import logging

from app.core.config import settings

_configured = False


def setup_logging(level: str | None = None) -> None:
    """
    루트 로거에 콘솔 핸들러를 붙이고 레벨을 설정합니다.
    여러 번 호출되어도 핸들러는 한 번만 추가됩니다.
    """
    global _configured
    log_level = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    if _configured:
        return

    fmt = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(fmt)
    root_logger.addHandler(console_handler)

    # SQL 에코는 DEBUG_MODE에서만 엔진이 직접 출력합니다.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    _configured = True
    logging.getLogger(__name__).debug("로깅 초기화 완료 (level=%s)", logging.getLevelName(log_level))
