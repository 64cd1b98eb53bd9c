# app/core/logging_config.py

"""
애플리케이션 전역 로깅 설정 모듈입니다.

각 모듈은 `logging.getLogger(__name__)`으로 로거를 얻고,
핸들러/포맷 구성은 이 모듈의 `configure_logging()`이 수명 주기 시작 시 한 번 수행합니다.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

_configured = False


def configure_logging(level: str = "INFO") -> None:
    """루트 로거를 설정합니다. 여러 번 호출되어도 핸들러는 한 번만 추가됩니다."""
    global _configured
    root = logging.getLogger()
    root.setLevel(level.upper())
    if _configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    # SQL 출력은 DEBUG_MODE의 engine echo 설정으로만 제어합니다.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    _configured = True
