"""
애플리케이션 로깅 설정.

구성 ("ravel" 로거 아래):
- info 로그: stdout, INFO 이상 (ERROR 미만)
- error 로그: stderr, ERROR 이상
- 선택: logs/ 디렉터리에 파일 핸들러

주의: 렌더 코어는 로그를 남기지 않음. 여기 설정은 웹 레이어/부트스트랩용.
"""

import logging
import sys
from pathlib import Path

ROOT_LOGGER_NAME = "ravel"
LOG_FORMAT = "%(levelname)s\t%(asctime)s\t%(name)s\t%(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILENAME = "app.log"

# configure_logging이 추가한 핸들러 표시
_HANDLER_MARK = "_ravel_handler"


class _BelowLevelFilter(logging.Filter):
    """지정 레벨 미만만 통과 (info 스트림에서 에러 중복 방지)."""

    def __init__(self, level: int):
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def _mark(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_MARK, True)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    return handler


def configure_logging(debug: bool = False, logs_dir: Path | None = None) -> logging.Logger:
    """
    로거 설정 (재호출 시 이전 핸들러 교체).

    Args:
        debug: True면 DEBUG 레벨
        logs_dir: 지정 시 <logs_dir>/app.log 파일 핸들러 추가

    Returns:
        "ravel" 루트 로거
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.propagate = False

    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            logger.removeHandler(handler)
            handler.close()

    info_handler = logging.StreamHandler(sys.stdout)
    info_handler.addFilter(_BelowLevelFilter(logging.ERROR))
    logger.addHandler(_mark(info_handler))

    error_handler = logging.StreamHandler(sys.stderr)
    error_handler.setLevel(logging.ERROR)
    logger.addHandler(_mark(error_handler))

    if logs_dir is not None:
        logs_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(logs_dir / LOG_FILENAME, encoding="utf-8")
        logger.addHandler(_mark(file_handler))

    return logger


def get_logger(name: str) -> logging.Logger:
    """"ravel" 하위 로거 (예: get_logger("info") → "ravel.info")."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
