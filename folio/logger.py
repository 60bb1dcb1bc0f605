"""Logging setup built on loguru.

Standard library logging (uvicorn, aiosqlite) is routed into loguru so every
record shares the same format and correlation id.
"""
import logging
import sys
from contextvars import ContextVar

from loguru import logger

from .config import LOG_FILE, LOG_LEVEL

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[request_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_REQUEST_ID: ContextVar[str] = ContextVar("request_id", default="-")


class _InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        level = logging.getLevelName(record.levelno)
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def _stamp_request_id(record) -> None:
    record["extra"]["request_id"] = _REQUEST_ID.get()


def set_request_id(value: str | None) -> None:
    _REQUEST_ID.set(value or "-")


def clear_request_id() -> None:
    _REQUEST_ID.set("-")


def setup_logging(level: str | None = None, log_file: str | None = None) -> None:
    """Rebuild loguru sinks and intercept standard logging.

    Args:
        level: Minimum level name; defaults to FOLIO_LOG_LEVEL
        log_file: Optional path for a rotating file sink; defaults to FOLIO_LOG_FILE
    """
    level = (level or LOG_LEVEL).upper()
    log_file = log_file or LOG_FILE

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=_FMT,
        colorize=True,
        backtrace=False,
        diagnose=False,
    )
    if log_file:
        logger.add(
            log_file,
            level=level,
            format=_FMT,
            colorize=False,
            backtrace=False,
            diagnose=False,
            enqueue=True,
            rotation="10 MB",
            retention=5,
            encoding="utf-8",
        )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


logger.configure(extra={"request_id": "-"}, patcher=_stamp_request_id)

__all__ = ["logger", "setup_logging", "set_request_id", "clear_request_id"]
