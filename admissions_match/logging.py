"""
Structured logging for the recommendation engine.

Development renders readable console lines; anything else emits one JSON
object per line. Every entry carries the app name and the active scoring
version, so a stored recommendation can be traced back to the weights that
produced it.

Usage:
    from admissions_match.logging import get_logger, log_context

    logger = get_logger("services.recalculation")
    with log_context(student_id=42):
        logger.info("recalculation_started")
"""

import logging
import sys
import time
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from .constants import SCORING_VERSION

F = TypeVar("F", bound=Callable[..., Any])

APP_NAME = "admissions_match"

_configured: tuple[str, bool] | None = None


def _use_console_renderer() -> bool:
    from .config import get_settings

    settings = get_settings()
    return settings.debug or settings.environment == "development"


def add_engine_context(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("app", APP_NAME)
    event_dict.setdefault("scoring_version", SCORING_VERSION)
    return event_dict


def build_processors(console: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        add_engine_context,
    ]
    if console:
        processors.append(
            structlog.dev.ConsoleRenderer(exception_formatter=structlog.dev.plain_traceback)
        )
    else:
        processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    return processors


def configure_logging(level: str = "INFO", console: bool | None = None) -> None:
    """
    Route structlog through stdlib logging at ``level``.

    ``console`` defaults to the settings (DEBUG or ENV=development). Calling
    again with the same level and renderer does nothing, so the CLI can
    reconfigure after loading .env even though ``get_logger`` configured
    lazily at import.
    """
    global _configured

    level = level.upper()
    if console is None:
        console = _use_console_renderer()
    if _configured == (level, console) and structlog.is_configured():
        return

    logging.basicConfig(format="%(message)s", stream=sys.stdout)
    logging.getLogger().setLevel(level)

    structlog.configure(
        processors=build_processors(console),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = (level, console)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    if not structlog.is_configured():
        configure_logging()
    return structlog.stdlib.get_logger(name)


def log_context(**values: Any):
    """Bind ``values`` to every entry logged inside the ``with`` block."""
    return structlog.contextvars.bound_contextvars(**values)


def _elapsed_ms(started: float) -> float:
    return round((time.monotonic() - started) * 1000, 1)


def log_duration(event: str) -> Callable[[F], F]:
    """
    Log ``<event>_finished`` with the elapsed time, or ``<event>_failed`` and re-raise.

    An integer return value (a processed count, say) is logged as ``result``.
    """

    def decorator(func: F) -> F:
        log = get_logger(func.__module__)

        @wraps(func)
        def wrapper(*args, **kwargs):
            started = time.monotonic()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                log.error(
                    f"{event}_failed",
                    duration_ms=_elapsed_ms(started),
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                raise

            fields: dict[str, Any] = {"duration_ms": _elapsed_ms(started)}
            if isinstance(result, int):
                fields["result"] = result
            log.info(f"{event}_finished", **fields)
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


__all__ = ["configure_logging", "get_logger", "log_context", "log_duration"]
