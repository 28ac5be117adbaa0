"""Logging configuration.

Every record carries the request id and acting identity of the HTTP request
it was emitted under ("-" outside a request). The middleware binds both via
bind_request_context(); RequestContextFilter copies them onto the record.
"""

import logging
import sys
from contextvars import ContextVar, Token

from casework.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s %(actor)s] %(message)s"

_request_id: ContextVar[str] = ContextVar("log_request_id", default="-")
_actor: ContextVar[str] = ContextVar("log_actor", default="-")


class RequestContextFilter(logging.Filter):
    """Attach request_id and actor to each record; never drops a record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get()
        record.actor = _actor.get()
        return True


def bind_request_context(request_id: str, actor: str = "-") -> tuple[Token, Token]:
    """Set the log context for the current task. Pass the result to reset_request_context."""
    return _request_id.set(request_id), _actor.set(actor)


def reset_request_context(tokens: tuple[Token, Token]) -> None:
    request_token, actor_token = tokens
    _request_id.reset(request_token)
    _actor.reset(actor_token)


def resolve_log_level(log_level: str | None, debug: bool) -> int:
    """LOG_LEVEL wins when set; otherwise DEBUG under debug, else INFO."""
    if log_level:
        level = logging.getLevelName(log_level.strip().upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {log_level}")
        return level
    return logging.DEBUG if debug else logging.INFO


def setup_logging() -> None:
    """Configure application-wide logging to stdout with request context."""
    settings = get_settings()
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestContextFilter())
    logging.basicConfig(
        level=resolve_log_level(settings.log_level, settings.debug),
        format=LOG_FORMAT,
        handlers=[handler],
    )


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Args:
        name: Usually __name__ of the calling module.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
