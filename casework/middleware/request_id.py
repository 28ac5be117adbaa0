"""Request ID and access log middleware.

Forwards a sane client X-Request-ID (or generates one), echoes it on the
response, binds it with the acting identity into the log context for the
lifetime of the request, and logs one line per request with status and
duration. Raw ASGI so streaming responses pass through untouched.
"""

import re
import time
from typing import Callable

from casework.shared.telemetry.logging import (
    bind_request_context,
    get_logger,
    reset_request_context,
)
from casework.shared.utils.generators import generate_request_id

logger = get_logger("casework.access")

REQUEST_ID_MAX_LENGTH = 64
REQUEST_ID_ALLOWED_PATTERN = re.compile(
    r"^[a-zA-Z0-9_-]{1," + str(REQUEST_ID_MAX_LENGTH) + r"}$"
)
ACTOR_HEADER = "x-actor-id"


def _get_header(scope: dict, name: str) -> str | None:
    """Return first header value for name (case-insensitive). Headers are (bytes, bytes)."""
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("utf-8", errors="replace")
    return None


def sanitize_request_id(raw: str | None) -> str:
    """Return raw if it is safe to log; otherwise a freshly generated id."""
    if not raw or not REQUEST_ID_ALLOWED_PATTERN.match(raw.strip()):
        return generate_request_id()
    return raw.strip()


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Attach a request id to scope state and the response; log the request."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = sanitize_request_id(_get_header(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id
        raw_actor = (_get_header(scope, ACTOR_HEADER) or "").strip()
        actor_id = raw_actor if REQUEST_ID_ALLOWED_PATTERN.match(raw_actor) else "-"
        tokens = bind_request_context(request_id, actor_id)
        started = time.perf_counter()
        status_code = 500

        async def send_wrapper(message: dict) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                headers = list(message.get("headers", []))
                headers.append((header_name.encode(), request_id.encode()))
                message["headers"] = headers
            await send(message)

        try:
            await app(scope, receive, send_wrapper)
        finally:
            logger.info(
                "%s %s -> %s (%.1fms)",
                scope.get("method"),
                scope.get("path"),
                status_code,
                (time.perf_counter() - started) * 1000,
            )
            reset_request_context(tokens)

    return asgi_app
