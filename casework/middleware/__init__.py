"""ASGI middleware."""

from casework.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
