"""Shared utilities: datetime and generators."""

from casework.shared.utils.datetime import ensure_utc, utc_now
from casework.shared.utils.generators import generate_cuid, generate_request_id

__all__ = [
    "generate_cuid",
    "generate_request_id",
    "utc_now",
    "ensure_utc",
]
