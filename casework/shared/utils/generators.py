"""Identifier generation.

Records get full-length CUID2s; request ids for log correlation use a shorter
CUID that still satisfies the middleware's header pattern.
"""

from cuid2 import Cuid

RECORD_ID_LENGTH = 24
REQUEST_ID_LENGTH = 16

_record_ids = Cuid(length=RECORD_ID_LENGTH)
_request_ids = Cuid(length=REQUEST_ID_LENGTH)


def generate_cuid() -> str:
    """Return a new id for a document, quote, history entry or requirement request."""
    return _record_ids.generate()


def generate_request_id() -> str:
    return _request_ids.generate()
