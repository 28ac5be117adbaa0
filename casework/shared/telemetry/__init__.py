from casework.shared.telemetry.logging import (
    bind_request_context,
    get_logger,
    reset_request_context,
    setup_logging,
)

__all__ = ["bind_request_context", "get_logger", "reset_request_context", "setup_logging"]
