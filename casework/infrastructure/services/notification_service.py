"""Requirement notifications: log-only sender."""

from __future__ import annotations

import logging
from datetime import datetime

from casework.shared.telemetry.logging import get_logger
from casework.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class LogOnlyNotificationService:
    """INotificationService implementation that logs instead of sending email/SMS.

    Use when no delivery channel is configured. Production can swap in an
    SMTP or queue-based implementation.
    """

    async def notify(
        self,
        target_id: str,
        message: str,
        deadline: datetime | None = None,
    ) -> None:
        """Log the notification; nothing is delivered."""
        logger.info(
            "Notify: would send to %s (deadline=%s, message=%r)",
            target_id,
            deadline.isoformat() if deadline else None,
            (message or "")[:80],
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Notify full message (at %s): %s", utc_now().isoformat(), message)
