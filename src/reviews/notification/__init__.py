"""Notification adapter registry and best-effort dispatch.

Uses the fake adapter by default; a real adapter (email, push) can be
installed with ``set_notifier`` at application startup.
"""

import structlog

from reviews.notification.port import NotificationPort
from reviews.utils.config import notifications_enabled

logger = structlog.get_logger(__name__)

_notifier: NotificationPort | None = None


def get_notifier() -> NotificationPort:
    """Return the configured notification adapter (process-wide singleton)."""
    global _notifier
    if _notifier is None:
        from reviews.notification.fake_adapter import FakeNotificationAdapter

        _notifier = FakeNotificationAdapter()
    return _notifier


def set_notifier(notifier: NotificationPort) -> None:
    global _notifier
    _notifier = notifier


def reset_notifier() -> None:
    """Drop the configured adapter (useful for testing)."""
    global _notifier
    _notifier = None


def notify_review_event(event_type: str, **payload) -> None:
    """Fire-and-forget notification. Delivery problems are logged, never raised."""
    if not notifications_enabled():
        return

    try:
        result = get_notifier().send(event_type, payload)
    except Exception as e:
        logger.warning(
            "Notification dispatch raised",
            event_type=event_type,
            error=str(e),
        )
        return

    if result.get("status") != "sent":
        logger.warning(
            "Notification dispatch failed",
            event_type=event_type,
            error=result.get("error", "Unknown dispatch error"),
        )
