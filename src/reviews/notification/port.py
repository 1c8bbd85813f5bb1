"""Notification port — abstract interface for review notification dispatch."""

from abc import ABC, abstractmethod


class NotificationPort(ABC):
    """Abstract interface for notification adapters."""

    @abstractmethod
    def send(self, event_type: str, payload: dict) -> dict:
        """Deliver a notification about a review event.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
