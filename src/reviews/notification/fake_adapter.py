"""Fake notification adapter — records notifications for testing."""

import threading
from uuid import uuid4

from reviews.notification.port import NotificationPort


class FakeNotificationAdapter(NotificationPort):
    """Notification adapter that records messages in memory for test assertions."""

    def __init__(self):
        self.sent: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Notification delivery failed"
        self._lock = threading.Lock()

    def configure(self, should_succeed: bool = True, failure_reason: str = "Notification delivery failed"):
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send(self, event_type: str, payload: dict) -> dict:
        if not self.should_succeed:
            return {
                "message_id": None,
                "status": "failed",
                "error": self.failure_reason,
            }

        message_id = f"notif-{uuid4().hex[:12]}"
        with self._lock:
            self.sent.append(
                {
                    "message_id": message_id,
                    "event_type": event_type,
                    "payload": payload,
                }
            )

        return {"message_id": message_id, "status": "sent"}

    def of_type(self, event_type: str) -> list[dict]:
        return [n for n in self.sent if n["event_type"] == event_type]

    def reset(self):
        """Clear recorded notifications (useful between tests)."""
        with self._lock:
            self.sent.clear()
        self.should_succeed = True
        self.failure_reason = "Notification delivery failed"
