"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state. State tracks entity IDs
returned by creation endpoints so follow-up operations can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ReviewerState:
    """Tracks a single simulated reviewer's journey."""

    user_id: str
    provider_id: str | None = None
    review_id: str | None = None
    duplicates_rejected: int = 0


@dataclass
class HotProviderState:
    """Shared provider ids that many users pile reviews onto."""

    provider_ids: list[str] = field(default_factory=list)
