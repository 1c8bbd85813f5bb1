"""Domain events for the Review aggregate.

All events are versioned, immutable facts representing state changes.
"""

from protean.fields import DateTime, Identifier, Integer, String, Text

from reviews.domain import reviews


@reviews.event(part_of="Review")
class ReviewSubmitted:
    """A user reviewed a service provider."""

    __version__ = 1

    review_id = Identifier(required=True)
    provider_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    title = String(required=True)
    body = Text(required=True)
    submitted_at = DateTime(required=True)


@reviews.event(part_of="Review")
class ReviewMarkedHelpful:
    """Somebody found the review helpful."""

    __version__ = 1

    review_id = Identifier(required=True)
    provider_id = Identifier(required=True)
    helpful_count = Integer(required=True)
    marked_at = DateTime(required=True)


@reviews.event(part_of="Review")
class ReviewReported:
    """The review was flagged for moderation."""

    __version__ = 1

    review_id = Identifier(required=True)
    provider_id = Identifier(required=True)
    reported_at = DateTime(required=True)


@reviews.event(part_of="Review")
class ReviewRemoved:
    """The review was taken down and no longer counts toward the provider's rating."""

    __version__ = 1

    review_id = Identifier(required=True)
    provider_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    removed_at = DateTime(required=True)
