"""Review aggregate — a user's review of a service provider.

A review carries a 1-5 star rating plus a title and body. After submission it
can collect helpful marks and be reported; neither touches the rating, so
neither affects the provider's rating aggregate. Removal takes the review out
of the provider's review set (and frees the author to review again).

State Machine (2 states):
    ACTIVE → REMOVED
    REMOVED → (terminal)
"""

from datetime import UTC, datetime
from enum import Enum

from protean import Index, Q, atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text, ValueObject

from reviews.domain import reviews
from reviews.review.events import (
    ReviewMarkedHelpful,
    ReviewRemoved,
    ReviewReported,
    ReviewSubmitted,
)


class ReviewStatus(Enum):
    ACTIVE = "Active"
    REMOVED = "Removed"


@reviews.value_object(part_of="Review")
class Rating:
    """A star rating from 1 to 5."""

    score = Integer(required=True)

    @invariant.post
    def score_must_be_in_range(self):
        if self.score is not None and (self.score < 1 or self.score > 5):
            raise ValidationError({"score": ["Rating must be between 1 and 5"]})


@reviews.aggregate(
    indexes=[
        Index(
            "provider_id",
            "user_id",
            unique=True,
            where=Q(status=ReviewStatus.ACTIVE.value),
            name="uq_review_active_author",
        ),
        Index("provider_id", "status", "created_at"),
    ]
)
class Review:
    """A user's review of a service provider."""

    provider_id = Identifier(required=True)
    user_id = Identifier(required=True)

    rating = ValueObject(Rating, required=True)
    title = String(required=True, max_length=200)
    body = Text(required=True)

    helpful_count = Integer(default=0)
    reported = Boolean(default=False)

    status = String(choices=ReviewStatus, default=ReviewStatus.ACTIVE.value)

    created_at = DateTime()
    updated_at = DateTime()
    removed_at = DateTime()

    @invariant.post
    def title_must_not_be_empty(self):
        if self.title is not None and len(self.title.strip()) == 0:
            raise ValidationError({"title": ["Review title cannot be empty"]})

    @invariant.post
    def body_must_not_be_empty(self):
        if self.body is not None and len(self.body.strip()) == 0:
            raise ValidationError({"body": ["Review body cannot be empty"]})

    @invariant.post
    def helpful_count_cannot_be_negative(self):
        if self.helpful_count is not None and self.helpful_count < 0:
            raise ValidationError({"helpful_count": ["Helpful count cannot be negative"]})

    @classmethod
    def submit(cls, provider_id, user_id, rating, title, body):
        """Submit a new review."""
        now = datetime.now(UTC)

        review = cls(
            provider_id=provider_id,
            user_id=user_id,
            rating=Rating(score=rating),
            title=title.strip() if isinstance(title, str) else title,
            body=body.strip() if isinstance(body, str) else body,
            helpful_count=0,
            reported=False,
            status=ReviewStatus.ACTIVE.value,
            created_at=now,
            updated_at=now,
        )

        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                provider_id=str(provider_id),
                user_id=str(user_id),
                rating=rating,
                title=review.title,
                body=review.body,
                submitted_at=now,
            )
        )

        return review

    @property
    def is_active(self) -> bool:
        return ReviewStatus(self.status) == ReviewStatus.ACTIVE

    def _assert_active(self, action):
        if not self.is_active:
            raise ValidationError({"status": [f"Cannot {action} a removed review"]})

    def mark_helpful(self):
        """Add one helpful mark."""
        self._assert_active("mark helpful")

        now = datetime.now(UTC)
        with atomic_change(self):
            self.helpful_count = self.helpful_count + 1
            self.updated_at = now

        self.raise_(
            ReviewMarkedHelpful(
                review_id=str(self.id),
                provider_id=str(self.provider_id),
                helpful_count=self.helpful_count,
                marked_at=now,
            )
        )

    def report(self):
        """Flag the review for moderation. Reporting twice changes nothing."""
        self._assert_active("report")

        if self.reported:
            return

        now = datetime.now(UTC)
        with atomic_change(self):
            self.reported = True
            self.updated_at = now

        self.raise_(
            ReviewReported(
                review_id=str(self.id),
                provider_id=str(self.provider_id),
                reported_at=now,
            )
        )

    def remove(self):
        """Take the review out of the provider's review set."""
        self._assert_active("remove")

        now = datetime.now(UTC)
        with atomic_change(self):
            self.status = ReviewStatus.REMOVED.value
            self.removed_at = now
            self.updated_at = now

        self.raise_(
            ReviewRemoved(
                review_id=str(self.id),
                provider_id=str(self.provider_id),
                user_id=str(self.user_id),
                rating=self.rating.score,
                removed_at=now,
            )
        )
