"""ServiceProvider aggregate — the entity reviews are written against.

Carries the provider's rating aggregate (mean rating, review count and
per-star distribution). The aggregate is a materialized view over the
provider's active reviews: it is only ever written by ``record_rating``,
which the rating aggregator calls after a full recomputation.
"""

import json
from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String, Text

from reviews.domain import reviews
from reviews.provider.events import ProviderRatingRecalculated, ServiceProviderRegistered


def empty_distribution():
    return {str(score): 0 for score in range(1, 6)}


@reviews.aggregate
class ServiceProvider:
    """A garage, dealer, mechanic or other provider listed on the marketplace."""

    name = String(required=True, max_length=200)
    category = String(max_length=100)

    # Rating aggregate
    rating = Float(default=0.0)
    review_count = Integer(default=0)
    rating_distribution = Text()  # JSON: {"1": 0, "2": 0, "3": 0, "4": 0, "5": 0}
    rating_updated_at = DateTime()

    registered_at = DateTime()

    @invariant.post
    def name_must_not_be_blank(self):
        if self.name is not None and len(self.name.strip()) == 0:
            raise ValidationError({"name": ["Provider name cannot be empty"]})

    @invariant.post
    def review_count_cannot_be_negative(self):
        if self.review_count is not None and self.review_count < 0:
            raise ValidationError({"review_count": ["Review count cannot be negative"]})

    @classmethod
    def register(cls, name, category=None, provider_id=None):
        """Register a new service provider with an empty rating aggregate."""
        now = datetime.now(UTC)

        kwargs = {}
        if provider_id:
            kwargs["id"] = provider_id

        provider = cls(
            name=name,
            category=category,
            rating=0.0,
            review_count=0,
            rating_distribution=json.dumps(empty_distribution()),
            registered_at=now,
            **kwargs,
        )

        provider.raise_(
            ServiceProviderRegistered(
                provider_id=str(provider.id),
                name=name,
                category=category,
                registered_at=now,
            )
        )

        return provider

    @property
    def distribution(self) -> dict:
        if not self.rating_distribution:
            return empty_distribution()
        return json.loads(self.rating_distribution)

    def record_rating(self, rating, review_count, distribution):
        """Install a freshly computed rating aggregate.

        All fields change together so the provider never carries a rating
        from one review set and a count from another.
        """
        now = datetime.now(UTC)
        encoded = json.dumps(distribution)

        with atomic_change(self):
            self.rating = rating
            self.review_count = review_count
            self.rating_distribution = encoded
            self.rating_updated_at = now

        self.raise_(
            ProviderRatingRecalculated(
                provider_id=str(self.id),
                rating=rating,
                review_count=review_count,
                rating_distribution=encoded,
                recalculated_at=now,
            )
        )
