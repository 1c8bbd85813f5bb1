"""Rating aggregation — keeps each provider's rating in step with its reviews.

A recomputation reads the provider's full set of active reviews, derives the
mean rating, the review count and the per-star distribution, and installs all
of them on the provider in a single write.

Recomputations for the same provider are serialized on a per-provider lock
that covers both the read and the write, so a recomputation working from an
older review set can never land after one working from a newer set.
Different providers recompute in parallel.

A recomputation that cannot finish (lock timeout, store failure) raises
``RatingRecomputeFailed`` and writes nothing; the previously installed
aggregate stays in place until the next successful recomputation.
"""

from dataclasses import dataclass, field

import structlog
from protean import UnitOfWork
from protean.utils.globals import current_domain

from reviews.provider.provider import ServiceProvider, empty_distribution
from reviews.review.review import Review
from reviews.utils.config import rating_lock_timeout
from reviews.utils.locks import LockTimeout, provider_locks

logger = structlog.get_logger(__name__)


class RatingRecomputeFailed(Exception):
    """A provider's rating aggregate could not be recomputed."""

    def __init__(self, provider_id, reason):
        self.provider_id = str(provider_id)
        self.reason = reason
        super().__init__(f"Rating recompute failed for provider {provider_id}: {reason}")


@dataclass(frozen=True)
class RatingSummary:
    rating: float = 0.0
    review_count: int = 0
    distribution: dict = field(default_factory=empty_distribution)


def compute_rating(scores) -> RatingSummary:
    """Summarize a collection of 1-5 star scores."""
    scores = list(scores)
    if not scores:
        return RatingSummary()

    distribution = empty_distribution()
    for score in scores:
        distribution[str(score)] += 1

    return RatingSummary(
        rating=sum(scores) / len(scores),
        review_count=len(scores),
        distribution=distribution,
    )


def recompute_provider_rating(provider_id, timeout: float | None = None) -> RatingSummary:
    """Recompute and install the rating aggregate of one provider.

    Raises ``RatingRecomputeFailed`` when the recomputation does not complete.
    """
    if timeout is None:
        timeout = rating_lock_timeout()

    key = str(provider_id)
    try:
        with provider_locks.hold(key, timeout=timeout):
            with UnitOfWork():
                reviews = current_domain.repository_for(Review).for_provider(key, newest_first=False)
                summary = compute_rating(review.rating.score for review in reviews)

                provider_repo = current_domain.repository_for(ServiceProvider)
                provider = provider_repo.get(key)
                provider.record_rating(
                    rating=summary.rating,
                    review_count=summary.review_count,
                    distribution=summary.distribution,
                )
                provider_repo.add(provider)
    except LockTimeout as exc:
        raise RatingRecomputeFailed(key, str(exc)) from exc
    except Exception as exc:
        raise RatingRecomputeFailed(key, f"{type(exc).__name__}: {exc}") from exc

    logger.debug(
        "Provider rating recomputed",
        provider_id=key,
        rating=summary.rating,
        review_count=summary.review_count,
    )
    return summary
