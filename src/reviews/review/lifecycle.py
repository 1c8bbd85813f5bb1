"""Review lifecycle service — the entry point for every review operation.

Runs the review commands inside the right critical section and, after any
change to a provider's review set (submission, removal), recomputes that
provider's rating aggregate before returning.

Critical sections:
    create_review            per (provider, user)   check-and-insert
    mark_helpful / report /
    remove_review            per review              read-modify-write
    rating recomputation     per provider            see reviews.provider.rating

A failed recomputation never fails the operation that triggered it: the
review change has already committed, so the failure is logged and the
aggregate is left for the next recomputation to repair.
"""

import structlog
from protean.utils.globals import current_domain

from reviews.notification import notify_review_event
from reviews.provider.rating import RatingRecomputeFailed, recompute_provider_rating
from reviews.review.removal import RemoveReview
from reviews.review.reporting import ReportReview
from reviews.review.review import Review
from reviews.review.submission import SubmitReview
from reviews.review.voting import MarkReviewHelpful
from reviews.utils.locks import review_locks, submission_locks

logger = structlog.get_logger(__name__)


def _refresh_rating(provider_id, trigger, review_id):
    try:
        recompute_provider_rating(provider_id)
    except RatingRecomputeFailed as exc:
        logger.error(
            "rating_recompute_failed",
            provider_id=str(provider_id),
            review_id=str(review_id),
            trigger=trigger,
            reason=exc.reason,
        )


def _load(review_id) -> Review:
    return current_domain.repository_for(Review).get(review_id)


def list_reviews(provider_id) -> list[Review]:
    """Active reviews of a provider, most recent first."""
    return current_domain.repository_for(Review).for_provider(provider_id)


def create_review(provider_id, user_id, rating, title, body) -> Review:
    """Submit a review and bring the provider's rating up to date."""
    with submission_locks.hold((str(provider_id), str(user_id))):
        review_id = current_domain.process(
            SubmitReview(
                provider_id=provider_id,
                user_id=user_id,
                rating=rating,
                title=title,
                body=body,
            ),
            asynchronous=False,
        )

    logger.info(
        "Review submitted",
        review_id=review_id,
        provider_id=str(provider_id),
        user_id=str(user_id),
        rating=rating,
    )

    _refresh_rating(provider_id, trigger="created", review_id=review_id)

    review = _load(review_id)
    notify_review_event(
        "review_created",
        review_id=review_id,
        provider_id=str(provider_id),
        user_id=str(user_id),
        rating=rating,
    )
    return review


def mark_helpful(review_id) -> Review:
    """Add one helpful mark. The provider's rating is not affected."""
    with review_locks.hold(str(review_id)):
        current_domain.process(MarkReviewHelpful(review_id=review_id), asynchronous=False)
        review = _load(review_id)

    notify_review_event(
        "review_marked_helpful",
        review_id=str(review_id),
        provider_id=str(review.provider_id),
        helpful_count=review.helpful_count,
    )
    return review


def report_review(review_id) -> Review:
    """Flag a review for moderation. Safe to call more than once."""
    with review_locks.hold(str(review_id)):
        current_domain.process(ReportReview(review_id=review_id), asynchronous=False)
        review = _load(review_id)

    logger.info("Review reported", review_id=str(review_id), provider_id=str(review.provider_id))

    notify_review_event(
        "review_reported",
        review_id=str(review_id),
        provider_id=str(review.provider_id),
    )
    return review


def remove_review(review_id) -> Review:
    """Remove a review and bring the provider's rating up to date."""
    with review_locks.hold(str(review_id)):
        provider_id = current_domain.process(RemoveReview(review_id=review_id), asynchronous=False)

    logger.info("Review removed", review_id=str(review_id), provider_id=provider_id)

    _refresh_rating(provider_id, trigger="removed", review_id=review_id)

    review = _load(review_id)
    notify_review_event(
        "review_removed",
        review_id=str(review_id),
        provider_id=provider_id,
    )
    return review
