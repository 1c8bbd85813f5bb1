"""Repository for the Review aggregate."""

from protean.exceptions import ObjectNotFoundError

from reviews.domain import reviews
from reviews.review.review import Review, ReviewStatus

PAGE_SIZE = 100


@reviews.repository(part_of=Review)
class ReviewRepository:
    """Review lookups beyond plain ``get``/``add``.

    Only ``Active`` reviews exist as far as callers are concerned; removed
    reviews are kept for history but never returned here.
    """

    def _fetch_all(self, order_by: list[str], **filters) -> list[Review]:
        # `order_by` must be a total order, or rows tied on it can slip between pages
        items = []
        offset = 0
        while True:
            page = (
                self._dao.query.filter(**filters)
                .order_by(order_by)
                .offset(offset)
                .limit(PAGE_SIZE)
                .all()
            )
            items.extend(page.items)
            if len(page.items) < PAGE_SIZE:
                return items
            offset += PAGE_SIZE

    def get_active(self, review_id) -> Review:
        """Load a review, treating removed reviews as missing."""
        review = self.get(review_id)
        if review.status != ReviewStatus.ACTIVE.value:
            raise ObjectNotFoundError(f"Review not found with id of {review_id}")
        return review

    def find_active_by_author(self, provider_id, user_id) -> Review | None:
        """The author's active review of the provider, if there is one."""
        result = self._dao.query.filter(
            provider_id=str(provider_id),
            user_id=str(user_id),
            status=ReviewStatus.ACTIVE.value,
        ).all()
        return result.items[0] if result.items else None

    def for_provider(self, provider_id, newest_first=True) -> list[Review]:
        """Every active review of the provider."""
        return self._fetch_all(
            ["-created_at", "-id"] if newest_first else ["created_at", "id"],
            provider_id=str(provider_id),
            status=ReviewStatus.ACTIVE.value,
        )
