"""RemoveReview — take a review out of its provider's review set.

Returns the provider id so the caller can recompute that provider's rating.
"""

from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.domain import reviews
from reviews.review.review import Review


@reviews.command(part_of="Review")
class RemoveReview:
    review_id = Identifier(required=True)


@reviews.command_handler(part_of=Review)
class RemoveReviewHandler:
    @handle(RemoveReview)
    def remove_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get_active(command.review_id)

        review.remove()

        repo.add(review)
        return str(review.provider_id)
