"""ReportReview — flag a review for moderation.

Idempotent: reporting an already reported review succeeds without change.
"""

from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.domain import reviews
from reviews.review.review import Review


@reviews.command(part_of="Review")
class ReportReview:
    review_id = Identifier(required=True)


@reviews.command_handler(part_of=Review)
class ReportReviewHandler:
    @handle(ReportReview)
    def report_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get_active(command.review_id)

        if review.reported:
            return

        review.report()

        repo.add(review)
