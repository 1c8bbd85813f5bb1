"""SubmitReview — review a service provider.

The provider must exist and the author may hold at most one active review of
it. The duplicate check and the insert happen in one unit of work; callers
serialize submissions per (provider, user) around this command so two
overlapping submissions cannot both pass the check.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.domain import reviews
from reviews.provider.provider import ServiceProvider
from reviews.review.review import Review


class DuplicateReviewError(ValidationError):
    """The user already has an active review of this provider."""


@reviews.command(part_of="Review")
class SubmitReview:
    provider_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    title = String(required=True, max_length=200)
    body = Text(required=True)


@reviews.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        try:
            current_domain.repository_for(ServiceProvider).get(command.provider_id)
        except ObjectNotFoundError:
            raise ObjectNotFoundError(f"Service provider not found with id of {command.provider_id}") from None

        repo = current_domain.repository_for(Review)
        if repo.find_active_by_author(command.provider_id, command.user_id) is not None:
            raise DuplicateReviewError({"review": ["You have already reviewed this service provider"]})

        review = Review.submit(
            provider_id=command.provider_id,
            user_id=command.user_id,
            rating=command.rating,
            title=command.title,
            body=command.body,
        )
        repo.add(review)
        return str(review.id)
