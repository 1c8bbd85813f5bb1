"""FastAPI routes for the Reviews & Ratings bounded context.

Each route translates between Pydantic schemas (external contract) and the
review lifecycle service. Domain errors are mapped to HTTP responses by
Protean's exception handlers (ValidationError → 400, ObjectNotFoundError → 404).
"""

from fastapi import APIRouter, HTTPException
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from reviews.api.schemas import (
    CreateReviewRequest,
    RegisterServiceProviderRequest,
    ReviewListResponse,
    ReviewResponse,
    ReviewSchema,
    ServiceProviderResponse,
    ServiceProviderSchema,
)
from reviews.provider.provider import ServiceProvider
from reviews.provider.rating import RatingRecomputeFailed, recompute_provider_rating
from reviews.provider.registration import RegisterServiceProvider
from reviews.review import lifecycle
from reviews.review.review import Review

provider_router = APIRouter(prefix="/service-providers", tags=["service-providers"])


def _provider(provider_id: str) -> ServiceProviderResponse:
    provider = current_domain.repository_for(ServiceProvider).get(provider_id)
    return ServiceProviderResponse(data=ServiceProviderSchema.from_provider(provider))


def _check_review_belongs(provider_id: str, review_id: str) -> None:
    review = current_domain.repository_for(Review).get_active(review_id)
    if str(review.provider_id) != provider_id:
        raise ObjectNotFoundError(f"Review not found with id of {review_id}")


@provider_router.post("", status_code=201, response_model=ServiceProviderResponse)
async def register_service_provider(body: RegisterServiceProviderRequest) -> ServiceProviderResponse:
    """Register a service provider that users can review."""
    provider_id = current_domain.process(
        RegisterServiceProvider(name=body.name, category=body.category),
        asynchronous=False,
    )
    return _provider(provider_id)


@provider_router.get("/{provider_id}", response_model=ServiceProviderResponse)
async def get_service_provider(provider_id: str) -> ServiceProviderResponse:
    """Fetch a provider along with its rating aggregate."""
    return _provider(provider_id)


@provider_router.post("/{provider_id}/rating/recompute", response_model=ServiceProviderResponse)
async def recompute_rating(provider_id: str) -> ServiceProviderResponse:
    """Rebuild a provider's rating aggregate from its reviews."""
    current_domain.repository_for(ServiceProvider).get(provider_id)
    try:
        recompute_provider_rating(provider_id)
    except RatingRecomputeFailed as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return _provider(provider_id)


@provider_router.get("/{provider_id}/reviews", response_model=ReviewListResponse)
async def get_reviews(provider_id: str) -> ReviewListResponse:
    """List a provider's reviews, newest first."""
    reviews = lifecycle.list_reviews(provider_id)
    return ReviewListResponse(
        count=len(reviews),
        data=[ReviewSchema.from_review(review) for review in reviews],
    )


@provider_router.post("/{provider_id}/reviews", status_code=201, response_model=ReviewResponse)
async def create_review(provider_id: str, body: CreateReviewRequest) -> ReviewResponse:
    """Review a service provider."""
    review = lifecycle.create_review(
        provider_id=provider_id,
        user_id=body.user_id,
        rating=body.rating,
        title=body.title,
        body=body.body,
    )
    return ReviewResponse(data=ReviewSchema.from_review(review))


@provider_router.post("/{provider_id}/reviews/{review_id}/helpful", response_model=ReviewResponse)
async def mark_helpful(provider_id: str, review_id: str) -> ReviewResponse:
    """Mark a review as helpful."""
    _check_review_belongs(provider_id, review_id)
    review = lifecycle.mark_helpful(review_id)
    return ReviewResponse(data=ReviewSchema.from_review(review))


@provider_router.post("/{provider_id}/reviews/{review_id}/report", response_model=ReviewResponse)
async def report_review(provider_id: str, review_id: str) -> ReviewResponse:
    """Report a review for moderation."""
    _check_review_belongs(provider_id, review_id)
    review = lifecycle.report_review(review_id)
    return ReviewResponse(data=ReviewSchema.from_review(review))


@provider_router.delete("/{provider_id}/reviews/{review_id}", response_model=ReviewResponse)
async def remove_review(provider_id: str, review_id: str) -> ReviewResponse:
    """Remove a review."""
    _check_review_belongs(provider_id, review_id)
    review = lifecycle.remove_review(review_id)
    return ReviewResponse(data=ReviewSchema.from_review(review))
