"""Pydantic request/response schemas for the Reviews API.

These are separate from Protean commands (anti-corruption pattern).
The API layer is the external contract; commands are internal domain concepts.

Range and blank checks on review content are left to the domain so that
invalid content surfaces as a 400 like every other review rule.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class RegisterServiceProviderRequest(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    category: str | None = Field(default=None, max_length=100)


class CreateReviewRequest(BaseModel):
    user_id: str
    rating: int
    title: str
    body: str


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ReviewSchema(BaseModel):
    id: str
    provider_id: str
    user_id: str
    rating: int
    title: str
    body: str
    helpful_count: int
    reported: bool
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_review(cls, review) -> ReviewSchema:
        return cls(
            id=str(review.id),
            provider_id=str(review.provider_id),
            user_id=str(review.user_id),
            rating=review.rating.score,
            title=review.title,
            body=review.body,
            helpful_count=review.helpful_count,
            reported=review.reported,
            status=review.status,
            created_at=review.created_at,
            updated_at=review.updated_at,
        )


class ServiceProviderSchema(BaseModel):
    id: str
    name: str
    category: str | None = None
    rating: float
    review_count: int
    rating_distribution: dict[str, int]
    rating_updated_at: datetime | None = None

    @classmethod
    def from_provider(cls, provider) -> ServiceProviderSchema:
        return cls(
            id=str(provider.id),
            name=provider.name,
            category=provider.category,
            rating=provider.rating,
            review_count=provider.review_count,
            rating_distribution=provider.distribution,
            rating_updated_at=provider.rating_updated_at,
        )


class ReviewResponse(BaseModel):
    success: bool = True
    data: ReviewSchema


class ReviewListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[ReviewSchema]


class ServiceProviderResponse(BaseModel):
    success: bool = True
    data: ServiceProviderSchema
