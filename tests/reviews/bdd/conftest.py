"""Shared BDD fixtures and step definitions for the Reviews domain."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError
from pytest_bdd import given, parsers, then, when
from reviews.provider.provider import ServiceProvider
from reviews.provider.registration import RegisterServiceProvider
from reviews.review import lifecycle
from reviews.review.submission import DuplicateReviewError


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


@pytest.fixture()
def authored():
    """Review ids keyed by author."""
    return {}


def _review(provider_id, user_id, rating):
    return lifecycle.create_review(
        provider_id=provider_id,
        user_id=user_id,
        rating=rating,
        title=f"Review by {user_id}",
        body="Honest work at a fair price.",
    )


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a registered service provider", target_fixture="provider_id")
def registered_provider():
    return current_domain.process(
        RegisterServiceProvider(name="BDD Motors", category="Dealer"),
        asynchronous=False,
    )


@given(parsers.cfparse('user "{user_id}" has reviewed the provider with rating {rating:d}'))
def user_has_reviewed(provider_id, authored, user_id, rating):
    authored[user_id] = str(_review(provider_id, user_id, rating).id)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('user "{user_id}" reviews the provider with rating {rating:d}'))
def user_reviews(provider_id, authored, error, user_id, rating):
    try:
        authored[user_id] = str(_review(provider_id, user_id, rating).id)
    except (DuplicateReviewError, ObjectNotFoundError) as exc:
        error["exc"] = exc


@when(parsers.cfparse('user "{user_id}" reviews provider "{other_provider}" with rating {rating:d}'))
def user_reviews_other(error, user_id, other_provider, rating):
    try:
        _review(other_provider, user_id, rating)
    except ObjectNotFoundError as exc:
        error["exc"] = exc


@when(parsers.cfparse('the review by "{user_id}" is removed'))
def review_removed(authored, user_id):
    lifecycle.remove_review(authored[user_id])


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the provider rating is {rating:f} from {count:d} reviews"))
def provider_rating_is(provider_id, rating, count):
    provider = current_domain.repository_for(ServiceProvider).get(provider_id)
    assert provider.rating == pytest.approx(rating)
    assert provider.review_count == count


@then("the review is rejected as a duplicate")
def rejected_as_duplicate(error):
    assert isinstance(error["exc"], DuplicateReviewError)


@then("the review is rejected as not found")
def rejected_as_not_found(error):
    assert isinstance(error["exc"], ObjectNotFoundError)
