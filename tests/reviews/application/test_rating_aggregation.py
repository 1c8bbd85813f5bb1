"""Application tests for keeping provider rating aggregates consistent."""

import logging
import threading

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError
from reviews.provider import rating as rating_module
from reviews.provider.provider import ServiceProvider
from reviews.provider.rating import RatingRecomputeFailed, recompute_provider_rating
from reviews.review import lifecycle
from reviews.review.submission import DuplicateReviewError
from reviews.utils.locks import provider_locks


def _create(provider_id, user_id, rating):
    return lifecycle.create_review(
        provider_id=provider_id,
        user_id=user_id,
        rating=rating,
        title=f"{rating} stars",
        body="Would use this shop again.",
    )


def _aggregate(provider_id):
    provider = current_domain.repository_for(ServiceProvider).get(provider_id)
    return provider.rating, provider.review_count


class TestRatingScenario:
    def test_create_sequence_and_duplicate(self, register_provider):
        provider_id = register_provider()
        assert _aggregate(provider_id) == (0.0, 0)

        _create(provider_id, "user-a", 4)
        assert _aggregate(provider_id) == (4.0, 1)

        _create(provider_id, "user-b", 2)
        assert _aggregate(provider_id) == (3.0, 2)

        with pytest.raises(DuplicateReviewError):
            _create(provider_id, "user-a", 5)
        assert _aggregate(provider_id) == (3.0, 2)

    def test_aggregate_matches_reviews_after_creates_and_removals(self, register_provider):
        provider_id = register_provider()
        created = [_create(provider_id, f"user-{i}", score) for i, score in enumerate([5, 1, 4, 4, 2, 3])]

        lifecycle.remove_review(created[0].id)
        lifecycle.remove_review(created[4].id)

        remaining = [r.rating.score for r in lifecycle.list_reviews(provider_id)]
        rating, count = _aggregate(provider_id)
        assert count == len(remaining) == 4
        assert rating == pytest.approx(sum(remaining) / len(remaining))

    def test_removing_last_review_resets_to_zero(self, register_provider):
        provider_id = register_provider()
        review = _create(provider_id, "user-a", 5)
        lifecycle.remove_review(review.id)
        assert _aggregate(provider_id) == (0.0, 0)

    def test_removed_author_may_review_again(self, register_provider):
        provider_id = register_provider()
        first = _create(provider_id, "user-a", 1)
        lifecycle.remove_review(first.id)

        _create(provider_id, "user-a", 5)
        assert _aggregate(provider_id) == (5.0, 1)

    def test_providers_are_independent(self, register_provider):
        first = register_provider(name="Shop A")
        second = register_provider(name="Shop B")
        _create(first, "user-a", 5)
        _create(second, "user-a", 1)

        assert _aggregate(first) == (5.0, 1)
        assert _aggregate(second) == (1.0, 1)

    def test_distribution_tracks_stars(self, register_provider):
        provider_id = register_provider()
        for i, score in enumerate([5, 5, 3]):
            _create(provider_id, f"user-{i}", score)

        provider = current_domain.repository_for(ServiceProvider).get(provider_id)
        assert provider.distribution == {"1": 0, "2": 0, "3": 1, "4": 0, "5": 2}


class TestRemoveReview:
    def test_unknown_review_is_not_found(self):
        with pytest.raises(ObjectNotFoundError):
            lifecycle.remove_review("review-missing")

    def test_second_removal_is_not_found(self, register_provider):
        provider_id = register_provider()
        review = _create(provider_id, "user-a", 4)
        lifecycle.remove_review(review.id)
        with pytest.raises(ObjectNotFoundError):
            lifecycle.remove_review(review.id)

    def test_returns_removed_review(self, register_provider, notifier):
        provider_id = register_provider()
        review = _create(provider_id, "user-a", 4)
        removed = lifecycle.remove_review(review.id)
        assert removed.status == "Removed"
        assert len(notifier.of_type("review_removed")) == 1


class TestRecompute:
    def test_recompute_repairs_stale_aggregate(self, register_provider):
        provider_id = register_provider()
        _create(provider_id, "user-a", 4)

        repo = current_domain.repository_for(ServiceProvider)
        provider = repo.get(provider_id)
        provider.record_rating(rating=1.0, review_count=9, distribution={})
        repo.add(provider)

        summary = recompute_provider_rating(provider_id)
        assert summary.rating == 4.0
        assert _aggregate(provider_id) == (4.0, 1)

    def test_unknown_provider_fails(self):
        with pytest.raises(RatingRecomputeFailed) as exc:
            recompute_provider_rating("prov-missing")
        assert exc.value.provider_id == "prov-missing"

    def test_lock_timeout_fails_without_writing(self, register_provider):
        provider_id = register_provider()
        held = threading.Event()
        release = threading.Event()

        def holder():
            with provider_locks.hold(provider_id):
                held.set()
                release.wait(2)

        thread = threading.Thread(target=holder)
        thread.start()
        held.wait(2)
        try:
            with pytest.raises(RatingRecomputeFailed) as exc:
                recompute_provider_rating(provider_id, timeout=0.05)
            assert "Timed out" in exc.value.reason
        finally:
            release.set()
            thread.join()

        provider = current_domain.repository_for(ServiceProvider).get(provider_id)
        assert provider.rating_updated_at is None


class TestRecomputeFailureIsNonFatal:
    def test_review_is_kept_and_failure_logged(self, register_provider, monkeypatch, caplog):
        provider_id = register_provider()

        def broken(scores):
            raise RuntimeError("store unavailable")

        monkeypatch.setattr(rating_module, "compute_rating", broken)
        caplog.set_level(logging.ERROR)

        review = _create(provider_id, "user-a", 4)

        assert review.id is not None
        assert len(lifecycle.list_reviews(provider_id)) == 1
        assert _aggregate(provider_id) == (0.0, 0)
        assert "rating_recompute_failed" in caplog.text

    def test_next_recompute_catches_up(self, register_provider, monkeypatch):
        provider_id = register_provider()
        original = rating_module.compute_rating

        def broken(scores):
            raise RuntimeError("store unavailable")

        monkeypatch.setattr(rating_module, "compute_rating", broken)
        _create(provider_id, "user-a", 4)

        monkeypatch.setattr(rating_module, "compute_rating", original)
        _create(provider_id, "user-b", 2)

        assert _aggregate(provider_id) == (3.0, 2)
