"""Reviews load test scenarios.

ReviewerJourney walks one user through the whole review lifecycle.
HotProviderUser piles many users onto a handful of providers so rating
recomputations for the same provider overlap constantly.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, constant_pacing, task

from loadtests.data_generators import provider_data, review_data, unique_user_id
from loadtests.helpers.response import is_duplicate_review
from loadtests.helpers.state import HotProviderState, ReviewerState

HOT_PROVIDER_COUNT = 3


class ReviewerJourney(SequentialTaskSet):
    """Register provider -> Review -> Duplicate attempt -> Helpful -> Report -> Check rating.

    The duplicate attempt must come back as a 400; anything else is a failure.
    """

    def on_start(self):
        self.state = ReviewerState(user_id=unique_user_id())

    @task
    def register_provider(self):
        with self.client.post(
            "/service-providers",
            json=provider_data(),
            catch_response=True,
            name="POST /service-providers",
        ) as resp:
            if resp.status_code == 201:
                self.state.provider_id = resp.json()["data"]["id"]
            else:
                resp.failure(f"Register provider failed: {resp.status_code}")
                self.interrupt()

    @task
    def create_review(self):
        with self.client.post(
            f"/service-providers/{self.state.provider_id}/reviews",
            json=review_data(self.state.user_id),
            catch_response=True,
            name="POST /service-providers/{id}/reviews",
        ) as resp:
            if resp.status_code == 201:
                self.state.review_id = resp.json()["data"]["id"]
            else:
                resp.failure(f"Create review failed: {resp.status_code}")
                self.interrupt()

    @task
    def duplicate_review(self):
        with self.client.post(
            f"/service-providers/{self.state.provider_id}/reviews",
            json=review_data(self.state.user_id),
            catch_response=True,
            name="POST /service-providers/{id}/reviews [duplicate]",
        ) as resp:
            if is_duplicate_review(resp):
                self.state.duplicates_rejected += 1
                resp.success()
            else:
                resp.failure(f"Duplicate review was not rejected: {resp.status_code}")

    @task
    def mark_helpful(self):
        self.client.post(
            f"/service-providers/{self.state.provider_id}/reviews/{self.state.review_id}/helpful",
            name="POST /service-providers/{id}/reviews/{id}/helpful",
        )

    @task
    def report(self):
        self.client.post(
            f"/service-providers/{self.state.provider_id}/reviews/{self.state.review_id}/report",
            name="POST /service-providers/{id}/reviews/{id}/report",
        )

    @task
    def check_rating(self):
        with self.client.get(
            f"/service-providers/{self.state.provider_id}",
            catch_response=True,
            name="GET /service-providers/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Get provider failed: {resp.status_code}")
            elif resp.json()["data"]["review_count"] != 1:
                resp.failure("Provider review_count out of step with its reviews")
        self.interrupt()


class ReviewerUser(HttpUser):
    wait_time = between(0.5, 2)
    tasks = [ReviewerJourney]


class HotProviderUser(HttpUser):
    """Many users reviewing the same few providers at once."""

    wait_time = constant_pacing(0.2)
    hot = HotProviderState()

    def on_start(self):
        if len(self.hot.provider_ids) < HOT_PROVIDER_COUNT:
            resp = self.client.post("/service-providers", json=provider_data(), name="[HOT] POST /service-providers")
            if resp.status_code == 201:
                self.hot.provider_ids.append(resp.json()["data"]["id"])

    def _provider_id(self):
        return random.choice(self.hot.provider_ids) if self.hot.provider_ids else None

    @task(5)
    def review_hot_provider(self):
        provider_id = self._provider_id()
        if provider_id is None:
            return
        self.client.post(
            f"/service-providers/{provider_id}/reviews",
            json=review_data(unique_user_id()),
            name="[HOT] POST /service-providers/{id}/reviews",
        )

    @task(2)
    def list_hot_reviews(self):
        provider_id = self._provider_id()
        if provider_id is None:
            return
        self.client.get(
            f"/service-providers/{provider_id}/reviews",
            name="[HOT] GET /service-providers/{id}/reviews",
        )

    @task(1)
    def verify_hot_aggregate(self):
        provider_id = self._provider_id()
        if provider_id is None:
            return
        provider = self.client.get(f"/service-providers/{provider_id}", name="[HOT] GET /service-providers/{id}")
        if provider.status_code != 200:
            return
        installed = provider.json()["data"]["review_count"]

        with self.client.get(
            f"/service-providers/{provider_id}/reviews",
            catch_response=True,
            name="[HOT] verify aggregate",
        ) as listed:
            if listed.status_code != 200:
                listed.failure(f"List reviews failed: {listed.status_code}")
            # Reviews are only added here, so the installed count may lag the listing but never lead it
            elif installed > listed.json()["count"]:
                listed.failure(f"review_count {installed} ahead of the listed reviews")
