"""BDD tests for provider rating aggregation."""

from pytest_bdd import scenarios

scenarios("features/rating_aggregation.feature")
