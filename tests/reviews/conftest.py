import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def reviews_bed():
    from reviews.domain import reviews

    bed = DomainFixture(reviews)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(reviews_bed):
    from reviews.notification import reset_notifier

    with reviews_bed.domain_context():
        yield

        # Clear all databases and drain the event store
        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()

    reset_notifier()


@pytest.fixture()
def notifier():
    from reviews.notification import get_notifier

    return get_notifier()


@pytest.fixture()
def register_provider():
    """Register a service provider and return its id."""
    from reviews.provider.registration import RegisterServiceProvider

    def _register(name="Precision Auto Care", category="Mechanic", provider_id=None):
        return current_domain.process(
            RegisterServiceProvider(name=name, category=category, provider_id=provider_id),
            asynchronous=False,
        )

    return _register
