"""Domain events for the ServiceProvider aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from reviews.domain import reviews


@reviews.event(part_of="ServiceProvider")
class ServiceProviderRegistered:
    """A service provider became reviewable."""

    __version__ = 1

    provider_id = Identifier(required=True)
    name = String(required=True)
    category = String()
    registered_at = DateTime(required=True)


@reviews.event(part_of="ServiceProvider")
class ProviderRatingRecalculated:
    """The provider's rating aggregate was recomputed from its reviews."""

    __version__ = 1

    provider_id = Identifier(required=True)
    rating = Float(required=True)
    review_count = Integer(required=True)
    rating_distribution = Text(required=True)
    recalculated_at = DateTime(required=True)
