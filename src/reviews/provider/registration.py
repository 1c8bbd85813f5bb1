"""RegisterServiceProvider — make a provider available for reviews."""

from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.domain import reviews
from reviews.provider.provider import ServiceProvider


@reviews.command(part_of="ServiceProvider")
class RegisterServiceProvider:
    name = String(required=True, max_length=200)
    category = String(max_length=100)
    provider_id = Identifier()


@reviews.command_handler(part_of=ServiceProvider)
class RegisterServiceProviderHandler:
    @handle(RegisterServiceProvider)
    def register_service_provider(self, command):
        provider = ServiceProvider.register(
            name=command.name,
            category=command.category,
            provider_id=command.provider_id,
        )
        current_domain.repository_for(ServiceProvider).add(provider)
        return str(provider.id)
