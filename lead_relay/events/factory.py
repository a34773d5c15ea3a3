from lead_relay.config.settings import Settings
from lead_relay.events.client_base import BaseEventsClient
from lead_relay.events.example_client_adapter import DryRunEventsClient
from lead_relay.events.meta_client_adapter import ForwarderConfig, MetaConversionsClient


class EventsClientFactory:
    """Creates the configured events client adapter."""

    @classmethod
    def create(cls, settings: Settings) -> BaseEventsClient:
        provider = settings.events_provider.lower()
        if provider == "dry_run":
            return DryRunEventsClient()
        if provider == "meta":
            return MetaConversionsClient(ForwarderConfig.from_settings(settings))
        raise ValueError(
            f"Unknown events provider '{provider}'. Choose from: ['dry_run', 'meta']"
        )
