from lead_relay.events.client_base import BaseEventsClient
from lead_relay.events.factory import EventsClientFactory
from lead_relay.events.normalizer import EventNormalizer

__all__ = ["BaseEventsClient", "EventNormalizer", "EventsClientFactory"]
