from abc import ABC, abstractmethod

from lead_relay.events.models import ConversionEvent, ForwardResult


class BaseEventsClient(ABC):
    """Contract for conversion-event ingestion adapters."""

    @abstractmethod
    def send(self, events: list[ConversionEvent]) -> ForwardResult:
        """Deliver a batch of events in a single call.

        Returns:
            ForwardResult carrying the remote success flag and response body.

        Raises:
            EventsConfigurationError: if required credentials are missing.
            EventsNetworkError: if the remote service could not be reached.
        """
