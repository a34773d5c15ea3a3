class EventsError(Exception):
    """Base exception for conversion-event forwarding."""


class EventsConfigurationError(EventsError):
    """Raised when the ingestion account id or access token is missing."""


class EventsNetworkError(EventsError):
    """Raised when the ingestion call fails before a response is received."""
