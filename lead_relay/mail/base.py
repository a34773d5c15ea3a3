from abc import ABC, abstractmethod

from lead_relay.mail.models import MailMessage, MailResult


class BaseMailTransport(ABC):
    """Contract for outbound mail transports."""

    @abstractmethod
    def send(self, message: MailMessage) -> MailResult:
        """Hand one message to the transport.

        Returns:
            MailResult with the Message-ID assigned to the message.

        Raises:
            MailConfigurationError: if the transport is not configured.
            MailDeliveryError: if delivery fails.
        """
