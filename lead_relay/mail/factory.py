from lead_relay.config.settings import Settings
from lead_relay.mail.base import BaseMailTransport
from lead_relay.mail.smtp_adapter import SmtpConfig, SmtpMailTransport


class MailTransportFactory:
    """Creates the configured mail transport."""

    @classmethod
    def create(cls, settings: Settings) -> BaseMailTransport:
        return SmtpMailTransport(SmtpConfig.from_settings(settings))
