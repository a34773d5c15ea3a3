class MailError(Exception):
    """Base exception for the SMTP bridge."""


class MailConfigurationError(MailError):
    """Raised when the SMTP host is not configured."""


class MailDeliveryError(MailError):
    """Raised when the SMTP server rejects or cannot accept the message."""
