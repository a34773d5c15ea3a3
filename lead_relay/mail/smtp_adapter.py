import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import make_msgid, parseaddr

from lead_relay.config.settings import Settings
from lead_relay.logging.logger import Log
from lead_relay.mail.base import BaseMailTransport
from lead_relay.mail.exceptions import MailConfigurationError, MailDeliveryError
from lead_relay.mail.models import MailMessage, MailResult


@dataclass(frozen=True)
class SmtpConfig:
    host: str
    port: int = 465
    secure: bool = True
    user: str = ""
    password: str = ""
    timeout_seconds: int = 30

    @classmethod
    def from_settings(cls, settings: Settings) -> "SmtpConfig":
        return cls(
            host=settings.smtp_host.strip(),
            port=settings.smtp_port,
            secure=settings.smtp_secure,
            user=settings.smtp_user,
            password=settings.smtp_pass,
            timeout_seconds=settings.smtp_timeout_seconds,
        )


class SmtpMailTransport(BaseMailTransport):
    """Sends mail over SMTP: implicit TLS when `secure`, otherwise STARTTLS when offered."""

    def __init__(self, config: SmtpConfig) -> None:
        self._config = config

    def send(self, message: MailMessage) -> MailResult:
        if not self._config.host:
            raise MailConfigurationError("SMTP_HOST is not configured")

        email = self._build(message)
        try:
            with self._connect() as server:
                if not self._config.secure and server.has_extn("starttls"):
                    server.starttls()
                if self._config.user:
                    server.login(self._config.user, self._config.password)
                server.send_message(email)
        except (smtplib.SMTPException, OSError) as exc:
            raise MailDeliveryError(f"SMTP delivery failed: {exc}") from exc

        Log.info("Mail relayed", message_id=email["Message-ID"], smtp_host=self._config.host)
        return MailResult(message_id=email["Message-ID"])

    def _connect(self) -> smtplib.SMTP:
        if self._config.secure:
            return smtplib.SMTP_SSL(
                self._config.host, self._config.port, timeout=self._config.timeout_seconds
            )
        server = smtplib.SMTP(
            self._config.host, self._config.port, timeout=self._config.timeout_seconds
        )
        server.ehlo()
        return server

    @staticmethod
    def _build(message: MailMessage) -> EmailMessage:
        email = EmailMessage()
        email["From"] = message.sender
        email["To"] = message.to
        email["Subject"] = message.subject
        domain = parseaddr(message.sender)[1].rpartition("@")[2] or None
        email["Message-ID"] = make_msgid(domain=domain)
        email.set_content(message.text)
        return email
