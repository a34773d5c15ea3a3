from dataclasses import dataclass


@dataclass(frozen=True)
class MailMessage:
    to: str
    sender: str
    subject: str
    text: str


@dataclass(frozen=True)
class MailResult:
    message_id: str
