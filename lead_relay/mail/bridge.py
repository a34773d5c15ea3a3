import hmac
from http import HTTPStatus

from lead_relay.intake.body_reader import read_body
from lead_relay.intake.models import RequestMeta
from lead_relay.logging.logger import Log
from lead_relay.mail.base import BaseMailTransport
from lead_relay.mail.models import MailMessage
from lead_relay.webhooks.models import HandlerResponse

REQUIRED_FIELDS = ("to", "from", "subject", "text")


class MailBridge:
    """Token-guarded relay from an HTTP POST to the mail transport."""

    def __init__(self, bridge_token: str, transport: BaseMailTransport) -> None:
        self._bridge_token = bridge_token
        self._transport = transport

    def handle(self, request: RequestMeta, raw_body: bytes, token: str | None) -> HandlerResponse:
        method = request.method.upper()
        if method == "OPTIONS":
            return HandlerResponse.preflight()
        if not self._authorized(token):
            return HandlerResponse.error(HTTPStatus.UNAUTHORIZED, "unauthorized")
        if method == "GET":
            return HandlerResponse.ok(runtime="python", ready=True)
        if method != "POST":
            return HandlerResponse.method_not_allowed()

        fields = read_body(request.content_type, raw_body).fields
        values = {name: str(fields.get(name) or "").strip() for name in REQUIRED_FIELDS}
        if not all(values.values()):
            return HandlerResponse.error(HTTPStatus.BAD_REQUEST, "missing fields")

        message = MailMessage(
            to=values["to"],
            sender=values["from"],
            subject=values["subject"],
            text=values["text"],
        )
        try:
            result = self._transport.send(message)
        except Exception as exc:
            Log.error(f"SMTP bridge error: {exc}")
            return HandlerResponse.error(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc) or "unknown")
        return HandlerResponse.ok(messageId=result.message_id)

    def _authorized(self, token: str | None) -> bool:
        if not self._bridge_token:
            return False
        return hmac.compare_digest(
            (token or "").strip().encode("utf-8"), self._bridge_token.encode("utf-8")
        )
