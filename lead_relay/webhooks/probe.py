from http import HTTPStatus

from lead_relay.intake.body_reader import read_body
from lead_relay.intake.models import RequestMeta
from lead_relay.logging.logger import Log
from lead_relay.webhooks.models import HandlerResponse


class ProbeLogger:
    """Webhook endpoint that accepts anything.

    Non-POST requests (endpoint verification probes) always get 200. POST
    bodies are decoded and their shape logged; field values are not.
    """

    def handle(
        self,
        request: RequestMeta,
        raw_body: bytes,
        header_names: list[str] | None = None,
    ) -> HandlerResponse:
        if request.method.upper() != "POST":
            return HandlerResponse.plain_ok()

        parsed = read_body(request.content_type, raw_body)
        Log.info(
            "Webhook received",
            content_type=request.content_type,
            header_names=sorted(header_names or []),
            body_kind=parsed.kind.value,
            body_bytes=len(raw_body),
            field_keys=parsed.field_keys,
            raw_request_keys=sorted(parsed.raw_request),
        )
        return HandlerResponse(HTTPStatus.OK, {"ok": True})
