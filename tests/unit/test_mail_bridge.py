import json
from unittest.mock import MagicMock

import pytest

from lead_relay.intake.models import RequestMeta
from lead_relay.mail.base import BaseMailTransport
from lead_relay.mail.bridge import MailBridge
from lead_relay.mail.exceptions import MailDeliveryError
from lead_relay.mail.models import MailMessage, MailResult

TOKEN = "s3cret-token"


def _make_bridge(token: str = TOKEN) -> tuple[MailBridge, MagicMock]:
    transport = MagicMock(spec=BaseMailTransport)
    transport.send.return_value = MailResult(message_id="<abc@lyftgrowth.com>")
    return MailBridge(token, transport), transport


def _json_post() -> RequestMeta:
    return RequestMeta(method="POST", content_type="application/json")


def _payload(**overrides: str) -> bytes:
    values = {
        "to": "ops@lyftgrowth.com",
        "from": "noreply@lyftgrowth.com",
        "subject": "New lead",
        "text": "Jane Doe applied.",
    }
    values.update(overrides)
    return json.dumps(values).encode("utf-8")


class TestMailBridgeAuth:
    def test_preflight_needs_no_token(self) -> None:
        bridge, _ = _make_bridge()
        assert bridge.handle(RequestMeta(method="OPTIONS"), b"", None).status_code == 204

    @pytest.mark.parametrize("token", [None, "", "wrong", "ключ"])
    def test_bad_token(self, token: str | None) -> None:
        bridge, transport = _make_bridge()
        response = bridge.handle(_json_post(), _payload(), token)
        assert response.status_code == 401
        assert response.body == {"ok": False, "error": "unauthorized"}
        transport.send.assert_not_called()

    def test_unconfigured_token_rejects_everything(self) -> None:
        bridge, _ = _make_bridge(token="")
        assert bridge.handle(_json_post(), _payload(), "").status_code == 401


class TestMailBridgeRequests:
    def test_readiness_check(self) -> None:
        bridge, _ = _make_bridge()
        response = bridge.handle(RequestMeta(method="GET"), b"", TOKEN)
        assert response.status_code == 200
        assert response.body == {"ok": True, "runtime": "python", "ready": True}

    def test_other_methods(self) -> None:
        bridge, _ = _make_bridge()
        assert bridge.handle(RequestMeta(method="DELETE"), b"", TOKEN).status_code == 405

    def test_sends_json_message(self) -> None:
        bridge, transport = _make_bridge()
        response = bridge.handle(_json_post(), _payload(), TOKEN)

        assert response.status_code == 200
        assert response.body == {"ok": True, "messageId": "<abc@lyftgrowth.com>"}
        transport.send.assert_called_once_with(
            MailMessage(
                to="ops@lyftgrowth.com",
                sender="noreply@lyftgrowth.com",
                subject="New lead",
                text="Jane Doe applied.",
            )
        )

    def test_sends_urlencoded_message(self) -> None:
        bridge, transport = _make_bridge()
        request = RequestMeta(method="POST", content_type="application/x-www-form-urlencoded")
        body = b"to=a%40b.co&from=c%40d.co&subject=Hi&text=Hello"
        assert bridge.handle(request, body, TOKEN).status_code == 200
        assert transport.send.call_args.args[0].to == "a@b.co"

    @pytest.mark.parametrize("missing", ["to", "from", "subject", "text"])
    def test_missing_field(self, missing: str) -> None:
        bridge, transport = _make_bridge()
        response = bridge.handle(_json_post(), _payload(**{missing: "  "}), TOKEN)
        assert response.status_code == 400
        assert response.body == {"ok": False, "error": "missing fields"}
        transport.send.assert_not_called()

    def test_transport_failure(self) -> None:
        bridge, transport = _make_bridge()
        transport.send.side_effect = MailDeliveryError("SMTP delivery failed: 550 mailbox unavailable")
        response = bridge.handle(_json_post(), _payload(), TOKEN)
        assert response.status_code == 500
        assert response.body == {
            "ok": False,
            "error": "SMTP delivery failed: 550 mailbox unavailable",
        }
