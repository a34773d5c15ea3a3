import json
from collections.abc import Callable

from lead_relay.intake.body_reader import decode_raw_request, read_body
from lead_relay.intake.models import BodyKind, RequestMeta


class TestReadJson:
    def test_object_body(self) -> None:
        parsed = read_body("application/json", b'{"email": "a@b.co", "formID": "42"}')
        assert parsed.kind is BodyKind.JSON
        assert parsed.fields == {"email": "a@b.co", "formID": "42"}
        assert parsed.form_id == "42"

    def test_malformed_json_degrades_to_empty(self) -> None:
        parsed = read_body("application/json; charset=utf-8", b'{"email": ')
        assert parsed.kind is BodyKind.JSON
        assert parsed.fields == {}
        assert parsed.raw_request == {}

    def test_non_object_json_degrades_to_empty(self) -> None:
        parsed = read_body("application/json", b"[1, 2, 3]")
        assert parsed.fields == {}


class TestReadUrlencoded:
    def test_first_value_per_key(self) -> None:
        parsed = read_body("application/x-www-form-urlencoded", b"a=1&b=2&b=3&c=")
        assert parsed.kind is BodyKind.FORM
        assert parsed.fields == {"a": "1", "b": "2", "c": ""}

    def test_bracket_keys_are_folded(self) -> None:
        parsed = read_body(
            "application/x-www-form-urlencoded",
            b"q3_name%5Bfirst%5D=Jane&q3_name%5Blast%5D=Doe",
        )
        assert parsed.fields["q3_name"] == {"first": "Jane", "last": "Doe"}
        assert parsed.fields["q3_name[first]"] == "Jane"

    def test_lifts_browser_fields(self) -> None:
        parsed = read_body(
            "application/x-www-form-urlencoded",
            b"fbp=fb.1.1.2&fbc=fb.1.1.click&parentURL=https%3A%2F%2Fexample.com%2Fapply",
        )
        assert parsed.fbp == "fb.1.1.2"
        assert parsed.fbc == "fb.1.1.click"
        assert parsed.parent_url == "https://example.com/apply"

    def test_parent_url_falls_back_to_referer_field(self) -> None:
        parsed = read_body(
            "application/x-www-form-urlencoded", b"referer=https%3A%2F%2Fexample.com%2Fx"
        )
        assert parsed.parent_url == "https://example.com/x"


class TestReadMultipart:
    def test_embedded_raw_request(self, multipart_body: tuple[str, bytes]) -> None:
        content_type, body = multipart_body
        parsed = read_body(content_type, body)
        assert parsed.kind is BodyKind.MULTIPART
        assert parsed.raw_request["q27_whatsYour27"] == "Jane.Doe@Example.com "
        assert parsed.form_id == "241234567890"
        assert parsed.field_keys == ["formID", "rawRequest", "pretty"]

    def test_form_id_from_slug_wins(self, make_multipart: Callable[..., bytes]) -> None:
        body = make_multipart(
            {"formID": "111", "rawRequest": json.dumps({"slug": "submit/222/"})}, boundary="B"
        )
        parsed = read_body("multipart/form-data; boundary=B", body)
        assert parsed.form_id == "222"

    def test_undecodable_raw_request(self, make_multipart: Callable[..., bytes]) -> None:
        body = make_multipart({"formID": "111", "rawRequest": "{not json"}, boundary="B")
        parsed = read_body("multipart/form-data; boundary=B", body)
        assert parsed.raw_request == {}
        assert parsed.form_id == "111"


class TestReadUnknownContentType:
    def test_json_looking_body(self) -> None:
        parsed = read_body(None, b'{"a": "1"}')
        assert parsed.kind is BodyKind.JSON
        assert parsed.fields == {"a": "1"}

    def test_form_looking_body(self) -> None:
        parsed = read_body("text/plain", b"a=1&b=2")
        assert parsed.kind is BodyKind.FORM
        assert parsed.fields == {"a": "1", "b": "2"}

    def test_empty_body(self) -> None:
        parsed = read_body(None, b"  ")
        assert parsed.kind is BodyKind.EMPTY
        assert parsed.fields == {}


class TestDecodeRawRequest:
    def test_dict_passthrough(self) -> None:
        assert decode_raw_request({"a": 1}) == {"a": 1}

    def test_json_string(self) -> None:
        assert decode_raw_request('{"a": 1}') == {"a": 1}

    def test_invalid_values(self) -> None:
        assert decode_raw_request(None) == {}
        assert decode_raw_request("") == {}
        assert decode_raw_request("[1]") == {}
        assert decode_raw_request("oops") == {}


class TestRequestMeta:
    def test_client_ip_is_first_forwarded_entry(self) -> None:
        meta = RequestMeta(method="POST", forwarded_for="203.0.113.5, 10.0.0.1")
        assert meta.client_ip == "203.0.113.5"

    def test_client_ip_absent(self) -> None:
        assert RequestMeta(method="POST").client_ip is None
        assert RequestMeta(method="POST", forwarded_for=" ").client_ip is None
