import json
import re
from typing import Any
from urllib.parse import parse_qs

from lead_relay.extraction.answers import clean_text
from lead_relay.intake.models import BodyKind, ParsedBody
from lead_relay.intake.multipart import parse_multipart
from lead_relay.logging.logger import Log

RAW_REQUEST_FIELD = "rawRequest"

_BRACKET_KEY_RE = re.compile(r"^([^\[\]]+)\[([^\[\]]+)\]$")


def read_body(content_type: str | None, raw: bytes) -> ParsedBody:
    """Decode a webhook body according to its declared content-type.

    Never raises: undecodable input degrades to an empty ParsedBody.
    """
    ct = (content_type or "").lower()
    text = raw.decode("utf-8", errors="replace")

    if "application/json" in ct:
        return _from_mapping(BodyKind.JSON, _decode_json_object(text))
    if "application/x-www-form-urlencoded" in ct:
        return _from_mapping(BodyKind.FORM, _fold_bracket_keys(_decode_form(text)))
    if "multipart/form-data" in ct:
        fields = parse_multipart(text, content_type or "")
        return _from_mapping(BodyKind.MULTIPART, _fold_bracket_keys(fields))
    return _read_unknown(text)


def decode_raw_request(value: Any) -> dict[str, Any]:
    """Decode the embedded raw submission blob; failure degrades to {}."""
    if isinstance(value, dict):
        return value
    if not isinstance(value, str) or not value.strip():
        return {}
    try:
        decoded = json.loads(value)
    except json.JSONDecodeError as exc:
        Log.warning(f"Ignoring undecodable {RAW_REQUEST_FIELD} blob: {exc}")
        return {}
    return decoded if isinstance(decoded, dict) else {}


def _read_unknown(text: str) -> ParsedBody:
    if not text.strip():
        return ParsedBody(kind=BodyKind.EMPTY)
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError:
        return _from_mapping(BodyKind.FORM, _fold_bracket_keys(_decode_form(text)))
    return _from_mapping(BodyKind.JSON, decoded if isinstance(decoded, dict) else {})


def _decode_json_object(text: str) -> dict[str, Any]:
    if not text.strip():
        return {}
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError as exc:
        Log.warning(f"Malformed JSON body, continuing with empty payload: {exc}")
        return {}
    if not isinstance(decoded, dict):
        Log.warning("JSON body is not an object, continuing with empty payload")
        return {}
    return decoded


def _decode_form(text: str) -> dict[str, Any]:
    parsed = parse_qs(text, keep_blank_values=True)
    return {key: values[0] for key, values in parsed.items()}


def _fold_bracket_keys(fields: dict[str, Any]) -> dict[str, Any]:
    """Group `q3_name[first]`-style keys into nested maps under `q3_name`.

    The original bracketed keys are kept alongside the folded map.
    """
    folded: dict[str, Any] = dict(fields)
    for key, value in fields.items():
        match = _BRACKET_KEY_RE.match(key)
        if match is None:
            continue
        parent, child = match.groups()
        nested = folded.get(parent)
        if nested is None:
            nested = {}
            folded[parent] = nested
        if isinstance(nested, dict):
            nested[child] = value
    return folded


def _from_mapping(kind: BodyKind, fields: dict[str, Any]) -> ParsedBody:
    raw_request = decode_raw_request(fields.get(RAW_REQUEST_FIELD))
    slug = raw_request.get("slug")
    slug_id = slug.rstrip("/").split("/")[-1] if isinstance(slug, str) and slug else None
    form_id = (
        slug_id or clean_text(fields.get("formID")) or clean_text(raw_request.get("formID"))
    )
    return ParsedBody(
        kind=kind,
        fields=fields,
        raw_request=raw_request,
        form_id=form_id,
        fbp=clean_text(fields.get("fbp")),
        fbc=clean_text(fields.get("fbc")),
        parent_url=clean_text(fields.get("parentURL")) or clean_text(fields.get("referer")),
    )
