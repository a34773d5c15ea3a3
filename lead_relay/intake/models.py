from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class BodyKind(str, Enum):
    """Which decoder produced a ParsedBody."""

    JSON = "json"
    FORM = "form"
    MULTIPART = "multipart"
    EMPTY = "empty"


@dataclass(frozen=True)
class RequestMeta:
    """Transport-level details of an inbound request."""

    method: str
    content_type: str | None = None
    referer: str | None = None
    user_agent: str | None = None
    forwarded_for: str | None = None

    @property
    def client_ip(self) -> str | None:
        if not self.forwarded_for:
            return None
        first = self.forwarded_for.split(",")[0].strip()
        return first or None


@dataclass
class ParsedBody:
    """Normalized view of an inbound webhook body.

    `fields` is the flat key/value map posted by the caller (for JSON bodies,
    the top-level object). `raw_request` is the form-builder's own answer blob
    when one was embedded, otherwise an empty dict.
    """

    kind: BodyKind
    fields: dict[str, Any] = field(default_factory=dict)
    raw_request: dict[str, Any] = field(default_factory=dict)
    form_id: str | None = None
    fbp: str | None = None
    fbc: str | None = None
    parent_url: str | None = None

    @property
    def field_keys(self) -> list[str]:
        return list(self.fields)
