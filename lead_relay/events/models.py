from dataclasses import asdict, dataclass, field
from typing import Any

ACTION_SOURCE_WEBSITE = "website"


@dataclass(frozen=True)
class UserData:
    """Ingestion `user_data`. PII fields hold SHA-256 hex digests only."""

    em: list[str] = field(default_factory=list)
    ph: list[str] = field(default_factory=list)
    fn: str | None = None
    ln: str | None = None
    db: str | None = None
    fbp: str | None = None
    fbc: str | None = None
    client_ip_address: str | None = None
    client_user_agent: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return _compact(asdict(self))


@dataclass(frozen=True)
class ConversionEvent:
    event_name: str
    event_time: int
    event_source_url: str
    user_data: UserData
    custom_data: dict[str, Any] = field(default_factory=dict)
    event_id: str | None = None
    action_source: str = ACTION_SOURCE_WEBSITE

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "event_name": self.event_name,
            "event_time": self.event_time,
            "event_id": self.event_id,
            "action_source": self.action_source,
            "event_source_url": self.event_source_url,
            "user_data": self.user_data.to_payload(),
            "custom_data": dict(self.custom_data),
        }
        return {key: value for key, value in payload.items() if value is not None}


@dataclass(frozen=True)
class ForwardResult:
    """Outcome of one ingestion call, relayed back to the webhook caller."""

    ok: bool
    status_code: int
    body: Any = None


def build_batch(events: list[ConversionEvent]) -> dict[str, Any]:
    return {"data": [event.to_payload() for event in events]}


def _compact(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value not in (None, "", [])}
