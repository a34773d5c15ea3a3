from dataclasses import dataclass
from typing import Any

import httpx

from lead_relay.config.settings import Settings
from lead_relay.events.client_base import BaseEventsClient
from lead_relay.events.exceptions import EventsConfigurationError, EventsNetworkError
from lead_relay.events.models import ConversionEvent, ForwardResult, build_batch
from lead_relay.logging.logger import Log


@dataclass(frozen=True)
class ForwarderConfig:
    """Ingestion endpoint settings, resolved once at start-up."""

    pixel_id: str
    access_token: str
    test_event_code: str = ""
    base_url: str = "https://graph.facebook.com"
    api_version: str = "v21.0"
    timeout_seconds: int = 15

    @classmethod
    def from_settings(cls, settings: Settings) -> "ForwarderConfig":
        return cls(
            pixel_id=settings.meta_pixel_id.strip(),
            access_token=settings.meta_access_token.strip(),
            test_event_code=settings.meta_test_event_code.strip(),
            base_url=settings.meta_graph_base_url.rstrip("/"),
            api_version=settings.meta_graph_api_version,
            timeout_seconds=settings.meta_timeout_seconds,
        )

    def validate(self) -> None:
        if not self.pixel_id or not self.access_token:
            raise EventsConfigurationError("Missing META_PIXEL_ID or META_ACCESS_TOKEN env vars")

    @property
    def events_url(self) -> str:
        return f"{self.base_url}/{self.api_version}/{self.pixel_id}/events"


class MetaConversionsClient(BaseEventsClient):
    """Sends events to the Conversions API in one POST, without retry."""

    def __init__(self, config: ForwarderConfig, client: httpx.Client | None = None) -> None:
        self._config = config
        self._client = client

    def send(self, events: list[ConversionEvent]) -> ForwardResult:
        self._config.validate()
        params = {"access_token": self._config.access_token}
        if self._config.test_event_code:
            params["test_event_code"] = self._config.test_event_code

        try:
            response = self._post(params, build_batch(events))
        except httpx.HTTPError as exc:
            raise EventsNetworkError(f"Conversions API request failed: {exc}") from exc

        body = _response_body(response)
        Log.info(
            "Conversions API response",
            status_code=response.status_code,
            response_body=body,
        )
        return ForwardResult(ok=response.is_success, status_code=response.status_code, body=body)

    def _post(self, params: dict[str, str], payload: dict[str, Any]) -> httpx.Response:
        if self._client is not None:
            return self._client.post(self._config.events_url, params=params, json=payload)
        with httpx.Client(timeout=self._config.timeout_seconds) as client:
            return client.post(self._config.events_url, params=params, json=payload)


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return {"raw": response.text}
