"""Dry-run events client.

Use this adapter for local development and as a template when adding other
ingestion providers: implement BaseEventsClient and register the provider in
EventsClientFactory.
"""

from typing import ClassVar

from lead_relay.events.client_base import BaseEventsClient
from lead_relay.events.models import ConversionEvent, ForwardResult, build_batch
from lead_relay.logging.logger import Log


class DryRunEventsClient(BaseEventsClient):
    """Logs the serialized batch and reports success. No network calls."""

    STATUS_CODE: ClassVar[int] = 200

    def send(self, events: list[ConversionEvent]) -> ForwardResult:
        batch = build_batch(events)
        Log.info("Dry run: conversion events not sent", event_count=len(batch["data"]))
        return ForwardResult(
            ok=True,
            status_code=self.STATUS_CODE,
            body={"events_received": len(batch["data"]), "dry_run": True},
        )
