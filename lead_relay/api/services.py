from dataclasses import dataclass

from lead_relay.config.settings import Settings
from lead_relay.events.client_base import BaseEventsClient
from lead_relay.extraction.profiles import APP_PROFILE, LEAD_PROFILE
from lead_relay.mail.base import BaseMailTransport
from lead_relay.mail.bridge import MailBridge
from lead_relay.mail.factory import MailTransportFactory
from lead_relay.pdf.base import BasePdfWatermarker
from lead_relay.pdf.pymupdf_adapter import PyMuPdfWatermarker
from lead_relay.webhooks.probe import ProbeLogger
from lead_relay.webhooks.processor import WebhookProcessor, build_processor


@dataclass(frozen=True)
class Services:
    """Handlers shared by all requests. None of them hold per-request state."""

    lead: WebhookProcessor
    app: WebhookProcessor
    probe: ProbeLogger
    mail: MailBridge
    watermarker: BasePdfWatermarker


def _watermarker(settings: Settings) -> BasePdfWatermarker:
    engine = settings.pdf_engine.lower()
    if engine != "pymupdf":
        raise ValueError(f"Unknown PDF engine '{engine}'. Choose from: ['pymupdf']")
    return PyMuPdfWatermarker()


def build_services(
    settings: Settings,
    events_client: BaseEventsClient | None = None,
    mail_transport: BaseMailTransport | None = None,
) -> Services:
    transport = mail_transport if mail_transport is not None else MailTransportFactory.create(settings)
    return Services(
        lead=build_processor(settings, LEAD_PROFILE, client=events_client),
        app=build_processor(settings, APP_PROFILE, client=events_client),
        probe=ProbeLogger(),
        mail=MailBridge(settings.bridge_token, transport),
        watermarker=_watermarker(settings),
    )
