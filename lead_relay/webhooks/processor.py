from collections.abc import Callable
from http import HTTPStatus

from lead_relay.config.settings import Settings
from lead_relay.events.client_base import BaseEventsClient
from lead_relay.events.exceptions import EventsConfigurationError
from lead_relay.events.factory import EventsClientFactory
from lead_relay.events.normalizer import EventNormalizer
from lead_relay.extraction.field_extractor import FieldExtractor
from lead_relay.extraction.profiles import FormProfile, SourceUrlPolicy
from lead_relay.intake.models import RequestMeta
from lead_relay.logging.logger import Log
from lead_relay.webhooks.models import HandlerResponse
from lead_relay.webhooks.pipeline import PipelineContext, PipelineStep
from lead_relay.webhooks.steps import (
    ExtractFieldsStep,
    ForwardEventStep,
    LogSubmissionStep,
    NormalizeEventStep,
    ReadBodyStep,
)


class WebhookProcessor:
    """Runs one form submission through the conversion pipeline.

    Pipeline: read body -> extract fields -> normalize -> log -> forward.
    """

    def __init__(self, profile: FormProfile, steps: list[PipelineStep]) -> None:
        self._profile = profile
        self._steps = steps

    @property
    def profile(self) -> FormProfile:
        return self._profile

    def handle(self, request: RequestMeta, raw_body: bytes) -> HandlerResponse:
        method = request.method.upper()
        if method == "OPTIONS":
            return HandlerResponse.preflight()
        if method != "POST":
            return HandlerResponse.method_not_allowed()

        try:
            context = self._run(PipelineContext(request=request, raw_body=raw_body))
        except EventsConfigurationError as exc:
            Log.error(f"[{self._profile.name}] Configuration error: {exc}")
            return HandlerResponse.error(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc))
        except Exception as exc:
            Log.exception(f"[{self._profile.name}] Handler error: {exc}")
            return HandlerResponse.error(
                HTTPStatus.INTERNAL_SERVER_ERROR, str(exc) or "Unknown error"
            )

        result = context.forward_result
        if result is None:
            return HandlerResponse.error(HTTPStatus.INTERNAL_SERVER_ERROR, "Event was not forwarded")
        status = HTTPStatus.OK if result.ok else HTTPStatus.INTERNAL_SERVER_ERROR
        return HandlerResponse(status, {"ok": result.ok, "meta": result.body})

    def _run(self, context: PipelineContext) -> PipelineContext:
        for step in self._steps:
            context = step.run(context)
        return context


def fallback_source_url(settings: Settings, profile: FormProfile) -> str:
    if profile.source_url_policy is SourceUrlPolicy.FIXED:
        return settings.app_event_source_url
    return settings.default_event_source_url


def build_processor(
    settings: Settings,
    profile: FormProfile,
    client: BaseEventsClient | None = None,
    clock: Callable[[], float] | None = None,
) -> WebhookProcessor:
    """Build a WebhookProcessor for one form profile."""
    events_client = client if client is not None else EventsClientFactory.create(settings)
    clock_kwargs = {"clock": clock} if clock is not None else {}
    steps: list[PipelineStep] = [
        ReadBodyStep(),
        ExtractFieldsStep(FieldExtractor(profile, **clock_kwargs)),
        NormalizeEventStep(
            EventNormalizer(profile, fallback_source_url(settings, profile), **clock_kwargs)
        ),
        LogSubmissionStep(profile.name),
        ForwardEventStep(events_client),
    ]
    return WebhookProcessor(profile, steps)
