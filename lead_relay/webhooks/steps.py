from lead_relay.events.client_base import BaseEventsClient
from lead_relay.events.normalizer import EventNormalizer
from lead_relay.extraction.field_extractor import FieldExtractor
from lead_relay.intake.body_reader import read_body
from lead_relay.logging.logger import Log
from lead_relay.webhooks.pipeline import PipelineContext, PipelineStep

HASHED_USER_DATA_KEYS = frozenset({"em", "ph", "fn", "ln", "db"})


class ReadBodyStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        context.parsed = read_body(context.request.content_type, context.raw_body)
        Log.debug(
            f"Read {len(context.raw_body)} bytes as {context.parsed.kind.value}",
            field_count=len(context.parsed.fields),
            has_raw_request=bool(context.parsed.raw_request),
        )
        return context


class ExtractFieldsStep(PipelineStep):
    def __init__(self, extractor: FieldExtractor) -> None:
        self._extractor = extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.parsed is None:
            raise ValueError("PipelineContext.parsed must be set before extraction")
        context.extraction = self._extractor.extract(context.parsed, context.request.referer)
        return context


class NormalizeEventStep(PipelineStep):
    def __init__(self, normalizer: EventNormalizer) -> None:
        self._normalizer = normalizer

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extraction is None:
            raise ValueError("PipelineContext.extraction must be set before normalization")
        context.event = self._normalizer.build(context.extraction, context.request)
        return context


class LogSubmissionStep(PipelineStep):
    """Diagnostic line: presence flags and hashed values only, never raw PII."""

    def __init__(self, profile_name: str) -> None:
        self._profile_name = profile_name

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extraction is None or context.event is None:
            raise ValueError("PipelineContext.event must be set before logging the submission")
        extraction = context.extraction
        Log.info(
            f"Parsed {self._profile_name} submission",
            form_id=extraction.form_id,
            event_id=context.event.event_id,
            event_source_url=context.event.event_source_url,
            have_fbp=bool(extraction.browser_ids.fbp),
            have_fbc=bool(extraction.browser_ids.fbc),
            fbc_reconstructed=extraction.browser_ids.fbc_reconstructed,
            partner_present=extraction.partner_present,
            marketing=extraction.marketing,
            field_keys=extraction.field_keys,
            hashed_pii={
                key: value
                for key, value in context.event.user_data.to_payload().items()
                if key in HASHED_USER_DATA_KEYS
            },
            **extraction.applicant.presence(),
        )
        return context


class ForwardEventStep(PipelineStep):
    def __init__(self, client: BaseEventsClient) -> None:
        self._client = client

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.event is None:
            raise ValueError("PipelineContext.event must be set before forwarding")
        context.forward_result = self._client.send([context.event])
        return context
