from abc import ABC, abstractmethod
from dataclasses import dataclass

from lead_relay.events.models import ConversionEvent, ForwardResult
from lead_relay.extraction.models import ExtractionResult
from lead_relay.intake.models import ParsedBody, RequestMeta


@dataclass(slots=True)
class PipelineContext:
    request: RequestMeta
    raw_body: bytes = b""
    parsed: ParsedBody | None = None
    extraction: ExtractionResult | None = None
    event: ConversionEvent | None = None
    forward_result: ForwardResult | None = None


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
