import time
from collections.abc import Callable
from typing import Any
from urllib.parse import urlsplit

from lead_relay.events.hashing import hash_pii
from lead_relay.events.models import ConversionEvent, UserData
from lead_relay.extraction.models import ExtractionResult
from lead_relay.extraction.profiles import FormProfile, SourceUrlPolicy
from lead_relay.intake.models import RequestMeta

FORM_BUILDER_HOSTS = ("jotform.com",)


class EventNormalizer:
    """Maps an ExtractionResult onto the fixed outbound event shape.

    Every PII value is hashed here; nothing downstream sees raw PII.
    """

    def __init__(
        self,
        profile: FormProfile,
        fallback_source_url: str,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._profile = profile
        self._fallback_source_url = fallback_source_url
        self._clock = clock

    def build(self, extraction: ExtractionResult, request: RequestMeta) -> ConversionEvent:
        applicant = extraction.applicant
        user_data = UserData(
            em=_hashed_list([applicant.email]),
            ph=_hashed_list(list(applicant.phones)),
            fn=hash_pii(applicant.first_name),
            ln=hash_pii(applicant.last_name),
            db=hash_pii(applicant.date_of_birth),
            fbp=extraction.browser_ids.fbp,
            fbc=extraction.browser_ids.fbc,
            client_ip_address=request.client_ip,
            client_user_agent=request.user_agent or None,
        )
        return ConversionEvent(
            event_name=self._profile.event_name.value,
            event_time=int(self._clock()),
            event_id=extraction.event_id,
            event_source_url=self._source_url(extraction, request),
            user_data=user_data,
            custom_data=self._custom_data(extraction),
        )

    def _source_url(self, extraction: ExtractionResult, request: RequestMeta) -> str:
        if self._profile.source_url_policy is SourceUrlPolicy.REFERER:
            if request.referer and not _is_form_builder_page(request.referer):
                return request.referer
            return self._fallback_source_url
        return extraction.event_source_url or self._fallback_source_url

    def _custom_data(self, extraction: ExtractionResult) -> dict[str, Any]:
        custom_data: dict[str, Any] = {"source": self._profile.source_tag}
        custom_data.update(extraction.marketing)
        if self._profile.report_partner_presence:
            custom_data["partner_present"] = extraction.partner_present
        return custom_data


def _is_form_builder_page(url: str) -> bool:
    host = (urlsplit(url).hostname or "").lower()
    return any(host == h or host.endswith(f".{h}") for h in FORM_BUILDER_HOSTS)


def _hashed_list(values: list[str | None]) -> list[str]:
    return [digest for digest in (hash_pii(v) for v in values) if digest]
