import time
from collections.abc import Callable

from lead_relay.extraction.answers import NameAnswer, as_name, as_text, clean_text
from lead_relay.extraction.browser_ids import resolve_browser_ids
from lead_relay.extraction.dates import as_dob
from lead_relay.extraction.lookup import FieldLookup, key_matches, pick_suffixed_string
from lead_relay.extraction.models import (
    BrowserIdentifiers,
    ExtractedApplicant,
    ExtractionResult,
)
from lead_relay.extraction.profiles import CLICK_ID_KEYS, UTM_KEYS, FormProfile
from lead_relay.extraction.scanner import FieldScanner, iter_questions
from lead_relay.intake.models import ParsedBody
from lead_relay.logging.logger import Log

EVENT_ID_KEY = "event_id"


class FieldExtractor:
    """Pulls applicant attributes, browser ids and tags out of a ParsedBody.

    Extraction is best effort and never raises; anything not found is left
    absent.
    """

    def __init__(self, profile: FormProfile, clock: Callable[[], float] = time.time) -> None:
        self._profile = profile
        self._clock = clock

    def extract(self, parsed: ParsedBody, referer: str | None = None) -> ExtractionResult:
        try:
            return self._run(parsed, referer)
        except Exception as exc:
            Log.warning(
                f"Field extraction failed, continuing without fields: {exc}",
                profile=self._profile.name,
            )
            return ExtractionResult(
                applicant=ExtractedApplicant(),
                browser_ids=BrowserIdentifiers(),
                form_id=parsed.form_id,
                field_keys=parsed.field_keys,
            )

    def _run(self, parsed: ParsedBody, referer: str | None) -> ExtractionResult:
        profile = self._profile
        lookup = FieldLookup(parsed.fields, parsed.raw_request, profile.partner_keys)
        scanner = (
            FieldScanner((parsed.fields, parsed.raw_request), lookup.is_excluded)
            if profile.scan_fallback
            else None
        )

        applicant = ExtractedApplicant(
            **self._names(lookup, scanner),
            email=as_text(lookup.find(profile.email_keys)) or (scanner.email() if scanner else None),
            phones=self._phones(lookup, scanner),
            date_of_birth=as_dob(lookup.find(profile.dob_keys))
            or (scanner.date_of_birth() if scanner else None),
        )

        marketing: dict[str, str] = {}
        for key in UTM_KEYS + CLICK_ID_KEYS:
            value = as_text(lookup.find((key,)))
            if value:
                marketing[key] = value

        return ExtractionResult(
            applicant=applicant,
            browser_ids=resolve_browser_ids(parsed, referer, self._clock),
            marketing=marketing,
            event_id=resolve_event_id(parsed),
            event_source_url=as_text(lookup.find(("event_source_url",))),
            partner_present=self._partner_present(parsed),
            form_id=parsed.form_id,
            field_keys=parsed.field_keys,
        )

    def _names(self, lookup: FieldLookup, scanner: FieldScanner | None) -> dict[str, str | None]:
        profile = self._profile
        name = as_name(
            lookup.find(
                profile.full_name_keys,
                exclude=profile.first_name_keys + profile.last_name_keys,
            )
        )
        if name is None:
            first = as_text(lookup.find(profile.first_name_keys))
            last = as_text(lookup.find(profile.last_name_keys))
            if first or last:
                name = NameAnswer(first=first, last=last)
        if name is None and scanner is not None:
            name = scanner.name()
        if name is None:
            return {"first_name": None, "last_name": None}
        return {"first_name": name.first, "last_name": name.last}

    def _phones(self, lookup: FieldLookup, scanner: FieldScanner | None) -> tuple[str, ...]:
        primary = as_text(lookup.find(self._profile.phone_keys))
        secondary = as_text(lookup.find(self._profile.secondary_phone_keys))
        if primary is None and secondary is None and scanner is not None:
            primary = scanner.phone()
        phones = [p for p in (primary, secondary) if p]
        if len(phones) == 2 and phones[0] == phones[1]:
            phones.pop()
        return tuple(phones)

    def _partner_present(self, parsed: ParsedBody) -> bool:
        if not self._profile.report_partner_presence:
            return False
        keys = self._profile.partner_keys
        lookup = FieldLookup(parsed.fields, parsed.raw_request)
        if any(lookup.find((key,)) is not None for key in keys):
            return True
        return any(
            key_matches(name, key)
            for source in (parsed.fields, parsed.raw_request)
            for name, _ in iter_questions(source)
            for key in keys
        )


def resolve_event_id(parsed: ParsedBody) -> str | None:
    """Prefer a browser-supplied hidden event id over the form-builder's internal one."""
    rr = parsed.raw_request
    hidden = (
        pick_suffixed_string(rr, EVENT_ID_KEY)
        or pick_suffixed_string(parsed.fields, EVENT_ID_KEY)
        or clean_text(parsed.fields.get(EVENT_ID_KEY))
        or clean_text(parsed.fields.get("eventId"))
    )
    return hidden or clean_text(rr.get(EVENT_ID_KEY))
