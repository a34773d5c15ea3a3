"""Per-route form profiles.

Each inbound route shares one extraction pipeline; what differs between the
forms (field keys, event name, source tag, source-URL policy) lives here.
"""

from dataclasses import dataclass
from enum import Enum


class EventName(str, Enum):
    LEAD = "Lead"


class SourceUrlPolicy(str, Enum):
    REFERER = "referer"  # Referer header unless it is a form-builder page, else the configured default
    FIXED = "fixed"  # declared event_source_url hidden field, else the configured default


UTM_KEYS = ("utm_source", "utm_medium", "utm_campaign", "utm_term", "utm_content")
CLICK_ID_KEYS = ("fbclid", "gclid", "msclkid")


@dataclass(frozen=True)
class FormProfile:
    name: str
    event_name: EventName
    source_tag: str
    email_keys: tuple[str, ...] = ("email",)
    full_name_keys: tuple[str, ...] = ("name",)
    first_name_keys: tuple[str, ...] = ("first_name",)
    last_name_keys: tuple[str, ...] = ("last_name",)
    phone_keys: tuple[str, ...] = ("phone",)
    secondary_phone_keys: tuple[str, ...] = ()
    dob_keys: tuple[str, ...] = ("dob",)
    partner_keys: tuple[str, ...] = ()
    source_url_policy: SourceUrlPolicy = SourceUrlPolicy.REFERER
    scan_fallback: bool = True
    report_partner_presence: bool = False


LEAD_PROFILE = FormProfile(
    name="lead",
    event_name=EventName.LEAD,
    source_tag="jotform_webhook",
    email_keys=("q27_whatsYour27", "email"),
    full_name_keys=("q24_whatsYour24", "name"),
    phone_keys=("q26_whatsYour26", "phone"),
    secondary_phone_keys=("q25_whatsYour25",),
    dob_keys=("dateOf", "dob"),
    source_url_policy=SourceUrlPolicy.REFERER,
)

APP_PROFILE = FormProfile(
    name="app",
    event_name=EventName.LEAD,
    source_tag="jotform_webhook_app",
    email_keys=("email",),
    full_name_keys=("name",),
    phone_keys=("mobile18",),
    dob_keys=("dateOf",),
    partner_keys=("partnerName", "dateOf22", "partnerEmail", "partnerMobile"),
    source_url_policy=SourceUrlPolicy.FIXED,
    report_partner_presence=True,
)

PROFILES: dict[str, FormProfile] = {
    LEAD_PROFILE.name: LEAD_PROFILE,
    APP_PROFILE.name: APP_PROFILE,
}
