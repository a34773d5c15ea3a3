import time
from collections.abc import Callable
from urllib.parse import parse_qs, unquote, urlsplit

from lead_relay.extraction.answers import clean_text
from lead_relay.extraction.lookup import pick_string
from lead_relay.extraction.models import BrowserIdentifiers
from lead_relay.intake.models import ParsedBody

FBC_PREFIX = "fb.1"


def build_fbc(fbclid: str, timestamp: int) -> str:
    """Compose an `_fbc`-style cookie value from a click id."""
    return f"{FBC_PREFIX}.{timestamp}.{fbclid}"


def fbclid_from_url(url: str) -> str | None:
    """Find `fbclid` in a URL, unwrapping a nested `parentURL` query parameter first."""
    if not url:
        return None
    try:
        outer = parse_qs(urlsplit(url).query)
        inner = outer.get("parentURL", [""])[0]
        candidate = unquote(inner) if inner else url
        query = parse_qs(urlsplit(candidate).query)
    except ValueError:
        return None
    fbclid = query.get("fbclid", [""])[0].strip()
    return fbclid or None


def resolve_browser_ids(
    parsed: ParsedBody,
    referer: str | None = None,
    clock: Callable[[], float] = time.time,
) -> BrowserIdentifiers:
    rr = parsed.raw_request
    fbp = (
        clean_text(rr.get("fbp"))
        or parsed.fbp
        or pick_string(parsed.fields, "fbp")
        or pick_string(rr, "fbp")
    )
    fbc = (
        clean_text(rr.get("fbc"))
        or parsed.fbc
        or pick_string(parsed.fields, "fbc")
        or pick_string(rr, "fbc")
    )
    if fbc:
        return BrowserIdentifiers(fbp=fbp, fbc=fbc)

    parent_url = (
        parsed.parent_url
        or clean_text(rr.get("parentURL"))
        or clean_text(rr.get("referer"))
        or referer
        or ""
    )
    fbclid = fbclid_from_url(parent_url)
    if fbclid is None:
        return BrowserIdentifiers(fbp=fbp)
    return BrowserIdentifiers(
        fbp=fbp,
        fbc=build_fbc(fbclid, int(clock())),
        fbc_reconstructed=True,
    )
