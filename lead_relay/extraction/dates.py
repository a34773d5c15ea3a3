import re
from datetime import date, datetime

from lead_relay.extraction.answers import Answer, DateAnswer, TextAnswer

_YEAR_FIRST_RE = re.compile(r"^(\d{4})[-/](\d{1,2})[-/](\d{1,2})$")
_YEAR_LAST_RE = re.compile(r"^(\d{1,2})[-/](\d{1,2})[-/](\d{4})$")

# Textual shapes seen in form-builder exports; tried after the numeric ones.
_FALLBACK_FORMATS = (
    "%Y%m%d",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%Y.%m.%d",
    "%d.%m.%Y",
)


def normalize_dob(value: object) -> str | None:
    """Normalize a date of birth to an 8-digit YYYYMMDD string.

    Accepts YYYY-MM-DD / YYYY/MM/DD, MM/DD/YYYY / MM-DD-YYYY, ISO datetimes and
    a handful of textual formats. Returns None when nothing matches or the
    date does not exist on the calendar.
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None

    match = _YEAR_FIRST_RE.match(text)
    if match:
        return _compact(int(match.group(1)), int(match.group(2)), int(match.group(3)))

    match = _YEAR_LAST_RE.match(text)
    if match:
        return _compact(int(match.group(3)), int(match.group(1)), int(match.group(2)))

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        parsed = None
    if parsed is not None:
        return _format(parsed.date())

    for fmt in _FALLBACK_FORMATS:
        try:
            return _format(datetime.strptime(text, fmt).date())
        except ValueError:
            continue
    return None


def as_dob(answer: Answer | None) -> str | None:
    if isinstance(answer, DateAnswer):
        return _compact(answer.year, answer.month, answer.day)
    if isinstance(answer, TextAnswer):
        return normalize_dob(answer.text)
    return None


def _compact(year: int, month: int, day: int) -> str | None:
    try:
        return _format(date(year, month, day))
    except ValueError:
        return None


def _format(value: date) -> str:
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"
