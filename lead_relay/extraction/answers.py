"""Recognized answer shapes and the pure decoder that produces them.

Form-builder answers arrive as plain strings or as small objects whose shape
depends on the question type. `decode_answer` maps any raw value onto a closed
set of shapes; the `as_*` helpers turn a shape into the scalar a logical field
needs.
"""

from dataclasses import dataclass
from typing import Any

_QUESTION_VALUE_KEYS = ("answer", "value", "text")
_PHONE_KEYS = ("full", "phone", "number")


@dataclass(frozen=True)
class TextAnswer:
    text: str


@dataclass(frozen=True)
class NameAnswer:
    first: str | None = None
    last: str | None = None


@dataclass(frozen=True)
class PhoneAnswer:
    number: str


@dataclass(frozen=True)
class DateAnswer:
    year: int
    month: int
    day: int


Answer = TextAnswer | NameAnswer | PhoneAnswer | DateAnswer


def decode_answer(value: Any) -> Answer | None:
    """Map a raw answer value to a recognized shape, or None if blank/unknown."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip()
        return TextAnswer(text) if text else None
    if isinstance(value, (int, float)):
        return TextAnswer(str(value))
    if isinstance(value, list):
        for item in value:
            decoded = decode_answer(item)
            if decoded is not None:
                return decoded
        return None
    if isinstance(value, dict):
        return _decode_object(value)
    return None


def _decode_object(value: dict[str, Any]) -> Answer | None:
    if "first" in value or "last" in value:
        first = clean_text(value.get("first"))
        last = clean_text(value.get("last"))
        return NameAnswer(first, last) if first or last else None
    if {"year", "month", "day"} <= value.keys():
        return _decode_date_object(value)
    for key in _PHONE_KEYS:
        number = clean_text(value.get(key))
        if number:
            area = clean_text(value.get("area"))
            if key == "phone" and area:
                return PhoneAnswer(f"{area} {number}")
            return PhoneAnswer(number)
    for key in _QUESTION_VALUE_KEYS:
        if key in value:
            decoded = decode_answer(value[key])
            if decoded is not None:
                return decoded
    return None


def _decode_date_object(value: dict[str, Any]) -> DateAnswer | None:
    try:
        year = int(str(value["year"]).strip())
        month = int(str(value["month"]).strip())
        day = int(str(value["day"]).strip())
    except (TypeError, ValueError):
        return None
    if not (1 <= month <= 12 and 1 <= day <= 31 and year > 0):
        return None
    return DateAnswer(year, month, day)


def clean_text(value: Any) -> str | None:
    """Trimmed scalar as text; None for missing, blank or structured values."""
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text or None


def split_full_name(full: str) -> NameAnswer:
    parts = full.split()
    if not parts:
        return NameAnswer()
    if len(parts) == 1:
        return NameAnswer(first=parts[0])
    return NameAnswer(first=parts[0], last=" ".join(parts[1:]))


def as_text(answer: Answer | None) -> str | None:
    if answer is None:
        return None
    if isinstance(answer, TextAnswer):
        return answer.text
    if isinstance(answer, PhoneAnswer):
        return answer.number
    if isinstance(answer, NameAnswer):
        joined = " ".join(p for p in (answer.first, answer.last) if p)
        return joined or None
    return f"{answer.year:04d}-{answer.month:02d}-{answer.day:02d}"


def as_name(answer: Answer | None) -> NameAnswer | None:
    if isinstance(answer, NameAnswer):
        return answer
    if isinstance(answer, TextAnswer):
        name = split_full_name(answer.text)
        return name if name.first else None
    return None
