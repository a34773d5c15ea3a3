"""Last-resort scan over every nested key when keyed lookups find nothing.

Key names are matched against keyword patterns and values against shape
patterns. Per-question objects (`{"name": ..., "answer": ...}`) are indexed
by their own `name` as well as by their container key.
"""

import re
from collections.abc import Callable, Iterator
from typing import Any

from lead_relay.extraction.answers import (
    Answer,
    NameAnswer,
    PhoneAnswer,
    as_name,
    as_text,
    decode_answer,
)
from lead_relay.extraction.dates import as_dob

EMAIL_RE = re.compile(r"^[\w.\-+]+@[\w\-]+(\.[\w\-]+)+$")
PHONE_RE = re.compile(r"^\+?[\d\s\-().]{7,20}$")

_EMAIL_KEY_RE = re.compile(r"e-?mail", re.IGNORECASE)
_PHONE_KEY_RE = re.compile(r"phone|mobile|tel|cell", re.IGNORECASE)
_DOB_KEY_RE = re.compile(r"birth|dob|date_?of", re.IGNORECASE)
_NAME_KEY_RE = re.compile(r"name", re.IGNORECASE)
_NOT_PERSON_NAME_RE = re.compile(r"user|company|business|file|form|event|page|partner", re.IGNORECASE)

_QUESTION_VALUE_KEYS = ("answer", "value", "text")
_MAX_DEPTH = 4

Candidate = tuple[str, Answer]


def _never_excluded(key: str) -> bool:
    return False


def iter_candidates(
    container: Any,
    is_excluded: Callable[[str], bool] = _never_excluded,
    depth: int = 0,
) -> Iterator[Candidate]:
    """Yield (key, decoded answer) for every nested key with a recognizable value.

    An excluded container key, or a question object whose own `name` is
    excluded, drops that value and everything nested under it.
    """
    if depth > _MAX_DEPTH:
        return
    if isinstance(container, list):
        for item in container:
            yield from iter_candidates(item, is_excluded, depth + 1)
        return
    if not isinstance(container, dict):
        return
    for key, value in container.items():
        if is_excluded(str(key)):
            continue
        question = _is_question(value)
        if question and is_excluded(value["name"]):
            continue
        answer = decode_answer(value)
        if answer is not None:
            yield str(key), answer
        if question:
            if answer is not None:
                yield value["name"], answer
            nested = _question_value(value)
            if isinstance(nested, (dict, list)):
                yield from iter_candidates(nested, is_excluded, depth + 1)
        elif isinstance(value, (dict, list)):
            yield from iter_candidates(value, is_excluded, depth + 1)


def iter_questions(container: Any, depth: int = 0) -> Iterator[Candidate]:
    """Yield (question name, decoded answer) for every nested per-question object."""
    if depth > _MAX_DEPTH:
        return
    if isinstance(container, dict):
        container = list(container.values())
    if not isinstance(container, list):
        return
    for value in container:
        if _is_question(value):
            answer = decode_answer(value)
            if answer is not None:
                yield value["name"], answer
            value = _question_value(value)
        if isinstance(value, (dict, list)):
            yield from iter_questions(value, depth + 1)


def _is_question(value: Any) -> bool:
    return (
        isinstance(value, dict)
        and isinstance(value.get("name"), str)
        and any(k in value for k in _QUESTION_VALUE_KEYS)
    )


def _question_value(value: dict[str, Any]) -> Any:
    return next((value[k] for k in _QUESTION_VALUE_KEYS if k in value), None)


class FieldScanner:
    """Heuristic fallback finder over the flat fields and the raw submission."""

    def __init__(self, sources: tuple[dict[str, Any], ...], is_excluded: Callable[[str], bool]) -> None:
        self._candidates = [
            (key, answer)
            for source in sources
            for key, answer in iter_candidates(source, is_excluded)
        ]

    def email(self) -> str | None:
        fallback = None
        for key, answer in self._candidates:
            text = as_text(answer)
            if text and EMAIL_RE.match(text):
                if _EMAIL_KEY_RE.search(key):
                    return text
                fallback = fallback or text
        return fallback

    def phone(self) -> str | None:
        for key, answer in self._candidates:
            if not _PHONE_KEY_RE.search(key):
                continue
            text = as_text(answer)
            if isinstance(answer, PhoneAnswer) or (text and PHONE_RE.match(text)):
                return text
        return None

    def date_of_birth(self) -> str | None:
        for key, answer in self._candidates:
            if _DOB_KEY_RE.search(key):
                dob = as_dob(answer)
                if dob:
                    return dob
        return None

    def name(self) -> NameAnswer | None:
        for key, answer in self._candidates:
            if isinstance(answer, NameAnswer):
                return answer
        for key, answer in self._candidates:
            if _NAME_KEY_RE.search(key) and not _NOT_PERSON_NAME_RE.search(key):
                text = as_text(answer)
                if text and not EMAIL_RE.match(text):
                    return as_name(answer)
        return None
