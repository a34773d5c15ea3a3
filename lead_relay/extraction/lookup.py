from typing import Any

from lead_relay.extraction.answers import Answer, decode_answer


def key_matches(candidate: str, key: str) -> bool:
    """Exact key or form-builder suffixed key (`q32_event_id` matches `event_id`)."""
    return candidate == key or candidate.endswith(f"_{key}")


def pick_string(container: dict[str, Any], key: str) -> str | None:
    """First non-blank string stored under `key` or any `*_<key>` in container order."""
    for candidate, value in container.items():
        if key_matches(candidate, key) and isinstance(value, str) and value.strip():
            return value.strip()
    return None


def pick_suffixed_string(container: dict[str, Any], key: str) -> str | None:
    """Like pick_string, but only suffixed keys count (the bare key is ignored)."""
    for candidate, value in container.items():
        if candidate != key and key_matches(candidate, key):
            if isinstance(value, str) and value.strip():
                return value.strip()
    return None


class FieldLookup:
    """Keyed lookup over the flat field map and the nested raw submission.

    Order: exact key in fields, exact key in the raw submission, then suffix
    match in fields, then suffix match in the raw submission. The first
    decodable, non-blank answer wins.
    """

    def __init__(
        self,
        fields: dict[str, Any],
        raw_request: dict[str, Any],
        excluded_keys: tuple[str, ...] = (),
    ) -> None:
        self._sources = (fields, raw_request)
        self._excluded_keys = excluded_keys

    def find(self, keys: tuple[str, ...], exclude: tuple[str, ...] = ()) -> Answer | None:
        for key in keys:
            for source in self._sources:
                if key in source:
                    answer = decode_answer(source[key])
                    if answer is not None:
                        return answer

        blocked = self._excluded_keys + exclude
        for key in keys:
            for source in self._sources:
                for candidate, value in source.items():
                    if candidate == key or not candidate.endswith(f"_{key}"):
                        continue
                    if self.is_excluded(candidate, blocked):
                        continue
                    answer = decode_answer(value)
                    if answer is not None:
                        return answer
        return None

    def is_excluded(self, candidate: str, blocked: tuple[str, ...] | None = None) -> bool:
        blocked = self._excluded_keys if blocked is None else blocked
        return any(key_matches(candidate, key) for key in blocked)
