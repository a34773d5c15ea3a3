"""Tolerant multipart/form-data decoder.

Form-builder webhooks are posted as multipart bodies whose parts are plain
text fields. The decoder accepts quoted or bare boundary tokens, infers the
boundary from the body when the header omits it, tolerates extra part headers,
and strips CRLF or bare-LF line endings and trailing `--` markers.
"""

import re

_BOUNDARY_RE = re.compile(r"boundary=(\"[^\"]+\"|[^;]+)", re.IGNORECASE)
_PART_NAME_RE = re.compile(r"\bname=\"([^\"]*)\"", re.IGNORECASE)
_HEADER_SEPARATORS = ("\r\n\r\n", "\n\n")


def boundary_from_content_type(content_type: str) -> str | None:
    match = _BOUNDARY_RE.search(content_type)
    if match is None:
        return None
    boundary = match.group(1).strip().strip('"')
    return boundary or None


def infer_boundary(text: str) -> str | None:
    """Take the boundary from the first `--token` line of the body."""
    first_line = text.lstrip("\r\n").split("\n", 1)[0].rstrip("\r")
    if first_line.startswith("--") and len(first_line) > 2:
        return first_line[2:].strip()
    return None


def parse_multipart(text: str, content_type: str) -> dict[str, str]:
    """Split a multipart body into a flat name -> value map.

    Parts without a `name="..."` header are skipped. Later parts with the
    same name overwrite earlier ones.
    """
    boundary = boundary_from_content_type(content_type) or infer_boundary(text)
    if not boundary:
        return {}

    fields: dict[str, str] = {}
    for part in text.split(f"--{boundary}"):
        if not part.strip() or part.strip() == "--":
            continue
        parsed = _split_part(part)
        if parsed is None:
            continue
        headers, value = parsed
        match = _PART_NAME_RE.search(headers)
        if match is None:
            continue
        fields[match.group(1)] = value
    return fields


def _split_part(part: str) -> tuple[str, str] | None:
    part = part.lstrip("\r\n")
    for separator in _HEADER_SEPARATORS:
        idx = part.find(separator)
        if idx != -1:
            return part[:idx], _trim_value(part[idx + len(separator):])
    return None


def _trim_value(value: str) -> str:
    value = re.sub(r"\r?\n--\s*$", "", value)
    if value.endswith("\r\n"):
        return value[:-2]
    if value.endswith("\n"):
        return value[:-1]
    return value
