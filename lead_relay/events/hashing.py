import hashlib


def normalize_pii(value: object) -> str | None:
    """Trim and lowercase a PII value; blank input yields None."""
    if value is None:
        return None
    text = str(value).strip().lower()
    return text or None


def hash_pii(value: object) -> str | None:
    """SHA-256 hex digest of the normalized value, or None when blank."""
    normalized = normalize_pii(value)
    if normalized is None:
        return None
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()
