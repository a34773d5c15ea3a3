from dataclasses import dataclass, field


@dataclass(frozen=True)
class ExtractedApplicant:
    """Best-effort applicant attributes. Values are raw and must be hashed before leaving the process."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phones: tuple[str, ...] = ()
    date_of_birth: str | None = None  # YYYYMMDD

    def presence(self) -> dict[str, bool | int]:
        return {
            "has_first_name": bool(self.first_name),
            "has_last_name": bool(self.last_name),
            "has_email": bool(self.email),
            "phone_count": len(self.phones),
            "has_dob": bool(self.date_of_birth),
        }


@dataclass(frozen=True)
class BrowserIdentifiers:
    fbp: str | None = None
    fbc: str | None = None
    fbc_reconstructed: bool = False


@dataclass
class ExtractionResult:
    """Everything the normalizer needs from one submission."""

    applicant: ExtractedApplicant
    browser_ids: BrowserIdentifiers
    marketing: dict[str, str] = field(default_factory=dict)
    event_id: str | None = None
    event_source_url: str | None = None
    partner_present: bool = False
    form_id: str | None = None
    field_keys: list[str] = field(default_factory=list)
