from dataclasses import dataclass, field

WATERMARK_SUFFIX = "_watermarked"


@dataclass(frozen=True)
class WatermarkOptions:
    """Text stamp drawn on every page, anchored left of the page center."""

    text: str = "CONFIDENTIAL"
    opacity: float = 0.25
    font_size: float = 36
    color: tuple[float, float, float] = field(default=(0.75, 0.75, 0.75))
    rotation: float = 45
    x_offset: float = -100

    def __post_init__(self) -> None:
        object.__setattr__(self, "opacity", max(0.0, min(1.0, self.opacity)))


def watermarked_filename(filename: str | None) -> str:
    """`report.PDF` -> `report_watermarked.pdf`."""
    name = (filename or "").replace('"', "").strip() or "document"
    stem = name[:-4] if name.lower().endswith(".pdf") else name
    return f"{stem}{WATERMARK_SUFFIX}.pdf"
