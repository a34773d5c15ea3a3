import io
import json
from collections.abc import Callable

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def jotform_raw_request() -> dict[str, object]:
    """Raw submission blob in the shape the form builder embeds in multipart posts."""
    return {
        "slug": "submit/241234567890",
        "event_id": "1718000000_241234567890_internal",
        "q24_whatsYour24": {"first": "Jane", "last": "Doe"},
        "q27_whatsYour27": "Jane.Doe@Example.com ",
        "q26_whatsYour26": {"full": "(555) 123-4567"},
        "q25_whatsYour25": {"full": "(555) 987-6543"},
        "q32_event_id": "evt-browser-123",
        "q40_fbp": "fb.1.1700000000000.123456789",
        "parentURL": "https://lyftgrowth.com/apply?utm_source=facebook&fbclid=ABC123",
    }


def build_multipart(fields: dict[str, str], boundary: str = "----WebKitFormBoundaryX1y2Z3") -> bytes:
    lines: list[str] = []
    for name, value in fields.items():
        lines.append(f"--{boundary}")
        lines.append(f'Content-Disposition: form-data; name="{name}"')
        lines.append("")
        lines.append(value)
    lines.append(f"--{boundary}--")
    lines.append("")
    return "\r\n".join(lines).encode("utf-8")


@pytest.fixture()
def multipart_body(jotform_raw_request: dict[str, object]) -> tuple[str, bytes]:
    boundary = "----WebKitFormBoundaryX1y2Z3"
    body = build_multipart(
        {
            "formID": "241234567890",
            "rawRequest": json.dumps(jotform_raw_request),
            "pretty": "Name:Jane Doe, Email:jane.doe@example.com",
        },
        boundary=boundary,
    )
    return f"multipart/form-data; boundary={boundary}", body


@pytest.fixture()
def make_multipart() -> Callable[..., bytes]:
    return build_multipart
