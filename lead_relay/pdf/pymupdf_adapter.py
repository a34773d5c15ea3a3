import pymupdf

from lead_relay.pdf.base import BasePdfWatermarker
from lead_relay.pdf.exceptions import PdfWatermarkError
from lead_relay.pdf.models import WatermarkOptions


class PyMuPdfWatermarker(BasePdfWatermarker):
    """Stamps watermarks using PyMuPDF."""

    FONT_NAME = "helv"

    def apply(self, pdf_bytes: bytes, options: WatermarkOptions) -> bytes:
        if not pdf_bytes:
            raise PdfWatermarkError("PDF body is empty")
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                if doc.page_count == 0:
                    raise PdfWatermarkError("PDF has no pages")
                for page in doc:
                    self._stamp(page, options)
                return doc.tobytes(garbage=3, deflate=True)
        except PdfWatermarkError:
            raise
        except Exception as exc:
            raise PdfWatermarkError(f"pymupdf watermarking failed: {exc}") from exc

    def _stamp(self, page: pymupdf.Page, options: WatermarkOptions) -> None:
        rect = page.rect
        anchor = pymupdf.Point(rect.width / 2 + options.x_offset, rect.height / 2)
        page.insert_text(
            anchor,
            options.text,
            fontsize=options.font_size,
            fontname=self.FONT_NAME,
            color=options.color,
            morph=(anchor, pymupdf.Matrix(-options.rotation)),
            fill_opacity=options.opacity,
            stroke_opacity=options.opacity,
            overlay=True,
        )
