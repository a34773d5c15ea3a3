from abc import ABC, abstractmethod

from lead_relay.pdf.models import WatermarkOptions


class BasePdfWatermarker(ABC):
    """Contract for all PDF watermarking adapters."""

    @abstractmethod
    def apply(self, pdf_bytes: bytes, options: WatermarkOptions) -> bytes:
        """Stamp a text watermark on every page.

        Args:
            pdf_bytes: Raw PDF file content.
            options: Text, opacity and placement of the stamp.

        Returns:
            The watermarked PDF as bytes.

        Raises:
            PdfWatermarkError: if the input is empty or not a readable PDF.
        """
