class PdfWatermarkError(Exception):
    """Raised when a PDF cannot be opened or stamped."""
