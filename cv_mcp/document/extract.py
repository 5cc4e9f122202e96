"""PDF text extraction."""

import io

from pypdf import PdfReader


def extract_pdf_text(data: bytes) -> str:
    """Extract text from all pages of a PDF, one page per line block.

    Pages with no extractable text contribute an empty string.
    """
    reader = PdfReader(io.BytesIO(data))
    return "\n".join(page.extract_text() or "" for page in reader.pages)
