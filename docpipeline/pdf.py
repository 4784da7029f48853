"""PDF text extraction with PyMuPDF."""

import logging
from pathlib import Path

import fitz  # PyMuPDF
from pydantic import BaseModel

from docpipeline.errors import DocumentReadError

logger = logging.getLogger(__name__)

# Average characters per page below which a PDF is probably scanned
OCR_CHARS_PER_PAGE = 600


class PdfText(BaseModel):
    """Text content of a PDF, one entry per non-empty page."""

    full_text: str
    pages: list[str]
    num_pages: int
    metadata: dict = {}


def extract_pdf_text(path: str | Path) -> PdfText:
    """Read page-segmented plain text from a PDF.

    Args:
        path: Path to the PDF file

    Returns:
        PdfText with trimmed, non-empty pages in document order

    Raises:
        DocumentReadError: The file is missing or cannot be parsed
    """
    pdf_path = Path(path)
    if not pdf_path.is_file():
        raise DocumentReadError(f"File not found: {pdf_path}")

    try:
        with fitz.open(str(pdf_path)) as doc:
            raw_pages = [page.get_text("text") for page in doc]
            num_pages = doc.page_count
            metadata = {k: v for k, v in (doc.metadata or {}).items() if v}
    except Exception as e:
        raise DocumentReadError(f"Could not read PDF {pdf_path}: {e}") from e

    pages = []
    for text in raw_pages:
        text = text.replace("\r\n", "\n").strip()
        if text:
            pages.append(text)

    if not pages:
        logger.info("No text found; PDF may be scanned. (OCR not enabled.)")

    return PdfText(
        full_text="\f".join(pages),
        pages=pages,
        num_pages=num_pages,
        metadata=metadata,
    )


def needs_ocr(pages: list[str]) -> bool:
    """Guess whether a PDF is scanned from its average text per page."""
    total = "\n".join(pages)
    return len(total) / max(1, len(pages)) < OCR_CHARS_PER_PAGE
