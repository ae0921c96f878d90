"""Read the text layer of receipt PDFs."""

import io
from pathlib import Path

import pdfplumber

from receiptsplit.runtime.logging import get_logger

logger = get_logger(__name__)


def extract_page_fragments(source: bytes | Path | str) -> list[list[str]]:
    """
    Return, per page, the text fragments of the PDF in reading order.

    Errors raised by the PDF reader are not caught here.

    Args:
        source: Raw PDF bytes or a path to a PDF file
    """
    handle: io.BytesIO | str
    if isinstance(source, bytes):
        handle = io.BytesIO(source)
    else:
        handle = str(source)

    pages: list[list[str]] = []
    with pdfplumber.open(handle) as pdf:
        for page_number, page in enumerate(pdf.pages, start=1):
            words = page.extract_words()
            fragments = [word["text"] for word in words if word.get("text")]
            logger.debug("Page %d: %d text fragment(s)", page_number, len(fragments))
            pages.append(fragments)

    logger.debug("Extracted %d page(s)", len(pages))
    return pages
