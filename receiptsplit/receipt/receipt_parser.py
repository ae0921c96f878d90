"""Parse receipt text into structured Receipt data."""

from collections.abc import Iterable, Sequence

from receiptsplit.domain.receipt import ParsedReceipt
from receiptsplit.runtime.logging import get_logger

from .grammar import ReceiptGrammar
from .token_parser import extract_summary, parse_items
from .tokenizer import tokenize_pages

logger = get_logger(__name__)


def parse_receipt_tokens(tokens: Sequence[str], grammar: ReceiptGrammar | None = None) -> ParsedReceipt:
    """
    Parse a receipt token sequence into items and summary figures.

    Items and summary come from two independent scans over the same tokens.
    Malformed input degrades to fewer (or no) items; nothing is raised.
    """
    tokens = tuple(tokens)
    items_result = parse_items(tokens, grammar)
    summary = extract_summary(tokens, grammar)

    logger.debug(
        "Parsed %d token(s): %d item(s), subtotal=%s total=%s discount=%s",
        len(tokens),
        len(items_result.items),
        summary.subtotal,
        summary.total,
        summary.discount,
    )
    if not items_result.entered_items_section:
        logger.info("No item section found in receipt text")

    return ParsedReceipt(
        items=items_result.items,
        summary=summary,
        entered_items_section=items_result.entered_items_section,
    )


def parse_receipt_pages(
    pages: Iterable[Iterable[str]],
    grammar: ReceiptGrammar | None = None,
) -> ParsedReceipt:
    """Tokenize per-page text fragments, then parse them."""
    return parse_receipt_tokens(tokenize_pages(pages), grammar)
