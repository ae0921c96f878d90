"""Turn extracted page text into a flat token sequence."""

import re
from collections.abc import Iterable

_WHITESPACE = re.compile(r"\s+")


def tokenize_text(text: str) -> list[str]:
    """Split text on runs of whitespace, dropping empty tokens."""
    return [token for token in _WHITESPACE.split(text) if token]


def join_pages(pages: Iterable[Iterable[str]]) -> str:
    """Join fragments within a page, then pages, with single spaces."""
    return " ".join(" ".join(fragments) for fragments in pages)


def tokenize_pages(pages: Iterable[Iterable[str]]) -> list[str]:
    """
    Tokenize per-page text fragments in reading order.

    Case and punctuation are left untouched; the parser patterns rely on them.
    """
    return tokenize_text(join_pages(pages))
