"""Sentinel words and token patterns of the supported receipt layout.

The built-in values describe the receipts this project was written for.
Extra sentinels can be layered on top from TOML (see
receiptsplit.runtime.receipt_rules); list values extend the defaults and
``item_prefix_pattern`` / ``quantity_separator`` replace them.

Matching is case-sensitive on purpose, except for ``discount_words``.
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

DEFAULT_ITEM_PREFIX_PATTERN = r"^\([A-C]\)$"
DEFAULT_QUANTITY_SEPARATOR = "X"

DEFAULT_CATEGORY_HEADERS = (
    "MERCEARIA",
    "PADARIA",
    "PASTELARIA",
    "TALHO",
    "PEIXARIA",
    "CHARCUTARIA",
    "LACTICINIOS",
    "CONGELADOS",
    "BEBIDAS",
    "FRUTAS",
    "LEGUMES",
    "DROGARIA",
    "PERFUMARIA",
    "HIGIENE",
    "LIMPEZA",
)

# Token sequences that end the item section.
DEFAULT_STOP_SEQUENCES: tuple[tuple[str, ...], ...] = (
    ("SUBTOTAL",),
    ("TOTAL", "A"),
)

# Single-token tax/savings lines, usually followed by an amount.
DEFAULT_TAX_SAVINGS_MARKERS = (
    "IVA",
    "Poupanca",
    "Desconto/Poupanca",
)

# Two-token discount lines followed by an amount.
DEFAULT_DISCOUNT_SEQUENCES: tuple[tuple[str, ...], ...] = (
    ("Desconto", "Imediato"),
    ("Desconto", "Cartao"),
    ("Poupanca", "Imediata"),
)

DEFAULT_UNITS = (
    "KG",
    "Kg",
    "kg",
    "G",
    "g",
    "GR",
    "gr",
    "L",
    "l",
    "LT",
    "lt",
    "CL",
    "cl",
    "ML",
    "ml",
)

# Case-insensitive substrings marking a savings line rather than an item.
DEFAULT_DISCOUNT_WORDS = (
    "desconto",
    "poupanca",
    "poupança",
)

DEFAULT_NON_ITEM_SENTINELS = (
    "SUBTOTAL",
    "TOTAL",
    "IVA",
)

SUBTOTAL_MARKER = ("SUBTOTAL",)
CARD_DISCOUNT_MARKER = ("Cartao", "Utilizado")
TOTAL_DUE_MARKER = ("TOTAL", "A", "PAGAR")
TOTAL_MARKER = ("TOTAL",)


@dataclass(frozen=True)
class ReceiptGrammar:
    """In-memory sentinel sets and patterns used by the parsers."""

    item_prefix: re.Pattern[str]
    quantity_separator: str
    category_headers: frozenset[str]
    stop_sequences: tuple[tuple[str, ...], ...]
    tax_savings_markers: frozenset[str]
    discount_sequences: tuple[tuple[str, ...], ...]
    units: frozenset[str]
    discount_words: tuple[str, ...]
    non_item_sentinels: frozenset[str]
    subtotal_marker: tuple[str, ...] = SUBTOTAL_MARKER
    card_discount_marker: tuple[str, ...] = CARD_DISCOUNT_MARKER
    total_due_marker: tuple[str, ...] = TOTAL_DUE_MARKER
    total_marker: tuple[str, ...] = TOTAL_MARKER

    def is_item_prefix(self, token: str | None) -> bool:
        return token is not None and self.item_prefix.match(token) is not None

    def is_unit(self, token: str | None) -> bool:
        return token is not None and token in self.units

    def is_discount_description(self, description: str) -> bool:
        lowered = description.lower()
        return any(word in lowered for word in self.discount_words)


def matches_sequence(tokens: Sequence[str], index: int, sequence: Sequence[str]) -> bool:
    """Return True if ``tokens[index:]`` starts with ``sequence``."""
    if not sequence:
        return False
    end = index + len(sequence)
    if end > len(tokens):
        return False
    return tuple(tokens[index:end]) == tuple(sequence)


def _normalize_words(raw: Any) -> tuple[str, ...]:
    """Normalize a TOML string or list of strings into a tuple."""
    if isinstance(raw, str):
        value = raw.strip()
        return (value,) if value else tuple()
    if isinstance(raw, list):
        return tuple(str(v).strip() for v in raw if str(v).strip())
    return tuple()


def _normalize_sequences(raw: Any) -> tuple[tuple[str, ...], ...]:
    """Normalize a TOML list of sequences; plain strings are split on whitespace."""
    if not isinstance(raw, list):
        return tuple()
    sequences: list[tuple[str, ...]] = []
    for entry in raw:
        if isinstance(entry, str):
            words = tuple(entry.split())
        else:
            words = _normalize_words(entry)
        if words:
            sequences.append(words)
    return tuple(sequences)


def _extend_unique(base: list[Any], extra: Sequence[Any]) -> None:
    for value in extra:
        if value not in base:
            base.append(value)


def build_receipt_grammar(configs: Sequence[Mapping[str, Any]] | None = None) -> ReceiptGrammar:
    """Build the grammar from built-in defaults plus in-memory TOML layers."""
    item_prefix_pattern = DEFAULT_ITEM_PREFIX_PATTERN
    quantity_separator = DEFAULT_QUANTITY_SEPARATOR
    category_headers = list(DEFAULT_CATEGORY_HEADERS)
    stop_sequences = list(DEFAULT_STOP_SEQUENCES)
    tax_savings_markers = list(DEFAULT_TAX_SAVINGS_MARKERS)
    discount_sequences = list(DEFAULT_DISCOUNT_SEQUENCES)
    units = list(DEFAULT_UNITS)
    discount_words = list(DEFAULT_DISCOUNT_WORDS)
    non_item_sentinels = list(DEFAULT_NON_ITEM_SENTINELS)

    for config in configs or ():
        pattern = str(config.get("item_prefix_pattern") or "").strip()
        if pattern:
            item_prefix_pattern = pattern
        separator = str(config.get("quantity_separator") or "").strip()
        if separator:
            quantity_separator = separator

        _extend_unique(category_headers, _normalize_words(config.get("category_headers")))
        _extend_unique(stop_sequences, _normalize_sequences(config.get("stop_sequences")))
        _extend_unique(tax_savings_markers, _normalize_words(config.get("tax_savings_markers")))
        _extend_unique(discount_sequences, _normalize_sequences(config.get("discount_sequences")))
        _extend_unique(units, _normalize_words(config.get("units")))
        _extend_unique(discount_words, [w.lower() for w in _normalize_words(config.get("discount_words"))])
        _extend_unique(non_item_sentinels, _normalize_words(config.get("non_item_sentinels")))

    return ReceiptGrammar(
        item_prefix=re.compile(item_prefix_pattern),
        quantity_separator=quantity_separator,
        category_headers=frozenset(category_headers),
        stop_sequences=tuple(stop_sequences),
        tax_savings_markers=frozenset(tax_savings_markers),
        discount_sequences=tuple(discount_sequences),
        units=frozenset(units),
        discount_words=tuple(discount_words),
        # A lone category header is never an item either.
        non_item_sentinels=frozenset(non_item_sentinels) | frozenset(category_headers),
    )


DEFAULT_GRAMMAR = build_receipt_grammar()
