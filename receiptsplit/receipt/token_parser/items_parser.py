"""Token-stream receipt item extraction.

Walks the whitespace tokens of a receipt once, left to right, and rebuilds
line items from them. Receipts of this layout print each item as

    (A) DESCRIPTION WORDS ... PRICE
    (C) DESCRIPTION WORDS ... QTY X UNIT_PRICE [LINE_TOTAL]

interleaved with category headers and savings lines. The rules are
heuristic; unrecognized tokens are dropped rather than reported.

Each rule looks at the token under the cursor (plus limited lookahead) and
returns a Transition telling the driver which item, if any, was emitted and
how many tokens were consumed. Rules that do not apply return None.
"""

from collections import deque
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import NamedTuple

from receiptsplit.domain.receipt import ReceiptItem
from receiptsplit.runtime.logging import get_logger

from ..amounts import (
    is_decimal_amount,
    is_integer_token,
    is_numeric_token,
    parse_decimal_comma,
    parse_numeric_token,
    to_cents,
)
from ..grammar import DEFAULT_GRAMMAR, ReceiptGrammar, matches_sequence

logger = get_logger(__name__)


class ParsePhase(Enum):
    """Where the scan currently is."""

    BEFORE_ITEMS = "before_items"
    # Inside the item section with no item open.
    AWAITING_ITEM = "awaiting_item"
    # Inside the item section with an item open.
    COLLECTING = "collecting"
    FINISHED = "finished"


@dataclass
class InProgressItem:
    """Item whose description is still being collected."""

    description: list[str] = field(default_factory=list)
    price: Decimal | None = None
    quantity: Decimal | None = None

    @property
    def text(self) -> str:
        return " ".join(self.description).strip()


@dataclass(frozen=True)
class PendingItem:
    """Item interrupted by the next prefix before its price was seen."""

    description: tuple[str, ...]

    @property
    def text(self) -> str:
        return " ".join(self.description).strip()


class Transition(NamedTuple):
    emitted: ReceiptItem | None = None
    consumed: int = 1


@dataclass
class ParseState:
    """Mutable scan state for one parse call."""

    tokens: Sequence[str]
    position: int = 0
    phase: ParsePhase = ParsePhase.BEFORE_ITEMS
    current: InProgressItem | None = None
    pending: deque[PendingItem] = field(default_factory=deque)
    entered_items_section: bool = False

    @property
    def exhausted(self) -> bool:
        return self.position >= len(self.tokens)

    def peek(self, offset: int = 0) -> str | None:
        index = self.position + offset
        if 0 <= index < len(self.tokens):
            return self.tokens[index]
        return None

    def matches(self, sequence: Sequence[str]) -> bool:
        return matches_sequence(self.tokens, self.position, sequence)

    def enter_items_section(self) -> None:
        self.entered_items_section = True
        if self.phase is ParsePhase.BEFORE_ITEMS:
            self.phase = ParsePhase.AWAITING_ITEM

    def open_item(self) -> None:
        self.current = InProgressItem()
        self.phase = ParsePhase.COLLECTING

    def take_current(self) -> InProgressItem | None:
        item = self.current
        self.current = None
        if self.phase is ParsePhase.COLLECTING:
            self.phase = ParsePhase.AWAITING_ITEM
        return item


@dataclass(frozen=True)
class ItemsParseResult:
    items: tuple[ReceiptItem, ...]
    entered_items_section: bool
    # Descriptions that never received a price.
    unresolved: tuple[str, ...] = ()


Rule = Callable[[ParseState, ReceiptGrammar], Transition | None]


def _close_current(state: ParseState) -> ReceiptItem | None:
    """Close the open item: emit it if priced, queue it if description only."""
    item = state.take_current()
    if item is None:
        return None
    if item.description and item.price is not None:
        return ReceiptItem(description=item.text, price=item.price)
    if item.description:
        logger.debug("Queueing unpriced item: %s", item.text)
        state.pending.append(PendingItem(tuple(item.description)))
    return None


def _enter_section(state: ParseState, grammar: ReceiptGrammar) -> Transition:
    token = state.peek()
    if grammar.is_item_prefix(token):
        state.enter_items_section()
        state.open_item()
    elif token in grammar.category_headers:
        state.enter_items_section()
    return Transition()


def _exit_section(state: ParseState, grammar: ReceiptGrammar) -> Transition | None:
    for sequence in grammar.stop_sequences:
        if state.matches(sequence):
            state.phase = ParsePhase.FINISHED
            return Transition(consumed=len(sequence))
    return None


def _skip_noise(state: ParseState, grammar: ReceiptGrammar) -> Transition | None:
    """Skip headers, tax lines and savings lines together with their amounts."""
    token = state.peek()
    if token is None:
        return None
    if token.endswith(":") or token in grammar.category_headers:
        return Transition()

    for sequence in grammar.discount_sequences:
        if state.matches(sequence) and is_decimal_amount(state.peek(len(sequence))):
            return Transition(consumed=len(sequence) + 1)

    if token in grammar.tax_savings_markers:
        if is_decimal_amount(state.peek(1)):
            return Transition(consumed=2)
        return Transition()
    return None


def _start_item(state: ParseState, grammar: ReceiptGrammar) -> Transition | None:
    if not grammar.is_item_prefix(state.peek()):
        return None
    emitted = _close_current(state)
    state.open_item()
    return Transition(emitted)


def _quantity_price(state: ParseState, grammar: ReceiptGrammar) -> Transition | None:
    """Handle "QTY X UNIT_PRICE [LINE_TOTAL]"."""
    current = state.current
    if current is None:
        return None

    quantity_token = state.peek()
    unit_price_token = state.peek(2)
    if quantity_token is None or not is_numeric_token(quantity_token):
        return None
    if state.peek(1) != grammar.quantity_separator:
        return None
    if unit_price_token is None or not is_decimal_amount(unit_price_token):
        return None

    quantity = parse_numeric_token(quantity_token)
    consumed = 3
    price = to_cents(quantity * parse_decimal_comma(unit_price_token))

    # Weighed goods print the rounded line total after the unit price.
    line_total_token = state.peek(3)
    if line_total_token is not None and is_decimal_amount(line_total_token):
        price = parse_decimal_comma(line_total_token)
        consumed = 4

    current.quantity = quantity
    current.price = price
    if not current.description:
        # Description may still follow; the item closes at the next prefix.
        return Transition(consumed=consumed)
    return Transition(_close_current(state), consumed)


def _bare_amount(state: ParseState, grammar: ReceiptGrammar) -> Transition | None:
    token = state.peek()
    if token is None or not is_decimal_amount(token):
        return None

    current = state.current
    if grammar.is_unit(state.peek(1)):
        # "1,5 KG" is part of the description, not a price.
        if current is not None:
            current.description.append(token)
        return Transition()

    amount = parse_decimal_comma(token)
    if current is not None and current.description:
        current.price = amount
        return Transition(_close_current(state))

    if state.pending:
        pending = state.pending.popleft()
        logger.debug("Attributing %s to earlier item: %s", token, pending.text)
        return Transition(ReceiptItem(description=pending.text, price=amount))

    logger.debug("Dropping unattached amount %s at token %d", token, state.position)
    return Transition()


def _append_description(state: ParseState, grammar: ReceiptGrammar) -> Transition:
    token = state.peek()
    current = state.current
    if token is None or current is None:
        return Transition()
    # A stray quantity before the first word is not part of the name.
    if not current.description and is_integer_token(token):
        return Transition()
    current.description.append(token)
    return Transition()


_ITEM_SECTION_RULES: tuple[Rule, ...] = (
    _exit_section,
    _skip_noise,
    _start_item,
    _quantity_price,
    _bare_amount,
    _append_description,
)


def _step(state: ParseState, grammar: ReceiptGrammar) -> Transition:
    if state.phase is ParsePhase.BEFORE_ITEMS:
        return _enter_section(state, grammar)
    for rule in _ITEM_SECTION_RULES:
        transition = rule(state, grammar)
        if transition is not None:
            return transition
    raise AssertionError("catch-all rule did not return a transition")


def filter_items(items: Sequence[ReceiptItem], grammar: ReceiptGrammar = DEFAULT_GRAMMAR) -> list[ReceiptItem]:
    """Drop non-positive prices, empty descriptions and savings/sentinel lines."""
    kept: list[ReceiptItem] = []
    for item in items:
        if item.price <= 0 or not item.description:
            logger.debug("Filtered item without price/description: %r", item)
            continue
        if grammar.is_discount_description(item.description):
            logger.debug("Filtered savings line: %s", item.description)
            continue
        if item.description in grammar.non_item_sentinels:
            logger.debug("Filtered sentinel line: %s", item.description)
            continue
        kept.append(item)
    return kept


def parse_items(tokens: Sequence[str], grammar: ReceiptGrammar | None = None) -> ItemsParseResult:
    """
    Extract line items from a receipt token sequence.

    Never raises on malformed input; unrecognized layouts give an empty list.

    Args:
        tokens: Whitespace tokens in reading order
        grammar: Sentinels/patterns to use (defaults to DEFAULT_GRAMMAR)
    """
    grammar = grammar or DEFAULT_GRAMMAR
    state = ParseState(tokens=tuple(tokens))
    emitted: list[ReceiptItem] = []

    while not state.exhausted and state.phase is not ParsePhase.FINISHED:
        transition = _step(state, grammar)
        if transition.emitted is not None:
            emitted.append(transition.emitted)
        state.position += max(transition.consumed, 1)

    final = _close_current(state)
    if final is not None:
        emitted.append(final)
    state.phase = ParsePhase.FINISHED

    if state.pending:
        logger.debug("%d item(s) left without a price", len(state.pending))

    return ItemsParseResult(
        items=tuple(filter_items(emitted, grammar)),
        entered_items_section=state.entered_items_section,
        unresolved=tuple(p.text for p in state.pending),
    )
