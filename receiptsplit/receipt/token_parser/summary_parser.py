"""Subtotal/total/card-discount extraction from the receipt footer."""

from collections.abc import Sequence
from decimal import Decimal

from receiptsplit.domain.receipt import ReceiptSummary

from ..amounts import is_decimal_amount, parse_decimal_comma
from ..grammar import DEFAULT_GRAMMAR, ReceiptGrammar, matches_sequence


def _amount_after(tokens: Sequence[str], index: int, marker: Sequence[str]) -> Decimal | None:
    """Return the amount right after ``marker`` if the marker starts at ``index``."""
    if not matches_sequence(tokens, index, marker):
        return None
    amount_index = index + len(marker)
    if amount_index >= len(tokens) or not is_decimal_amount(tokens[amount_index]):
        return None
    return parse_decimal_comma(tokens[amount_index])


def extract_summary(tokens: Sequence[str], grammar: ReceiptGrammar | None = None) -> ReceiptSummary:
    """
    Scan the whole token stream for the summary figures.

    The first match per figure wins. "TOTAL A PAGAR <amount>" takes precedence
    over a bare "TOTAL <amount>". Without a subtotal marker the subtotal is
    rebuilt as total + discount.
    """
    grammar = grammar or DEFAULT_GRAMMAR
    subtotal: Decimal | None = None
    discount: Decimal | None = None
    total_due: Decimal | None = None
    total_plain: Decimal | None = None

    for i in range(len(tokens)):
        if subtotal is None:
            subtotal = _amount_after(tokens, i, grammar.subtotal_marker)
        if discount is None:
            discount = _amount_after(tokens, i, grammar.card_discount_marker)
        if total_due is None:
            total_due = _amount_after(tokens, i, grammar.total_due_marker)
        if total_plain is None:
            total_plain = _amount_after(tokens, i, grammar.total_marker)

    total = total_due if total_due is not None else total_plain
    discount_value = discount if discount is not None else Decimal("0")

    if subtotal is None and total is not None:
        subtotal = total + discount_value

    return ReceiptSummary(
        subtotal=subtotal,
        total=total if total is not None else Decimal("0"),
        discount=discount_value,
    )
