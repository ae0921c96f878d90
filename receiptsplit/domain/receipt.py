"""Data models for parsed receipts."""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

CENTS = Decimal("0.01")


def to_cents(value: Decimal) -> Decimal:
    """Round a monetary value to cents, half up, however many digits it has."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_amount(value: Decimal | None) -> str | None:
    """Render an amount with two decimals for JSON output."""
    if value is None:
        return None
    return str(to_cents(value))


@dataclass(frozen=True)
class ReceiptItem:
    """A single line item on a receipt."""

    description: str
    price: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {"description": self.description, "price": format_amount(self.price)}


@dataclass(frozen=True)
class ReceiptSummary:
    """Summary figures found in the receipt footer."""

    subtotal: Decimal | None = None
    total: Decimal = Decimal("0")
    discount: Decimal = Decimal("0")


@dataclass(frozen=True)
class ParsedReceipt:
    """Parsed receipt data."""

    items: tuple[ReceiptItem, ...] = ()
    summary: ReceiptSummary = field(default_factory=ReceiptSummary)
    # False when no item prefix or category header was ever seen.
    entered_items_section: bool = False

    @property
    def subtotal(self) -> Decimal | None:
        return self.summary.subtotal

    @property
    def total(self) -> Decimal:
        return self.summary.total

    @property
    def discount(self) -> Decimal:
        return self.summary.discount

    @property
    def items_total(self) -> Decimal:
        return sum((item.price for item in self.items), Decimal("0"))

    def to_dict(self) -> dict[str, Any]:
        """Return the public output shape consumed by the split layer."""
        return {
            "items": [item.to_dict() for item in self.items],
            "subtotal": format_amount(self.subtotal),
            "total": format_amount(self.total),
            "discount": format_amount(self.discount),
        }
