"""Format a receipt split as a beancount transaction."""

import datetime
import re
from decimal import Decimal

from beancount.core import amount, data, flags
from beancount.parser import printer

from receiptsplit.domain.receipt import ParsedReceipt, format_amount
from receiptsplit.domain.split import SplitResult

DEFAULT_PAYER_ACCOUNT = "Liabilities:CreditCard:PENDING"
DEFAULT_RECEIVABLE_ROOT = "Assets:Receivable"
DEFAULT_CURRENCY = "EUR"


def account_component(name: str) -> str:
    """
    Turn a person's name into a valid beancount account component.

    "ana maria" -> "AnaMaria", "3rd" -> "3rd", "" -> "Unknown".
    """
    words = re.findall(r"[^\W_]+", name)
    component = "".join(word[:1].upper() + word[1:] for word in words)
    return component or "Unknown"


def build_split_transaction(
    receipt: ParsedReceipt,
    result: SplitResult,
    txn_date: datetime.date,
    payer_account: str = DEFAULT_PAYER_ACCOUNT,
    receivable_root: str = DEFAULT_RECEIVABLE_ROOT,
    currency: str = DEFAULT_CURRENCY,
    payee: str | None = None,
) -> data.Transaction:
    """
    Build a transaction moving each person's share off the payer's account.

    People whose share rounds to zero get no posting.
    """
    postings = [
        data.Posting(payer_account, amount.Amount(-result.final_total, currency), None, None, None, None),
    ]
    for person, share in result.totals.items():
        if share == Decimal("0"):
            continue
        account = f"{receivable_root}:{account_component(person)}"
        postings.append(data.Posting(account, amount.Amount(share, currency), None, None, None, None))

    return data.Transaction(
        meta=data.new_metadata("receiptsplit", 0),
        date=txn_date,
        flag=flags.FLAG_OKAY,
        payee=payee,
        narration=f"Receipt split ({len(receipt.items)} items)",
        tags=frozenset(),
        links=frozenset(),
        postings=postings,
    )


def format_split_transaction(
    receipt: ParsedReceipt,
    result: SplitResult,
    txn_date: datetime.date,
    payer_account: str = DEFAULT_PAYER_ACCOUNT,
    receivable_root: str = DEFAULT_RECEIVABLE_ROOT,
    currency: str = DEFAULT_CURRENCY,
    payee: str | None = None,
) -> str:
    """
    Format a split with a comment header describing the parsed receipt.

    Returns:
        Beancount text: header comments followed by the transaction
    """
    lines = [
        "; === RECEIPT SPLIT ===",
        f"; @subtotal: {format_amount(receipt.subtotal) or 'UNKNOWN'}",
        f"; @total: {format_amount(receipt.total)}",
        f"; @card_discount: {format_amount(receipt.discount)}",
        f"; @items_total: {format_amount(receipt.items_total)}",
    ]
    for item in receipt.items:
        lines.append(f";   {item.description}  {format_amount(item.price)}")

    txn = build_split_transaction(
        receipt,
        result,
        txn_date,
        payer_account=payer_account,
        receivable_root=receivable_root,
        currency=currency,
        payee=payee,
    )
    return "\n".join(lines) + "\n" + printer.format_entry(txn)
