from decimal import Decimal

from receiptsplit.receipt.token_parser import extract_summary


def test_subtotal_and_card_discount() -> None:
    summary = extract_summary(["SUBTOTAL", "15,00", "Cartao", "Utilizado", "2,00"])

    assert summary.subtotal == Decimal("15.00")
    assert summary.discount == Decimal("2.00")
    assert summary.total == Decimal("0")


def test_subtotal_rebuilt_from_total_and_discount() -> None:
    summary = extract_summary(["Cartao", "Utilizado", "3,00", "TOTAL", "20,00"])

    assert summary.total == Decimal("20.00")
    assert summary.discount == Decimal("3.00")
    assert summary.subtotal == Decimal("23.00")


def test_total_due_marker_uses_amount_after_marker() -> None:
    summary = extract_summary(["TOTAL", "A", "PAGAR", "12,34"])

    assert summary.total == Decimal("12.34")
    assert summary.subtotal == Decimal("12.34")


def test_total_due_marker_wins_over_bare_total() -> None:
    tokens = ["TOTAL", "9,99", "TOTAL", "A", "PAGAR", "12,34"]

    assert extract_summary(tokens).total == Decimal("12.34")


def test_first_match_wins() -> None:
    tokens = ["SUBTOTAL", "10,00", "SUBTOTAL", "99,00", "Cartao", "Utilizado", "1,00", "Cartao", "Utilizado", "5,00"]

    summary = extract_summary(tokens)

    assert summary.subtotal == Decimal("10.00")
    assert summary.discount == Decimal("1.00")


def test_marker_without_amount_is_ignored() -> None:
    summary = extract_summary(["SUBTOTAL", "Artigos", "TOTAL", "A", "PAGAR", "EUR"])

    assert summary.subtotal is None
    assert summary.total == Decimal("0")
    assert summary.discount == Decimal("0")


def test_empty_stream() -> None:
    summary = extract_summary([])

    assert summary.subtotal is None
    assert summary.total == Decimal("0")
    assert summary.discount == Decimal("0")
