import tomllib
from pathlib import Path

import pytest
from receiptsplit.receipt.grammar import DEFAULT_GRAMMAR, build_receipt_grammar
from receiptsplit.runtime.receipt_rules import load_receipt_grammar


def test_missing_rules_file_gives_default_grammar(project_root) -> None:
    grammar = load_receipt_grammar()

    assert grammar == DEFAULT_GRAMMAR


def test_rule_layers_extend_defaults(tmp_path: Path) -> None:
    rules = tmp_path / "rules.toml"
    rules.write_text(
        "\n".join(
            [
                'category_headers = ["GARRAFEIRA"]',
                'stop_sequences = ["TOTAL EUR"]',
                'discount_sequences = [["Oferta", "Cupao"]]',
                'units = "DL"',
                'discount_words = ["OFERTA"]',
            ]
        ),
        encoding="utf-8",
    )

    grammar = load_receipt_grammar((str(rules),))

    assert "GARRAFEIRA" in grammar.category_headers
    assert "MERCEARIA" in grammar.category_headers
    assert "GARRAFEIRA" in grammar.non_item_sentinels
    assert ("TOTAL", "EUR") in grammar.stop_sequences
    assert ("SUBTOTAL",) in grammar.stop_sequences
    assert ("Oferta", "Cupao") in grammar.discount_sequences
    assert grammar.is_unit("DL")
    assert grammar.is_discount_description("Oferta especial")


def test_later_layers_replace_prefix_pattern() -> None:
    grammar = build_receipt_grammar([{"item_prefix_pattern": r"^\([A-D]\)$"}, {"quantity_separator": "x"}])

    assert grammar.is_item_prefix("(D)")
    assert not grammar.is_item_prefix("(E)")
    assert grammar.quantity_separator == "x"


def test_default_grammar_item_prefix() -> None:
    assert DEFAULT_GRAMMAR.is_item_prefix("(A)")
    assert DEFAULT_GRAMMAR.is_item_prefix("(C)")
    assert not DEFAULT_GRAMMAR.is_item_prefix("(D)")
    assert not DEFAULT_GRAMMAR.is_item_prefix("(a)")
    assert not DEFAULT_GRAMMAR.is_item_prefix(None)


def test_invalid_toml_raises(tmp_path: Path) -> None:
    rules = tmp_path / "broken.toml"
    rules.write_text("category_headers = [", encoding="utf-8")

    with pytest.raises(tomllib.TOMLDecodeError):
        load_receipt_grammar((str(rules),))
