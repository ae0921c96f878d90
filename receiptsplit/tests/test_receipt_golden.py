"""Golden-file tests for whole receipts.

Each case in tests/receipts_golden/ consists of:
  - <name>.tokens.txt: receipt text as read from the PDF text layer
  - <name>.expected.json: expected parser output (amounts as strings)
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

import pytest
from receiptsplit.receipt.receipt_parser import parse_receipt_tokens
from receiptsplit.receipt.tokenizer import tokenize_text

RECEIPTS_DIR = Path(__file__).parent / "receipts_golden"


@dataclass(frozen=True)
class GoldenCase:
    name: str
    tokens_path: Path
    expected_path: Path


def find_golden_cases() -> list[GoldenCase]:
    cases: list[GoldenCase] = []
    for expected_path in RECEIPTS_DIR.glob("*.expected.json"):
        name = expected_path.name.removesuffix(".expected.json")
        cases.append(
            GoldenCase(
                name=name,
                tokens_path=RECEIPTS_DIR / f"{name}.tokens.txt",
                expected_path=expected_path,
            )
        )
    return sorted(cases, key=lambda c: c.name)


def load_expected(expected_path: Path) -> dict[str, Any]:
    with open(expected_path, encoding="utf-8") as f:
        return cast(dict[str, Any], json.load(f))


def test_golden_cases_present() -> None:
    assert len(find_golden_cases()) >= 3


@pytest.mark.parametrize("case", find_golden_cases(), ids=lambda c: c.name)
def test_golden_receipt(case: GoldenCase) -> None:
    tokens = tokenize_text(case.tokens_path.read_text(encoding="utf-8"))

    receipt = parse_receipt_tokens(tokens)

    assert receipt.to_dict() == load_expected(case.expected_path)
