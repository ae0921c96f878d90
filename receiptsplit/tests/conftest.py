"""Shared pytest fixtures for receiptsplit tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from receiptsplit.runtime.paths import ProjectPaths, reset_paths
from receiptsplit.runtime.receipt_rules import load_receipt_grammar


@pytest.fixture
def project_root(tmp_path: Path) -> Iterator[ProjectPaths]:
    """Point project paths at a temporary root and drop cached grammars."""
    load_receipt_grammar.cache_clear()
    yield reset_paths(tmp_path)
    reset_paths()
    load_receipt_grammar.cache_clear()


class FakePage:
    def __init__(self, fragments: list[str]) -> None:
        self._fragments = fragments

    def extract_words(self) -> list[dict[str, object]]:
        return [{"text": fragment, "x0": 0.0, "top": 0.0} for fragment in self._fragments]


class FakePdf:
    def __init__(self, pages: list[list[str]]) -> None:
        self.pages = [FakePage(fragments) for fragments in pages]

    def __enter__(self) -> FakePdf:
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None


@pytest.fixture
def fake_pdf(monkeypatch: pytest.MonkeyPatch):
    """Replace pdfplumber.open with a reader returning the given pages."""

    def install(pages: list[list[str]]) -> list[object]:
        opened: list[object] = []

        def fake_open(handle: object) -> FakePdf:
            opened.append(handle)
            return FakePdf(pages)

        monkeypatch.setattr("receiptsplit.receipt.pdf_text.pdfplumber.open", fake_open)
        return opened

    return install
