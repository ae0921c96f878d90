from __future__ import annotations

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from receiptsplit.application.receipts import GENERIC_FAILURE_MESSAGE, ReceiptProcessingError
from receiptsplit.domain.receipt import ParsedReceipt, ReceiptItem, ReceiptSummary
from receiptsplit.runtime import receipt_server

RECEIPT = ParsedReceipt(
    items=(ReceiptItem("Pao", Decimal("3.00")), ReceiptItem("Vinho", Decimal("6.00"))),
    summary=ReceiptSummary(subtotal=Decimal("9.00"), total=Decimal("8.10"), discount=Decimal("0.90")),
    entered_items_section=True,
)


@pytest.fixture
def client(project_root):
    with TestClient(receipt_server.app) as test_client:
        yield test_client


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_upload_returns_parsed_receipt(client: TestClient, project_root, monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[bytes] = []

    def fake_process(contents: bytes) -> ParsedReceipt:
        seen.append(contents)
        return RECEIPT

    monkeypatch.setattr(receipt_server, "process_receipt_pdf", fake_process)

    response = client.post("/upload", files={"file": ("receipt.pdf", b"%PDF-1.4 body", "application/pdf")})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert body["size_bytes"] == len(b"%PDF-1.4 body")
    assert body["receipt"] == {
        "items": [
            {"description": "Pao", "price": "3.00"},
            {"description": "Vinho", "price": "6.00"},
        ],
        "subtotal": "9.00",
        "total": "8.10",
        "discount": "0.90",
    }
    assert seen == [b"%PDF-1.4 body"]
    assert (project_root.receipts / body["filename"]).read_bytes() == b"%PDF-1.4 body"


def test_upload_rejects_non_pdf(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    def unexpected(contents: bytes) -> ParsedReceipt:
        raise AssertionError("should not parse")

    monkeypatch.setattr(receipt_server, "process_receipt_pdf", unexpected)

    response = client.post("/upload", files={"file": ("receipt.txt", b"hello", "text/plain")})

    assert response.status_code == 422
    assert response.json() == {"status": "error", "message": GENERIC_FAILURE_MESSAGE}


def test_upload_processing_failure(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    def broken(contents: bytes) -> ParsedReceipt:
        raise ReceiptProcessingError(GENERIC_FAILURE_MESSAGE)

    monkeypatch.setattr(receipt_server, "process_receipt_pdf", broken)

    response = client.post("/upload", files={"file": ("receipt.pdf", b"%PDF-broken", "application/pdf")})

    assert response.status_code == 422
    assert response.json()["message"] == GENERIC_FAILURE_MESSAGE


def test_upload_without_file(client: TestClient) -> None:
    response = client.post("/upload", data={"note": "no file"})

    assert response.status_code == 400
    assert response.json()["status"] == "error"


def test_split(client: TestClient) -> None:
    payload = {
        "items": [{"description": "Pao", "price": "3,00"}, {"description": "Vinho", "price": "6.00"}],
        "people": ["Ana", "Rui"],
        "allocations": {"0": {"for_all": True}, "1": {"people": ["Rui"]}},
        "discount": "0,90",
    }

    response = client.post("/split", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert body["split"]["totals"] == {"Ana": "1.35", "Rui": "6.75"}
    assert body["split"]["final_total"] == "8.10"


def test_split_without_people_is_empty(client: TestClient) -> None:
    response = client.post("/split", json={"items": [{"description": "Pao", "price": "3.00"}], "people": []})

    assert response.status_code == 200
    assert response.json()["status"] == "empty"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"content": b"not json", "headers": {"content-type": "application/json"}},
        {"json": ["a", "list"]},
        {"json": {"items": [{"description": "Pao", "price": "x"}], "people": ["Ana"]}},
        {"json": {"items": [{"description": "Pao", "price": "Infinity"}], "people": ["Ana"]}},
        {"json": {"items": [{"description": "Pao", "price": "NaN"}], "people": ["Ana"]}},
        {"json": {"items": [{"description": "Pao", "price": "sNaN"}], "people": ["Ana"]}},
        {"json": {"items": [], "people": ["Ana"], "discount": "Infinity"}},
    ],
)
def test_split_rejects_bad_bodies(client: TestClient, kwargs: dict) -> None:
    response = client.post("/split", **kwargs)

    assert response.status_code == 400
    assert response.json()["status"] == "error"
