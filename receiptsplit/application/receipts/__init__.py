"""Receipt workflows."""

from receiptsplit.application.receipts.process import (
    GENERIC_FAILURE_MESSAGE,
    ReceiptProcessingError,
    process_receipt_pdf,
)
from receiptsplit.application.receipts.split import (
    SplitRequest,
    build_split_plan,
    request_from_payload,
    run_receipt_split,
)

__all__ = [
    "GENERIC_FAILURE_MESSAGE",
    "ReceiptProcessingError",
    "process_receipt_pdf",
    "SplitRequest",
    "build_split_plan",
    "request_from_payload",
    "run_receipt_split",
]
