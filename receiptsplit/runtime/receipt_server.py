"""FastAPI server for uploading receipt PDFs and splitting them."""

import hashlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from receiptsplit.application.receipts import (
    GENERIC_FAILURE_MESSAGE,
    ReceiptProcessingError,
    process_receipt_pdf,
    request_from_payload,
    run_receipt_split,
)
from receiptsplit.runtime import get_logger, get_paths

logger = get_logger(__name__)

PDF_MAGIC = b"%PDF"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create the receipts directory on startup."""
    get_paths().ensure_receipt_directories()
    yield


app = FastAPI(title="Receipt Splitter", lifespan=lifespan)


@app.post("/upload")
async def upload_receipt(request: Request) -> JSONResponse:
    """Receive a receipt PDF, keep a copy and return the parsed receipt."""
    form = await request.form()

    file = None
    for key, value in form.items():
        logger.debug(f"Form field: key={repr(key)}, type={type(value)}")
        if hasattr(value, "read"):
            file = value
            break

    if not file:
        return JSONResponse({"status": "error", "message": "No file found in request"}, status_code=400)

    contents = await file.read()
    if not contents.startswith(PDF_MAGIC):
        return JSONResponse({"status": "error", "message": GENERIC_FAILURE_MESSAGE}, status_code=422)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filename = f"receipt_{timestamp}.pdf"
    receipts_dir = get_paths().receipts
    receipts_dir.mkdir(parents=True, exist_ok=True)
    filepath: Path = receipts_dir / filename
    filepath.write_bytes(contents)

    try:
        receipt = process_receipt_pdf(contents)
    except ReceiptProcessingError as e:
        logger.error(f"Failed to process {filename}: {e.__cause__!r}")
        return JSONResponse({"status": "error", "message": GENERIC_FAILURE_MESSAGE}, status_code=422)

    return JSONResponse(
        {
            "status": "success",
            "filename": filename,
            "sha256": hashlib.sha256(contents).hexdigest(),
            "size_bytes": len(contents),
            "receipt": receipt.to_dict(),
        }
    )


@app.post("/split")
async def split_receipt(request: Request) -> JSONResponse:
    """Split parsed items among people; allocations are keyed by item index."""
    try:
        payload = await request.json()
    except ValueError:
        return JSONResponse({"status": "error", "message": "Request body must be JSON"}, status_code=400)
    if not isinstance(payload, dict):
        return JSONResponse({"status": "error", "message": "Request body must be a JSON object"}, status_code=400)

    try:
        items, discount, split_request = request_from_payload(payload)
        result = run_receipt_split(items, discount, split_request)
    except ValueError as e:
        return JSONResponse({"status": "error", "message": str(e)}, status_code=400)

    if result is None:
        return JSONResponse({"status": "empty", "message": "Add items and people to split the receipt"})
    return JSONResponse({"status": "success", "split": result.to_dict()})


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
