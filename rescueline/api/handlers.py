"""
API handlers: read request data (headers, UploadFile), call services, map results/errors to HTTP.

Responsibility: Bridge HTTP types and services. Marshalling and exception-to-HTTP mapping.
Lives in the API layer so services stay free of FastAPI/HTTP types.
"""

import logging
import time

from fastapi import HTTPException, UploadFile
from starlette.datastructures import Headers

from rescueline.core.document_store import DocumentStore
from rescueline.core.errors import InvalidDocumentError, StoreUnavailableError
from rescueline.core.report_store import ReportStore, ReportUpdate
from rescueline.schemas.report import ReportRequest, ReportResponse
from rescueline.schemas.upload import UploadResponse
from rescueline.services.ingestion_service import ingest_document

logger = logging.getLogger(__name__)

CALL_SID_HEADERS = ("x-vapi-call-sid", "call-sid")
CALLER_NUMBER_HEADERS = ("x-vapi-caller-number", "caller-number")


def _first_header(headers: Headers, names: tuple[str, ...]) -> str | None:
    for name in names:
        value = (headers.get(name) or "").strip()
        if value:
            return value
    return None


def handle_report(store: ReportStore, body: ReportRequest, headers: Headers) -> tuple[ReportResponse, bool]:
    """Upsert a caller report keyed by the call SID header. Returns (response, created)."""
    call_sid = _first_header(headers, CALL_SID_HEADERS) or f"unknown-{int(time.time() * 1000)}"
    caller_number = _first_header(headers, CALLER_NUMBER_HEADERS)
    logger.info("[handlers:handle_report] call_sid=%s caller_number=%s", call_sid, caller_number)
    update = ReportUpdate(
        call_sid=call_sid,
        location=body.location,
        people_count=body.people_count,
        need_description=body.need_description,
        caller_number=caller_number,
        is_urgent=body.is_urgent,
    )
    try:
        report, created = store.upsert(update)
    except StoreUnavailableError as e:
        logger.error("[handlers:handle_report] store failed: %s", e.message)
        raise HTTPException(status_code=500, detail="Internal server error processing report") from e
    message = "Report received successfully" if created else "Report updated successfully"
    return ReportResponse(message=message, report_id=report.id), created


async def handle_document_upload(store: DocumentStore, upload: UploadFile | None) -> UploadResponse:
    """Read the uploaded file, ingest it, and map ingestion errors to HTTP 400/413/500."""
    if upload is None:
        raise HTTPException(status_code=400, detail="No document file uploaded.")
    raw = await upload.read()
    try:
        stored = ingest_document(store, upload.filename or "", upload.content_type or "", raw)
    except InvalidDocumentError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    except StoreUnavailableError as e:
        logger.error("[handlers:handle_document_upload] store failed: %s", e.message)
        raise HTTPException(status_code=500, detail="Error processing document") from e
    logger.info("[handlers:handle_document_upload] saved %s as id=%s", stored.original_name, stored.id)
    return UploadResponse(message="Document uploaded and processed successfully.", doc_id=stored.id)
