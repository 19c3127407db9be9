"""
API route aggregator: register endpoints; no logic — only delegate to handlers and services.
"""

import logging

from fastapi import APIRouter, Body, Depends, File, HTTPException, Request, Response, UploadFile
from fastapi.responses import JSONResponse, PlainTextResponse

from rescueline.api.deps import Services, get_services
from rescueline.api.handlers import handle_document_upload, handle_report
from rescueline.core.errors import StoreUnavailableError
from rescueline.schemas.query import InformationRequest, InformationResponse
from rescueline.schemas.report import ReportOut, ReportRequest, ReportResponse
from rescueline.schemas.upload import DocumentSummary, UploadResponse

logger = logging.getLogger(__name__)
router = APIRouter()
api_router = APIRouter(prefix="/api")

PIPELINE_ERROR_ANSWER = "Sorry, I couldn't process that request right now."


# --- System ---

@router.get("/", tags=["system"], response_class=PlainTextResponse)
def root() -> str:
    return "Disaster Rescue Backend API Running"


@router.get("/health", tags=["system"])
def health():
    return {"ok": True}


# --- Voice agent: information line (RAG) ---

@api_router.post(
    "/information",
    response_model=InformationResponse,
    tags=["information"],
    summary="Answer a caller question from uploaded reference documents",
    description="Accepts {query} or {data: {query}}. Always returns displayable answer text; 400 only when no query is given.",
)
def post_information(
    body: InformationRequest | None = Body(None),
    services: Services = Depends(get_services),
):
    if body is None:
        raise HTTPException(status_code=400, detail="Bad Request: Missing request body.")
    query = body.resolved_query()
    if not query:
        logger.warning("[api:post_information] missing or misformatted query: %s", body.model_dump())
        raise HTTPException(status_code=400, detail="Missing or misformatted query field")
    logger.info("[api:post_information] IN  query=%r", query)
    try:
        answer = services.pipeline.answer_query(query)
    except Exception:
        logger.exception("[api:post_information] pipeline raised")
        return JSONResponse(status_code=500, content={"answer": PIPELINE_ERROR_ANSWER})
    logger.info("[api:post_information] OUT answer_len=%d", len(answer))
    return InformationResponse(answer=answer)


# --- Voice agent: caller reports ---

@api_router.post(
    "/report",
    response_model=ReportResponse,
    status_code=201,
    tags=["reports"],
    summary="Create or update a caller report",
    description="Keyed by the x-vapi-call-sid (or call-sid) header. 201 on create, 200 on update.",
)
def post_report(
    body: ReportRequest,
    request: Request,
    response: Response,
    services: Services = Depends(get_services),
) -> ReportResponse:
    result, created = handle_report(services.report_store, body, request.headers)
    if not created:
        response.status_code = 200
    return result


# --- Dashboard ---

@api_router.get("/reports", response_model=list[ReportOut], tags=["reports"], summary="List reports, newest first")
def get_reports(services: Services = Depends(get_services)) -> list[ReportOut]:
    try:
        reports = services.report_store.list_reports()
    except StoreUnavailableError as e:
        logger.error("[api:get_reports] %s", e.message)
        raise HTTPException(status_code=500, detail="Error fetching reports") from e
    return [ReportOut.from_report(r) for r in reports]


@api_router.post(
    "/documents",
    response_model=UploadResponse,
    status_code=201,
    tags=["documents"],
    summary="Upload a reference document",
    description="Multipart field documentFile, up to 10 MB. Text is extracted and stored as answer context.",
)
async def post_document(
    documentFile: UploadFile | None = File(None, description="Text, Markdown, CSV, PDF or XLSX file."),
    services: Services = Depends(get_services),
) -> UploadResponse:
    return await handle_document_upload(services.document_store, documentFile)


@api_router.get(
    "/documents",
    response_model=list[DocumentSummary],
    tags=["documents"],
    summary="List uploaded documents, newest first",
)
def get_documents(services: Services = Depends(get_services)) -> list[DocumentSummary]:
    try:
        documents = services.document_store.list_documents()
    except StoreUnavailableError as e:
        logger.error("[api:get_documents] %s", e.message)
        raise HTTPException(status_code=500, detail="Error fetching document list") from e
    return [
        DocumentSummary(id=d.id, original_name=d.original_name, mime_type=d.mime_type, uploaded_at=d.uploaded_at)
        for d in documents
    ]


router.include_router(api_router)
