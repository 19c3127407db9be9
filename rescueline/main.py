# Run from project root: uvicorn rescueline.main:app --reload

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException

from rescueline.agent.llm import build_text_model
from rescueline.api.deps import Services
from rescueline.api.routes import router
from rescueline.core.config import CONTEXT_DOC_LIMIT, DB_PATH
from rescueline.core.document_store import SqliteDocumentStore
from rescueline.core.report_store import SqliteReportStore
from rescueline.services.information_service import InformationPipeline

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def build_services() -> Services:
    """Construct stores and the information pipeline from config."""
    document_store = SqliteDocumentStore(DB_PATH)
    return Services(
        document_store=document_store,
        report_store=SqliteReportStore(DB_PATH),
        pipeline=InformationPipeline(document_store, build_text_model(), context_limit=CONTEXT_DOC_LIMIT),
    )


def create_app(services: Services | None = None) -> FastAPI:
    """Build the API. Pass services to inject fakes; otherwise they are built from config at startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "services", None) is None:
            app.state.services = build_services()
            logger.info("[main] services built db_path=%s", DB_PATH)
        yield

    app = FastAPI(title="Disaster Rescue Backend", lifespan=lifespan)
    app.state.services = services
    app.include_router(router)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("Incoming Request: %s %s", request.method, request.url.path)
        return await call_next(request)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid request body", "errors": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
        logger.error("Unhandled Error on %s", request.url.path, exc_info=exc)
        return PlainTextResponse("Something broke!", status_code=500)

    return app


app = create_app()
