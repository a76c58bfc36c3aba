"""
Portfolio API - FastAPI Entry Point

Resume upload -> structured profile, plus short-lived share links
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import Body, Depends, FastAPI, File, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config import Settings, get_settings
from exceptions import AppError, DocumentTooLarge, ErrorCode, NoDocumentProvided
from services.extraction_pipeline import ExtractionPipeline, build_pipeline
from services.share_store import ShareStore
from utils.structured_logger import (
    configure_logging,
    new_request_id,
    reset_request_id,
    set_request_id,
)

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


class ShareResponse(BaseModel):
    shareId: str


class HealthResponse(BaseModel):
    status: str
    version: str
    provider: str
    extraction_configured: bool
    share_store: dict


def get_pipeline(request: Request) -> ExtractionPipeline:
    return request.app.state.pipeline


def get_share_store(request: Request) -> ShareStore:
    return request.app.state.share_store


def create_app(
    settings: Optional[Settings] = None,
    pipeline: Optional[ExtractionPipeline] = None,
    share_store: Optional[ShareStore] = None,
) -> FastAPI:
    """
    Build the app

    Collaborators not passed in are built from settings at startup.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
        if app.state.pipeline is None:
            app.state.pipeline = build_pipeline(settings)
        if app.state.share_store is None:
            app.state.share_store = ShareStore.from_url(settings.REDIS_URL, settings.share)
        logger.info(f"Portfolio API starting... (provider: {settings.LLM_PROVIDER.value}, env: {settings.ENV})")
        yield
        logger.info("Portfolio API shutting down...")

    app = FastAPI(
        title="Portfolio API",
        description="Resume extraction and share links",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.pipeline = pipeline
    app.state.share_store = share_store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or new_request_id()
        token = set_request_id(request_id)
        try:
            response = await call_next(request)
        finally:
            reset_request_id(token)
        response.headers["X-Request-ID"] = request_id
        return response

    # ─────────────────────────────────────────────────
    # Error handling
    # ─────────────────────────────────────────────────

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc}")
        else:
            logger.warning(f"{request.method} {request.url.path} rejected: {exc}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.error(f"{request.method} {request.url.path} crashed: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "code": ErrorCode.INTERNAL_ERROR.value},
        )

    # ─────────────────────────────────────────────────
    # Routes
    # ─────────────────────────────────────────────────

    @app.get("/health", response_model=HealthResponse)
    def health_check(request: Request):
        store: Optional[ShareStore] = request.app.state.share_store
        current: Optional[ExtractionPipeline] = request.app.state.pipeline
        return HealthResponse(
            status="healthy",
            version=VERSION,
            provider=settings.LLM_PROVIDER.value,
            extraction_configured=bool(current and current.llm_client.is_configured),
            share_store=store.health() if store else {"available": False},
        )

    @app.post("/extract")
    async def extract_profile(
        document: Optional[UploadFile] = File(None),
        resume: Optional[UploadFile] = File(None),
        pipeline: ExtractionPipeline = Depends(get_pipeline),
    ):
        """
        Resume -> profile

        Accepts the file as `document` (or `resume`, the field name older
        clients send).
        """
        upload = document or resume
        if upload is None:
            raise NoDocumentProvided("No document uploaded")

        limit = settings.max_file_size_bytes
        if upload.size is not None and upload.size > limit:
            raise DocumentTooLarge(
                f"Document exceeds {settings.MAX_FILE_SIZE_MB}MB",
                details={"size_bytes": upload.size, "limit_bytes": limit},
            )

        file_bytes = await upload.read(limit + 1)
        if not file_bytes:
            raise NoDocumentProvided("The uploaded document is empty")
        if len(file_bytes) > limit:
            raise DocumentTooLarge(
                f"Document exceeds {settings.MAX_FILE_SIZE_MB}MB",
                details={"limit_bytes": limit},
            )

        filename = upload.filename or ""
        logger.info(f"Received {filename or 'upload'} ({len(file_bytes)} bytes) for extraction")

        profile = await pipeline.extract(file_bytes, filename)
        return JSONResponse(content=profile.to_dict())

    @app.post("/share", response_model=ShareResponse)
    def create_share(
        # any JSON value, `null` included
        data: Any = Body(None),
        store: ShareStore = Depends(get_share_store),
    ):
        share_id = store.create_share(data)
        return ShareResponse(shareId=share_id)

    @app.get("/share/{share_id}")
    def get_share(
        share_id: str,
        store: ShareStore = Depends(get_share_store),
    ):
        return JSONResponse(content=store.get_share(share_id))

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG
    )
