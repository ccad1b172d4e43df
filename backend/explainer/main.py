"""
Explainer API
FastAPI application that queues topic -> explainer video pipeline runs.

This is the main entry point that wires together routes and services.
"""

import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .config import API_TITLE, API_DESCRIPTION, API_VERSION, CORS_ORIGINS, OUTPUT_DIR
from .routes import jobs_router
from .core import (
    setup_logging_from_env,
    get_logger,
    set_request_id,
    clear_context,
    missing_runtime_tools,
    runtime_tool_report,
    REQUIRED_RENDER_TOOLS,
)
from .services.infrastructure.orchestration import get_job_queue

setup_logging_from_env()

logger = get_logger(__name__, service="api")


@asynccontextmanager
async def lifespan(_app: FastAPI):
    missing = missing_runtime_tools(REQUIRED_RENDER_TOOLS)
    if missing:
        logger.warning("Render tools missing from PATH", extra={"missing_tools": missing})
    logger.info("Starting Explainer API", extra={"output_dir": str(OUTPUT_DIR)})
    _app.state.job_queue = get_job_queue()
    yield
    if _app.state.job_queue.is_busy:
        logger.warning(
            "Shutting down with unfinished jobs",
            extra={"pending": _app.state.job_queue.pending_count},
        )


app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    lifespan=lifespan,
)


@app.middleware("http")
async def add_request_correlation(request: Request, call_next):
    """Add a correlation ID to every request and response."""
    request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
    set_request_id(request_id)
    path = request.url.path

    logger.info(f"{request.method} {path}", extra={
        "method": request.method,
        "path": path,
        "client": request.client.host if request.client else "unknown",
    })

    try:
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        logger.info(f"Response: {response.status_code}", extra={
            "status_code": response.status_code,
            "method": request.method,
            "path": path,
        })
        return response
    finally:
        clear_context()


app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(jobs_router)


@app.get("/")
async def root():
    """Root endpoint - API info"""
    return {
        "message": "Explainer API - Generate animated explainer videos from a topic",
        "version": API_VERSION,
    }


@app.get("/health")
async def health_check():
    """
    Liveness probe.

    Always 200 while the process is serving; tool availability is reported
    for information only.
    """
    return {
        "ok": True,
        "time": datetime.now(timezone.utc).isoformat(),
        "tools": runtime_tool_report(),
    }
