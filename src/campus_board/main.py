# src/campus_board/main.py
"""Main entry point for the Campus Board application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from campus_board.api.v1 import (
    applications_router,
    conversations_router,
    messages_router,
    opportunities_router,
)
from campus_board.core.settings import settings
from campus_board.schemas.common import ErrorResponse
from campus_board.services.errors import ServiceError, Unavailable

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Campus Board API",
    description="Conversations, messages and interest expressions for the campus board",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(conversations_router, prefix="/api/v1")
app.include_router(messages_router, prefix="/api/v1")
app.include_router(opportunities_router, prefix="/api/v1")
app.include_router(applications_router, prefix="/api/v1")


@app.exception_handler(ServiceError)
async def service_error_handler(_: Request, exc: ServiceError) -> JSONResponse:
    """Translate service-layer errors into their HTTP form."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(detail=exc.detail, code=exc.code).model_dump(),
    )


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Report storage failures as unavailable without leaking driver detail."""
    logger.error("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
    detail = str(exc) if settings.debug else "Service temporarily unavailable"
    return JSONResponse(
        status_code=Unavailable.status_code,
        content=ErrorResponse(detail=detail, code=Unavailable.code).model_dump(),
    )


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("campus_board.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
