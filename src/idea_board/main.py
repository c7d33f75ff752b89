# src/idea_board/main.py
"""ASGI application for the Idea Board API."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from idea_board.api.v1 import ai_router, comments_router, ideas_router, users_router
from idea_board.core.errors import IdeaBoardError
from idea_board.core.logging import configure_logging
from idea_board.core.settings import settings

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

app = FastAPI(
    title="Idea Board API",
    description="Submit, vote on, discuss and workshop product and feature ideas",
    version=settings.app_version,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)
app.add_middleware(GZipMiddleware)

for router in (ideas_router, comments_router, users_router, ai_router):
    app.include_router(router, prefix=API_PREFIX)


@app.exception_handler(IdeaBoardError)
async def handle_idea_board_error(request: Request, exc: IdeaBoardError) -> JSONResponse:
    """Answer a service failure with its fixed status and a short message."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback and hide the details from the caller."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    logger.info("%s %s starting", settings.app_name, settings.app_version)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Liveness probe; does not touch the database."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "api": API_PREFIX,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("idea_board.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
