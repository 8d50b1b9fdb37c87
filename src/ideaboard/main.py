# src/ideaboard/main.py
"""Main entry point for the Ideaboard application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ideaboard import __version__
from ideaboard.api.v1 import (
    auth_router,
    feedback_router,
    ideas_router,
    ratings_router,
    users_router,
)
from ideaboard.core.errors import InternalError, ServiceError
from ideaboard.core.settings import settings
from ideaboard.db.session import create_tables, dispose_engine
from ideaboard.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Ideaboard API",
    description="Submit ideas, collect peer feedback and star ratings",
    version=__version__,
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

# Failure statuses every v1 route may answer with, documented with the error envelope.
_ERROR_RESPONSES = {
    code: {"model": ErrorResponse}
    for code in (
        status.HTTP_400_BAD_REQUEST,
        status.HTTP_401_UNAUTHORIZED,
        status.HTTP_403_FORBIDDEN,
        status.HTTP_404_NOT_FOUND,
        status.HTTP_409_CONFLICT,
    )
}

# Include API routers
app.include_router(auth_router, prefix="/api/v1", responses=_ERROR_RESPONSES)
app.include_router(ideas_router, prefix="/api/v1", responses=_ERROR_RESPONSES)
app.include_router(feedback_router, prefix="/api/v1", responses=_ERROR_RESPONSES)
app.include_router(ratings_router, prefix="/api/v1", responses=_ERROR_RESPONSES)
app.include_router(users_router, prefix="/api/v1", responses=_ERROR_RESPONSES)


def _request_context(request: Request) -> str:
    user_id = getattr(request.state, "user_id", None) or "anonymous"
    return f"{request.method} {request.url.path} user={user_id}"


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Translate a typed service failure into its status code and error envelope."""
    if isinstance(exc, InternalError):
        logger.error("%s failed: %r", _request_context(request), exc, exc_info=exc)
        exc = InternalError("An unexpected error occurred")
    else:
        logger.info("%s rejected: %r", _request_context(request), exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed bodies and query strings as validation failures."""
    details = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part not in ("body", "query")),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    logger.info("%s invalid request: %s", _request_context(request), details)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_FAILED",
                "message": "Validation failed",
                "details": details,
            }
        },
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap framework HTTP errors (unknown routes, bad methods) in the error envelope."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        code = "NOT_FOUND"
        message = f"Route {request.method} {request.url.path} not found"
    else:
        code = "HTTP_ERROR"
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": code, "message": message}},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log anything unexpected and hide its details from the client."""
    logger.error("%s unhandled error", _request_context(request), exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": {"code": "INTERNAL_ERROR", "message": "An unexpected error occurred"}},
    )


@app.on_event("startup")
async def on_startup() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    if settings.auto_create_tables:
        create_tables()
    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    dispose_engine()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "Ideaboard API",
        "version": __version__,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("ideaboard.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
