"""
Exception handlers for the issue tracker API.

Request IDs are logged server-side but kept out of response bodies.
Unhandled errors answer with a generic message.
"""

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from core.logging import get_logger

logger = get_logger("backend.errors")


def _get_request_id() -> str:
    return structlog.contextvars.get_contextvars().get("request_id", "-")


def _response_payload(detail: str, status_code: int) -> dict:
    return {"detail": detail, "status_code": status_code}


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logger.warning(
            "http_exception",
            path=request.url.path,
            detail=exc.detail,
            status_code=exc.status_code,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_response_payload(str(exc.detail), exc.status_code),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(request: Request, exc: ValidationError):
        logger.warning("validation_error", errors=exc.errors(), request_id=_get_request_id())
        return JSONResponse(
            status_code=422,
            content={**_response_payload("Validation error", 422), "errors": exc.errors()},
        )

    @app.exception_handler(IntegrityError)
    async def integrity_exception_handler(request: Request, exc: IntegrityError):
        # Unknown member ids in project rosters, duplicate keys
        logger.warning(
            "integrity_error",
            path=request.url.path,
            error=str(exc.orig),
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=400,
            content=_response_payload("Request conflicts with stored data", 400),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.exception(
            "database_error",
            path=request.url.path,
            error_type=type(exc).__name__,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=503,
            content=_response_payload("Database unavailable", 503),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=500,
            content=_response_payload("Internal server error", 500),
        )
