"""Exception handlers that give every failure the JSON shape clients expect.

- GameRecordError -> its own `to_response()` body (422)
- RequestValidationError (unparseable body etc.) -> 422 `{"error": ...}`
- anything else -> 500 `{"error": ...}` without internal details
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.errors import GameRecordError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(GameRecordError)
    async def game_record_error_handler(request: Request, exc: GameRecordError) -> JSONResponse:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("%s %s invalid request: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=422, content={"error": _describe(exc)})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )


def _describe(exc: RequestValidationError) -> str:
    parts = []
    for e in exc.errors():
        loc = ".".join(str(p) for p in e.get("loc", ()))
        parts.append(f"{loc}: {e.get('msg', 'invalid')}")
    return "Invalid request: " + "; ".join(parts) if parts else "Invalid request"
