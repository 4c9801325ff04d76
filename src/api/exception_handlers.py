"""Exception handlers for the FastAPI application.

Every failure is answered as ``{"error_code", "msg", "details"}``, except
request validation, which lists one ``{"field", "msg", "type"}`` entry per
failed field under ``errors`` so clients can show each message on its own.
"""

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import settings
from core.exceptions import AppException, ErrorCode

logger = structlog.get_logger()

_VALUE_ERROR_PREFIX = "Value error, "


def _error(status_code: int, error_code: str, msg: str, details: Any = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error_code": error_code, "msg": msg, "details": details},
    )


def _field_error(error: dict[str, Any]) -> dict[str, str]:
    parts = [str(part) for part in error["loc"] if part not in ("body", "path", "query")]
    field = ".".join(parts)
    msg = str(error["msg"]).removeprefix(_VALUE_ERROR_PREFIX)
    if error["type"] == "missing" and parts:
        # Same wording as the "<Label> is required" check on blank values
        msg = f"{parts[-1].replace('_', ' ').capitalize()} is required"
    return {"field": field, "msg": msg, "type": error["type"]}


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        log = logger.warning if exc.status_code >= 409 else logger.info
        log("app_exception", error_code=exc.error_code.value, msg=exc.message)
        return _error(exc.status_code, exc.error_code.value, exc.message, exc.details)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _error(exc.status_code, "HTTP_ERROR", str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [_field_error(error) for error in exc.errors()]
        logger.info("validation_error", fields=[e["field"] for e in errors])
        return JSONResponse(
            status_code=400,
            content={
                "error_code": ErrorCode.VALIDATION_ERROR.value,
                "msg": "Request validation failed",
                "errors": errors,
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Log the cause and answer with a generic 500."""
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )

        msg = str(exc) if settings.debug and not settings.is_production else "Server Error"
        return _error(
            500,
            ErrorCode.INTERNAL_ERROR.value,
            msg,
            {"request_id": request_id},
        )
