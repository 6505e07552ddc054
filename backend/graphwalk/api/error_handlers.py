"""Error Handlers — map failures on graph routes to structured JSON.

Invariants:
    - GraphwalkError → its own envelope and status; its ErrorContext (session,
      intent, node) is logged as structured extras
    - RequestValidationError → 400 VALIDATION_ERROR with one entry per bad field
      (off-canvas coordinates, negative weights, unknown enum values)
    - Anything else → 500 INTERNAL_ERROR envelope, never the exception text

Design Decisions:
    - Domain and catch-all share the GraphwalkError envelope (InternalError),
      so clients parse a single error shape
    - Conflicts (run in progress) log at WARNING, everything else at ERROR,
      following the error's own severity
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from graphwalk.core.errors import (
    ErrorCategory, ErrorContext, ErrorSeverity, GraphwalkError, InternalError,
)

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GraphwalkError, graphwalk_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


async def graphwalk_error_handler(request: Request, exc: GraphwalkError):
    logger.log(
        _LOG_LEVELS[exc.severity], "%s on %s: %s",
        exc.code, request.url.path, exc.message,
        extra={
            **exc.context.log_extra(),
            "error_code": exc.code,
            "path": request.url.path,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = _field_errors(exc)
    logger.warning(
        "Rejected payload on %s: %s", request.url.path,
        ", ".join(d["field"] for d in details),
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "category": ErrorCategory.VALIDATION.value,
                "severity": ErrorSeverity.ERROR.value,
                "details": details,
            },
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    session_id = request.path_params.get("session_id")
    err = InternalError(ErrorContext(
        session_id=str(session_id) if session_id is not None else None,
    ))
    logger.error(
        "Unhandled %s on %s", type(exc).__name__, request.url.path,
        extra={**err.context.log_extra(), "error_code": err.code,
               "path": request.url.path},
        exc_info=exc,
    )
    return JSONResponse(status_code=err.http_status, content=err.to_response())


def _field_errors(exc: RequestValidationError) -> list[dict]:
    # loc starts with "body" / "path"; keep it so clients know which part failed
    return [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
