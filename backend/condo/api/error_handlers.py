"""Error Handlers — map core failures to the JSON error envelope.

Invariants:
    - CondoError → its own to_response() envelope and http_status
    - RequestValidationError → 400 VALIDATION_ERROR, same envelope plus field details
    - Any other exception → 500 INTERNAL_ERROR, message never includes internals

Design Decisions:
    - Body-shape errors reuse the core's VALIDATION_ERROR code so clients handle
      one code for every bad-input case
    - A full slot or unknown record is an expected outcome: INFO; 5xx: ERROR
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from condo.core.errors import CondoError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CondoError, handle_condo_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)


def _envelope(
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    **extra,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **extra,
        },
    }


async def handle_condo_error(request: Request, exc: CondoError) -> JSONResponse:
    logger.log(
        logging.ERROR if exc.http_status >= 500 else logging.INFO,
        f"{request.method} {request.url.path} -> {exc.http_status} {exc.code}: "
        f"{exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "facility_id": exc.context.facility_id,
            "invoice_id": exc.context.invoice_id,
            "payment_id": exc.context.payment_id,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_request_validation(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Malformed body or query: field-level details, no state touched."""
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.info(
        f"{request.method} {request.url.path} -> 400 malformed request: "
        f"{[d['field'] for d in details]}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR,
            details=details,
        ),
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"{request.method} {request.url.path} -> 500 unhandled {type(exc).__name__}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )
