"""
Exception handlers turning conversion and export failures into ErrorResponse bodies.

Conversion errors carry an ErrorKind, returned as ``kind`` next to the error
code. An undetectable block and a single bad value given directly to the
API share that shape.
"""

import logging
from typing import Any, Union

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from coordsuite.core.errors import CoordSuiteException, ConversionError, UndetectableFormatError
from coordsuite.models.errors import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


def _error_response(request: Request, status_code: int, **fields: Any) -> JSONResponse:
    body = ErrorResponse(request_id=getattr(request.state, "request_id", None), **fields)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


def _fields(exc: CoordSuiteException) -> dict:
    return {
        "error_code": exc.error_code,
        "message": exc.message,
        "details": exc.details or None,
        "suggestions": exc.suggestions or None,
    }


async def conversion_error_handler(
    request: Request, exc: Union[UndetectableFormatError, ConversionError]
) -> JSONResponse:
    """Reject input that cannot be converted, naming the failure kind."""
    logger.info(
        f"Conversion rejected ({exc.kind.value}): {exc.message}",
        extra={"error_code": exc.error_code, "error_kind": exc.kind.value},
    )
    return _error_response(request, exc.status_code, kind=exc.kind, **_fields(exc))


async def coordsuite_exception_handler(request: Request, exc: CoordSuiteException) -> JSONResponse:
    """Handle the remaining application errors, such as export failures."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(f"{exc.error_code}: {exc.message}", extra={"error_code": exc.error_code})
    return _error_response(request, exc.status_code, **_fields(exc))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies field by field."""
    errors = [
        ErrorDetail(
            field=".".join(str(loc) for loc in error.get("loc", [])),
            message=error.get("msg", "Validation error"),
            code=error.get("type", "validation_error"),
        )
        for error in exc.errors()
    ]
    logger.info(f"Request rejected: {len(errors)} invalid field(s)", extra={"error_code": "VALIDATION_ERROR"})

    return _error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        error_code="VALIDATION_ERROR",
        message="Request validation failed",
        suggestions=["Send 'text' with one coordinate pair per line"],
        errors=errors,
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Hide unexpected failures behind a generic 500 response."""
    logger.exception(f"Unhandled {type(exc).__name__} while serving {request.url.path}")
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code="INTERNAL_ERROR",
        message="An unexpected error occurred",
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the handlers; the most specific exception class wins."""
    app.add_exception_handler(UndetectableFormatError, conversion_error_handler)
    app.add_exception_handler(ConversionError, conversion_error_handler)
    app.add_exception_handler(CoordSuiteException, coordsuite_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
