"""
Exception handlers for the site CMS API

Every error leaves the API in one envelope:

{
    "error": {
        "status_code": 409,
        "error_code": "VALIDATION_DUPLICATE_SLUG",
        "message": "Document with slug 'about' already exists in locale 'en'",
        "type": "Conflict",
        "details": {"resource_type": "Document", "field": "slug", "value": "about", "locale": "en"},
        "path": "/api/v1/documents"
    }
}

Database constraint violations that slip past the service-level checks
(two editors saving the same slug or translation at once) surface as 409
instead of a bare 500.
"""

import logging
from typing import Any, Union

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from sitecms.exceptions import ErrorCode, SiteCMSError
from sitecms.i18n.content_types import ContentType

logger = logging.getLogger(__name__)

ERROR_TYPES = {
    400: "Bad Request",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
    422: "Validation Error",
    500: "Internal Server Error",
}

HTTP_ERROR_CODES = {
    400: ErrorCode.VALIDATION_FAILED,
    404: ErrorCode.RESOURCE_NOT_FOUND,
    409: ErrorCode.VALIDATION_DUPLICATE_RESOURCE,
    422: ErrorCode.VALIDATION_FAILED,
    500: ErrorCode.INTERNAL_ERROR,
}

DOCUMENT_VARIANT_TAGS = frozenset(t.value for t in ContentType)

# Unique constraints of the document store as (message marker, constraint, error code).
# PostgreSQL names the constraint; SQLite lists the constrained columns.
CONSTRAINT_MARKERS = (
    ("uq_translation_group_locale", "uq_translation_group_locale", ErrorCode.TRANSLATION_EXISTS),
    (
        "translation_group_entries.group_id, translation_group_entries.locale",
        "uq_translation_group_locale",
        ErrorCode.TRANSLATION_EXISTS,
    ),
    ("uq_translation_group_document", "uq_translation_group_document", ErrorCode.INVALID_OPERATION),
    ("translation_group_entries.document_id", "uq_translation_group_document", ErrorCode.INVALID_OPERATION),
    ("documents_pkey", "documents_pkey", ErrorCode.VALIDATION_DUPLICATE_RESOURCE),
    ("documents.id", "documents_pkey", ErrorCode.VALIDATION_DUPLICATE_RESOURCE),
)


def create_error_response(
    status_code: int,
    message: str,
    error_code: str | ErrorCode | None = None,
    details: dict[str, Any] | None = None,
    path: str | None = None,
) -> JSONResponse:
    """Build the JSON error envelope; empty ``details`` and ``path`` are omitted."""
    error: dict[str, Any] = {
        "status_code": status_code,
        "message": message,
        "type": get_error_type(status_code),
    }
    if error_code:
        error["error_code"] = error_code.value if isinstance(error_code, ErrorCode) else error_code
    if details:
        error["details"] = details
    if path:
        error["path"] = path
    return JSONResponse(status_code=status_code, content={"error": error})


def get_error_type(status_code: int) -> str:
    return ERROR_TYPES.get(status_code, "Error")


def get_http_error_code(status_code: int) -> str:
    """Error code for a plain HTTPException raised by FastAPI or Starlette."""
    return HTTP_ERROR_CODES.get(status_code, ErrorCode.UNKNOWN_ERROR).value


def constraint_error_code(exc: IntegrityError) -> tuple[ErrorCode, str | None]:
    """Identify the violated unique constraint from the driver message."""
    text = str(exc.orig)
    for marker, constraint, error_code in CONSTRAINT_MARKERS:
        if marker in text:
            return error_code, constraint
    return ErrorCode.VALIDATION_DUPLICATE_RESOURCE, None


async def sitecms_exception_handler(request: Request, exc: SiteCMSError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        "%s on %s: %s",
        type(exc).__name__,
        request.url.path,
        exc.message,
        extra={"status_code": exc.status_code, "error_code": exc.error_code.value, "path": request.url.path},
    )
    return create_error_response(
        status_code=exc.status_code,
        message=exc.message,
        error_code=exc.error_code,
        details=exc.details or None,
        path=request.url.path,
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    error_code, constraint = constraint_error_code(exc)
    logger.warning("Constraint violation on %s: %s", request.url.path, exc.orig)
    return create_error_response(
        status_code=status.HTTP_409_CONFLICT,
        message="The change conflicts with existing content",
        error_code=error_code,
        details={"constraint": constraint} if constraint else None,
        path=request.url.path,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning("HTTPException on %s: %s", request.url.path, exc.detail, extra={"status_code": exc.status_code})
    return create_error_response(
        status_code=exc.status_code,
        message=str(exc.detail),
        error_code=get_http_error_code(exc.status_code),
        path=request.url.path,
    )


async def validation_exception_handler(
    request: Request, exc: Union[RequestValidationError, PydanticValidationError]
) -> JSONResponse:
    """Flatten pydantic errors to ``{field, message, type}`` entries.

    For request bodies the leading ``body`` location and the union tag
    pydantic inserts for the matched document variant are dropped, so a bad
    ``slug`` on a page reports as ``slug``.
    """
    skip = {"body"} if isinstance(exc, RequestValidationError) else set()
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error["loc"] if part not in skip]
        if len(loc) > 1 and loc[0] in DOCUMENT_VARIANT_TAGS:
            loc = loc[1:]
        errors.append({"field": ".".join(loc), "message": error["msg"], "type": error["type"]})

    logger.warning("Validation error on %s", request.url.path, extra={"errors": errors})
    return create_error_response(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        message="Validation error",
        error_code=ErrorCode.VALIDATION_FAILED,
        details={"validation_errors": errors},
        path=request.url.path,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message="Internal server error",
        error_code=ErrorCode.INTERNAL_ERROR,
        path=request.url.path,
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(SiteCMSError, sitecms_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(PydanticValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
