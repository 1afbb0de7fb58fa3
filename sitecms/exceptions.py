"""
Custom Exception Classes for the site CMS

This module defines custom exceptions for better error handling and
consistent error responses across the application.
"""

import enum
from typing import Any

from fastapi import status


class ErrorCode(str, enum.Enum):
    """Machine-readable error codes returned alongside every error response."""

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    RESOURCE_DOCUMENT_NOT_FOUND = "RESOURCE_DOCUMENT_NOT_FOUND"
    RESOURCE_TRANSLATION_GROUP_NOT_FOUND = "RESOURCE_TRANSLATION_GROUP_NOT_FOUND"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    VALIDATION_DUPLICATE_RESOURCE = "VALIDATION_DUPLICATE_RESOURCE"
    VALIDATION_DUPLICATE_SLUG = "VALIDATION_DUPLICATE_SLUG"
    VALIDATION_UNSUPPORTED_LOCALE = "VALIDATION_UNSUPPORTED_LOCALE"
    TRANSLATION_EXISTS = "TRANSLATION_EXISTS"
    INVALID_OPERATION = "INVALID_OPERATION"


class SiteCMSError(Exception):
    """Base exception class for all site CMS exceptions"""

    error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(SiteCMSError):
    """Raised when locale or pathname configuration is inconsistent"""

    error_code = ErrorCode.CONFIGURATION_ERROR

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message=message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, details=details)


# ============================================================================
# Resource Not Found Exceptions
# ============================================================================


class ResourceNotFoundError(SiteCMSError):
    """Base class for resource not found errors"""

    error_code = ErrorCode.RESOURCE_NOT_FOUND

    def __init__(self, resource_type: str, resource_id: Any | None = None):
        message = f"{resource_type} not found"
        if resource_id is not None:
            message = f"{resource_type} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class DocumentNotFoundError(ResourceNotFoundError):
    """Raised when a content document is not found"""

    error_code = ErrorCode.RESOURCE_DOCUMENT_NOT_FOUND

    def __init__(self, document_id: Any | None = None):
        super().__init__(resource_type="Document", resource_id=document_id)


class TranslationGroupNotFoundError(ResourceNotFoundError):
    """Raised when a document is not linked to any translation group"""

    error_code = ErrorCode.RESOURCE_TRANSLATION_GROUP_NOT_FOUND

    def __init__(self, document_id: Any | None = None):
        super().__init__(resource_type="Translation group", resource_id=document_id)


# ============================================================================
# Validation & Business Logic Exceptions
# ============================================================================


class ValidationError(SiteCMSError):
    """Raised when input validation fails"""

    error_code = ErrorCode.VALIDATION_FAILED

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, details=error_details)


class UnsupportedLocaleError(SiteCMSError):
    """Raised when a locale code is not in the configured locale list"""

    error_code = ErrorCode.VALIDATION_UNSUPPORTED_LOCALE

    def __init__(self, locale: str, supported: list[str] | tuple[str, ...]):
        super().__init__(
            message=f"Locale '{locale}' is not supported",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"locale": locale, "supported_locales": list(supported)},
        )


class DuplicateResourceError(SiteCMSError):
    """Raised when attempting to create a duplicate resource"""

    error_code = ErrorCode.VALIDATION_DUPLICATE_RESOURCE

    def __init__(self, resource_type: str, field: str, value: Any, details: dict[str, Any] | None = None):
        super().__init__(
            message=f"{resource_type} with {field} '{value}' already exists",
            status_code=status.HTTP_409_CONFLICT,
            details={"resource_type": resource_type, "field": field, "value": value, **(details or {})},
        )


class DuplicateSlugError(DuplicateResourceError):
    """Raised when a slug is already used within its uniqueness scope"""

    error_code = ErrorCode.VALIDATION_DUPLICATE_SLUG

    def __init__(self, slug: str, locale: str | None = None):
        super().__init__(
            resource_type="Document",
            field="slug",
            value=slug,
            details={"locale": locale} if locale else None,
        )
        if locale:
            self.message = f"Document with slug '{slug}' already exists in locale '{locale}'"
            self.args = (self.message,)


class TranslationExistsError(SiteCMSError):
    """Raised when a translation group already holds a document for a locale"""

    error_code = ErrorCode.TRANSLATION_EXISTS

    def __init__(self, document_id: str, locale: str, existing_id: str):
        super().__init__(
            message=f"Document '{document_id}' already has a '{locale}' translation",
            status_code=status.HTTP_409_CONFLICT,
            details={"document_id": document_id, "locale": locale, "existing_id": existing_id},
        )


class InvalidOperationError(SiteCMSError):
    """Raised when an operation is invalid in the current context"""

    error_code = ErrorCode.INVALID_OPERATION

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, details=details or {})
