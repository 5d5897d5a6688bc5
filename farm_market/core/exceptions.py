"""
Custom Exception Classes for the Application
Provides a unified error handling system with proper HTTP status codes and messages.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class AppException(HTTPException):
    """
    Base exception class for all application exceptions.
    Provides consistent error response format.
    """

    def __init__(
        self,
        status_code: int,
        error_code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        super().__init__(
            status_code=status_code,
            detail={
                "error_code": error_code,
                "message": message,
                "details": self.details,
            },
            headers=headers,
        )


# ==================== Authentication Exceptions ====================


class UnauthenticatedException(AppException):
    """Raised when the bearer token is missing or rejected by the identity provider."""

    def __init__(
        self,
        error_code: str = "unauthenticated",
        message: str = "Unauthorized",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code=error_code,
            message=message,
            details=details,
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidTokenException(UnauthenticatedException):
    """Raised when authentication token is invalid or expired."""

    def __init__(self):
        super().__init__(
            error_code="invalid_token",
            message="Invalid authentication token",
        )


# ==================== Authorization Exceptions ====================


class ForbiddenException(AppException):
    """Raised when an authenticated caller may not act on a resource."""

    def __init__(self, message: str = "Forbidden"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            error_code="forbidden",
            message=message,
        )


class OwnershipRequiredException(ForbiddenException):
    """Raised when action requires resource ownership."""

    def __init__(self, resource: str):
        super().__init__(message=f"Forbidden - not your {resource}")


class AdminRequiredException(ForbiddenException):
    def __init__(self):
        super().__init__(message="Forbidden - admin only")


# ==================== Resource Exceptions ====================


class ResourceNotFoundException(AppException):
    """Raised when a referenced record does not exist."""

    def __init__(self, resource: str, resource_id: Optional[Any] = None):
        details = {"resource": resource}
        if resource_id is not None:
            details["id"] = str(resource_id)
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="not_found",
            message=f"{resource} not found",
            details=details,
        )


# ==================== Validation Exceptions ====================


class ValidationException(AppException):
    """Raised when required fields are missing or malformed."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="validation_error",
            message=message,
            details=details,
        )


class InvalidStatusTransitionException(ValidationException):
    """Raised when an order status change is not allowed by the transition table."""

    def __init__(self, current: str, requested: str):
        super().__init__(
            message=f"Cannot move order from '{current}' to '{requested}'",
            field="status",
        )
        self.details.update({"current": current, "requested": requested})


# ==================== Infrastructure Exceptions ====================


class ExternalServiceException(AppException):
    """Raised when the hosted identity provider cannot be reached or is not configured."""

    def __init__(self, service_name: str, message: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error_code="external_service_error",
            message=message or f"{service_name} is unavailable",
            details={"service": service_name},
        )


class StorageException(AppException):
    """Raised when the key-value store fails to read or write a record."""

    def __init__(self, message: str = "Storage operation failed"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="storage_error",
            message=message,
        )
