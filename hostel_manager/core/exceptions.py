"""
Custom Exceptions for the Hostel Manager

This module defines the exception classes raised at the HTTP boundary.
Services report failures through ``ServiceResult``; routers turn those
failures into the exceptions below, which the registered handlers render
as JSON.
"""

from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    NOT_FOUND = "NOT_FOUND"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    INVALID_FORMAT = "INVALID_FORMAT"

    # Business rule errors
    CONFLICT = "CONFLICT"
    INVALID_STATE = "INVALID_STATE"
    DUPLICATE_ACCOUNT = "DUPLICATE_ACCOUNT"

    # Authentication & Authorization
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    ACCOUNT_DEACTIVATED = "ACCOUNT_DEACTIVATED"
    TOKEN_INVALID = "TOKEN_INVALID"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"

    # Collaborator errors
    GATEWAY_ERROR = "GATEWAY_ERROR"
    GENERATION_FAILED = "GENERATION_FAILED"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
                "type": self.__class__.__name__
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


class ValidationError(BaseAppException):
    """Exception raised when data validation fails"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = dict(details or {})
        if field_errors:
            details["field_errors"] = field_errors
        super().__init__(message, error_code, details, 422)


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, ErrorCode.NOT_FOUND, details, 404)


class ConflictError(BaseAppException):
    """Business-rule refusal: occupied room/cot, duplicate resident login."""

    def __init__(
        self,
        message: str = "Operation conflicts with current state",
        error_code: ErrorCode = ErrorCode.CONFLICT,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details, 409)


class InvalidStateError(ConflictError):
    """Requested lifecycle transition is not allowed"""

    def __init__(self, message: str = "Invalid state transition", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.INVALID_STATE, details)


class AuthenticationError(BaseAppException):
    """Exception raised when authentication fails"""

    def __init__(
        self,
        message: str = "Authentication failed",
        error_code: ErrorCode = ErrorCode.AUTHENTICATION_FAILED,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details, 401)


class AuthorizationError(BaseAppException):
    """Exception raised when the caller lacks the required role"""

    def __init__(self, message: str = "Insufficient permissions", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.INSUFFICIENT_PERMISSIONS, details, 403)


class GatewayError(BaseAppException):
    """Failure reported by the persistence, auth or storage layer"""

    def __init__(self, message: str = "Storage operation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.GATEWAY_ERROR, details, 502)


class GenerationError(BaseAppException):
    """Text or document generation failed"""

    def __init__(self, message: str = "Generation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.GENERATION_FAILED, details, 502)


_EXCEPTIONS_BY_CODE = {
    ErrorCode.VALIDATION_ERROR: ValidationError,
    ErrorCode.MISSING_REQUIRED_FIELD: ValidationError,
    ErrorCode.INVALID_FORMAT: ValidationError,
    ErrorCode.CONFLICT: ConflictError,
    ErrorCode.DUPLICATE_ACCOUNT: ConflictError,
    ErrorCode.INVALID_STATE: InvalidStateError,
    ErrorCode.AUTHENTICATION_FAILED: AuthenticationError,
    ErrorCode.ACCOUNT_DEACTIVATED: AuthenticationError,
    ErrorCode.TOKEN_INVALID: AuthenticationError,
    ErrorCode.INSUFFICIENT_PERMISSIONS: AuthorizationError,
    ErrorCode.GATEWAY_ERROR: GatewayError,
    ErrorCode.GENERATION_FAILED: GenerationError,
}


def exception_for(code: ErrorCode, message: str, details: Optional[Dict[str, Any]] = None) -> BaseAppException:
    """Build the exception matching a service error code."""
    if code == ErrorCode.NOT_FOUND:
        details = details or {}
        return ResourceNotFoundError(
            resource_type=details.get("resource_type", "Resource"),
            resource_id=details.get("resource_id"),
            message=message,
        )

    exc_class = _EXCEPTIONS_BY_CODE.get(code)
    if exc_class is None:
        return BaseAppException(message, code, details)
    if exc_class is InvalidStateError:
        return InvalidStateError(message, details)
    if exc_class in (AuthorizationError, GatewayError, GenerationError):
        return exc_class(message, details)
    if exc_class is ValidationError:
        return ValidationError(message, error_code=code, details=details)
    return exc_class(message, code, details)


__all__ = [
    "ErrorCode",
    "BaseAppException",
    "ValidationError",
    "ResourceNotFoundError",
    "ConflictError",
    "InvalidStateError",
    "AuthenticationError",
    "AuthorizationError",
    "GatewayError",
    "GenerationError",
    "exception_for",
]
