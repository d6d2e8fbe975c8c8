"""
Tagged result returned by every service call.

A result is either a success carrying data or a failure carrying a
``ServiceError``. Routers call ``unwrap()``, which raises the application
exception matching the error code; the registered handler renders it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

from hostel_manager.core.exceptions import ErrorCode, exception_for


class ErrorSeverity(str, Enum):
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass
class ServiceError:
    """What went wrong, with enough detail for the error body."""

    code: ErrorCode
    message: str
    severity: ErrorSeverity = ErrorSeverity.ERROR
    details: Optional[Dict[str, Any]] = None
    field: Optional[str] = None


TData = TypeVar("TData")


@dataclass
class ServiceResult(Generic[TData]):
    is_success: bool
    data: Optional[TData] = None
    error: Optional[ServiceError] = None
    message: Optional[str] = None

    @classmethod
    def success(cls, data: Optional[TData] = None, message: Optional[str] = None) -> "ServiceResult[TData]":
        return cls(is_success=True, data=data, message=message)

    @classmethod
    def failure(cls, error: ServiceError) -> "ServiceResult[TData]":
        return cls(is_success=False, error=error, message=error.message)

    # Shorthands for the failures services report most often

    @classmethod
    def validation_failure(
        cls,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ) -> "ServiceResult[TData]":
        return cls.failure(ServiceError(code=code, message=message, field=field, details=details))

    @classmethod
    def not_found(cls, resource_type: str, resource_id: Optional[str] = None) -> "ServiceResult[TData]":
        """A missing record, e.g. ``not_found("Cot", cot_id)``."""
        message = f"{resource_type} not found"
        if resource_id:
            message += f" (ID: {resource_id})"
        return cls.failure(ServiceError(
            code=ErrorCode.NOT_FOUND,
            message=message,
            severity=ErrorSeverity.WARNING,
            details={"resource_type": resource_type, "resource_id": resource_id},
        ))

    @classmethod
    def conflict(
        cls,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        code: ErrorCode = ErrorCode.CONFLICT,
    ) -> "ServiceResult[TData]":
        """A business rule refused the command: occupied cot, duplicate account."""
        return cls.failure(ServiceError(code=code, message=message, details=details))

    @classmethod
    def invalid_state(cls, message: str, details: Optional[Dict[str, Any]] = None) -> "ServiceResult[TData]":
        return cls.conflict(message, details, code=ErrorCode.INVALID_STATE)

    @classmethod
    def auth_failure(
        cls,
        message: str,
        code: ErrorCode = ErrorCode.AUTHENTICATION_FAILED,
    ) -> "ServiceResult[TData]":
        return cls.failure(ServiceError(code=code, message=message, severity=ErrorSeverity.WARNING))

    @property
    def error_code(self) -> Optional[ErrorCode]:
        return self.error.code if self.error else None

    def unwrap(self) -> TData:
        """
        Return the data, or raise the exception matching the error code.

        Raises:
            BaseAppException: If the result is a failure
        """
        if self.is_success:
            return self.data
        if self.error is None:
            raise exception_for(ErrorCode.INTERNAL_ERROR, self.message or "Unknown error")
        raise exception_for(self.error.code, self.error.message, self.error.details)

    def unwrap_or(self, default: TData) -> TData:
        return self.data if self.is_success else default

    def __bool__(self) -> bool:
        return self.is_success

    def __repr__(self) -> str:
        status = "Success" if self.is_success else f"Failure[{self.error_code.value if self.error else '?'}]"
        return f"ServiceResult({status}: {self.message})" if self.message else f"ServiceResult({status})"


__all__ = [
    "ErrorCode",
    "ErrorSeverity",
    "ServiceError",
    "ServiceResult",
]
