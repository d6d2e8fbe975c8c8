from hostel_manager.services.base.base_service import BaseService
from hostel_manager.services.base.service_result import (
    ErrorCode,
    ErrorSeverity,
    ServiceError,
    ServiceResult,
)

__all__ = ["BaseService", "ServiceResult", "ServiceError", "ErrorCode", "ErrorSeverity"]
