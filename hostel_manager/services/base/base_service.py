"""
Common base for services that work against a database session.

Services do not raise across their boundary. Storage errors are logged and
turned into failed ``ServiceResult`` values; every mutating command runs
inside ``transaction()`` so it either commits whole or leaves nothing.
"""

from abc import ABC
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from hostel_manager.core.logging import get_logger
from hostel_manager.services.base.service_result import ErrorCode, ServiceError, ServiceResult


class BaseService(ABC):

    def __init__(self, db_session: Session):
        self.db: Session = db_session
        self._logger = get_logger(self.__class__.__name__)

    def _handle_exception(
        self,
        exception: Exception,
        operation: str,
        entity_ref: Optional[Any] = None,
    ) -> ServiceResult:
        """
        Log a storage failure and report it as a failed result.

        Args:
            exception: The caught exception
            operation: What was being attempted, e.g. "save resident"
            entity_ref: Id of the record involved, if any
        """
        ref = str(entity_ref) if entity_ref is not None else None
        self._logger.error(
            f"Error during {operation}: {exception}",
            exc_info=True,
            extra={"operation": operation, "entity_ref": ref, "exception_type": type(exception).__name__},
        )
        return ServiceResult.failure(
            ServiceError(
                code=self._error_code_for(exception),
                message=f"Failed to {operation}",
                details={"error": str(exception), "entity_ref": ref},
            )
        )

    @staticmethod
    def _error_code_for(exception: Exception) -> ErrorCode:
        # IntegrityError first: it is also a SQLAlchemyError
        if isinstance(exception, IntegrityError):
            return ErrorCode.CONFLICT
        if isinstance(exception, (SQLAlchemyError, OSError)):
            return ErrorCode.GATEWAY_ERROR
        return ErrorCode.INTERNAL_ERROR

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Commit on normal exit, roll back and re-raise on any exception.

        Example:
            with self.transaction():
                self.cots.update(cot, {"resident_id": resident.id})
        """
        try:
            yield self.db
            self.db.commit()
        except Exception as e:
            self._rollback()
            self._logger.error(f"Transaction failed: {e}")
            raise

    def _rollback(self) -> None:
        try:
            self.db.rollback()
        except SQLAlchemyError as e:
            # The error that triggered the rollback is re-raised by the caller
            self._logger.warning(f"Rollback failed: {e}")
