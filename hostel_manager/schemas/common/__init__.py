from hostel_manager.schemas.common.base import (
    BaseCreateSchema,
    BaseResponseSchema,
    BaseSchema,
    MoneyAmount,
)

__all__ = ["BaseSchema", "BaseCreateSchema", "BaseResponseSchema", "MoneyAmount"]
