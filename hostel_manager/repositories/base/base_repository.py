"""
Base repository with standardized CRUD operations.

Repositories only flush; committing and rolling back belong to the service
that owns the unit of work, so a multi-row command commits atomically.
"""

from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from hostel_manager.core.logging import get_logger
from hostel_manager.models.base import BaseModel

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository over one ORM model.

    Subclasses set ``default_order_by`` to the sort order their collection
    is listed in.
    """

    default_order_by: Sequence[Any] = ()

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    # ==================== Create Operations ====================

    def create(self, entity: ModelType) -> ModelType:
        """Add an entity and flush so its generated id is available."""
        self.db.add(entity)
        self.db.flush()
        logger.debug(f"Created {self.model.__name__} with id: {entity.id}")
        return entity

    # ==================== Read Operations ====================

    def find_by_id(self, id: str) -> Optional[ModelType]:
        return self.db.get(self.model, id)

    def lock_by_id(self, id: str) -> Optional[ModelType]:
        """
        Load an entity with a row lock (SELECT ... FOR UPDATE).

        Backends without row locks (SQLite) ignore the clause.
        """
        stmt = select(self.model).where(self.model.id == id).with_for_update()
        return self.db.execute(stmt).scalar_one_or_none()

    def find_all(self, order_by: Optional[Sequence[Any]] = None) -> List[ModelType]:
        """
        Find all entities in the collection's sort order.

        Args:
            order_by: Override for ``default_order_by``
        """
        stmt = select(self.model).order_by(*(order_by or self.default_order_by))
        return list(self.db.execute(stmt).scalars().all())

    def find_by_criteria(
        self,
        criteria: Dict[str, Any],
        order_by: Optional[Sequence[Any]] = None,
    ) -> List[ModelType]:
        """
        Find entities matching equality criteria.

        Args:
            criteria: Filter criteria as attribute/value pairs; list or tuple
                values match any of their members
            order_by: Override for ``default_order_by``
        """
        stmt = select(self.model)
        for key, value in criteria.items():
            column = getattr(self.model, key)
            if isinstance(value, (list, tuple)):
                stmt = stmt.where(column.in_(value))
            else:
                stmt = stmt.where(column == value)
        stmt = stmt.order_by(*(order_by or self.default_order_by))
        return list(self.db.execute(stmt).scalars().all())

    def count(self, **criteria: Any) -> int:
        stmt = select(func.count()).select_from(self.model)
        for key, value in criteria.items():
            stmt = stmt.where(getattr(self.model, key) == value)
        return int(self.db.execute(stmt).scalar_one())

    # ==================== Update Operations ====================

    def update(self, entity: ModelType, data: Dict[str, Any]) -> ModelType:
        """Apply attribute updates and flush."""
        for key, value in data.items():
            if not hasattr(entity, key):
                raise AttributeError(f"{self.model.__name__} has no attribute '{key}'")
            setattr(entity, key, value)
        self.db.flush()
        return entity

    # ==================== Delete Operations ====================

    def delete(self, entity: ModelType) -> None:
        self.db.delete(entity)
        self.db.flush()
        logger.debug(f"Deleted {self.model.__name__} with id: {entity.id}")
