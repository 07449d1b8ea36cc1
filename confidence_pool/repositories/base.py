"""
Base repository class for data access layer.

Repositories are the only code that touches the entity store. Every
query runs inside ``_store_operation`` so a driver failure surfaces as
``EntityStoreError`` (logged and counted) instead of a raw SQLAlchemy
exception, and never as an empty result.

Example:
    class LeagueRepository(BaseRepository[League]):
        def find_by_draft(self, sport_type: str, draft_year: int) -> List[League]:
            with self._store_operation("leagues.find_by_draft"):
                return self.db.query(League).filter_by(sport_type=sport_type, draft_year=draft_year).all()
"""
import uuid
from abc import ABC
from contextlib import contextmanager
from typing import TypeVar, Generic, Type, Optional, Iterator
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from confidence_pool.core.exceptions import EntityStoreError
from confidence_pool.core.logging import get_logger
from confidence_pool.core.metrics import record_entity_store_error

T = TypeVar("T")

logger = get_logger(__name__)


def new_id() -> str:
    """Generate a document id."""
    return str(uuid.uuid4())


class BaseRepository(Generic[T], ABC):
    """
    Base repository class providing common data access methods.

    Attributes:
        model_type: The SQLAlchemy model class this repository manages
        db: The database session
    """

    def __init__(self, model_type: Type[T], db: Session):
        self.model_type = model_type
        self.db = db

    @property
    def _name(self) -> str:
        return self.model_type.__tablename__

    @contextmanager
    def _store_operation(self, operation: str) -> Iterator[None]:
        """Translate driver failures into EntityStoreError."""
        try:
            yield
        except SQLAlchemyError as e:
            logger.error(
                f"Entity store operation failed: {operation}: {e}",
                extra={"operation": operation},
            )
            record_entity_store_error(operation)
            self.db.rollback()
            raise EntityStoreError(operation, e) from e

    # ========================================================================
    # CRUD Operations
    # ========================================================================

    def find_by_id(self, id: str) -> Optional[T]:
        """Find a single record by ID."""
        with self._store_operation(f"{self._name}.find_by_id"):
            return self.db.get(self.model_type, id)

    def filter_by_first(self, **kwargs) -> Optional[T]:
        """Filter records by keyword arguments and return first match."""
        with self._store_operation(f"{self._name}.filter_by_first"):
            return self.db.query(self.model_type).filter_by(**kwargs).first()

    def create(self, **kwargs) -> T:
        """
        Create a new record.

        Returns:
            The created record (not yet committed to database)
        """
        kwargs.setdefault("id", new_id())
        instance = self.model_type(**kwargs)
        with self._store_operation(f"{self._name}.create"):
            self.db.add(instance)
        return instance

    def delete(self, id: str) -> bool:
        """
        Delete a record by ID.

        Returns:
            True if deleted, False if not found
        """
        instance = self.find_by_id(id)
        if instance is None:
            return False
        with self._store_operation(f"{self._name}.delete"):
            self.db.delete(instance)
        return True

    def count(self) -> int:
        """Count all records."""
        with self._store_operation(f"{self._name}.count"):
            return self.db.query(func.count(self.model_type.id)).scalar() or 0

    def commit(self) -> None:
        """Commit the unit of work."""
        with self._store_operation(f"{self._name}.commit"):
            self.db.commit()
