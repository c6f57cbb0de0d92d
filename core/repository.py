"""Repository base class for store access.

Wraps the add/commit/refresh cycle and the simple filtered queries every
table in the store needs. Domain repositories in `database.repositories`
subclass it and translate rows to and from the pydantic schemas.
"""

from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import DatabaseError
from core.logger import get_logger
from database.models import Base

logger = get_logger("core.repository")

T = TypeVar('T', bound=Base)


class BaseRepository(Generic[T]):
    """Generic repository over one ORM model.

    Attributes:
        model: SQLAlchemy model class to operate on.
        session: Database session for executing queries.
    """

    def __init__(self, model: Type[T], session: Session):
        self.model = model
        self.session = session

    def add(self, obj: T) -> T:
        """Persist a new or modified row and return it refreshed.

        Raises:
            DatabaseError: If the commit fails; the session is rolled back.
        """
        return save(self.session, obj)

    def get_by_id(self, id: Any) -> Optional[T]:
        return self.session.get(self.model, id)

    def list_by(self, order_by=None, **filters) -> List[T]:
        """Rows whose columns equal the given keyword filters."""
        query = self.session.query(self.model).filter_by(**filters)
        if order_by is not None:
            query = query.order_by(order_by)
        return query.all()

    def first_by(self, **filters) -> Optional[T]:
        return self.session.query(self.model).filter_by(**filters).first()

    def delete_by(self, **filters) -> int:
        """Delete matching rows without committing; returns the row count."""
        return self.session.query(self.model).filter_by(**filters).delete(synchronize_session=False)

    def count(self, **filters) -> int:
        return self.session.query(self.model).filter_by(**filters).count()


def save(session: Session, obj: Base) -> Base:
    """Add, commit and refresh an object.

    Args:
        session: Database session.
        obj: Model instance to persist.

    Returns:
        The persisted object with refreshed attributes.

    Raises:
        DatabaseError: If the commit fails.
    """
    session.add(obj)
    try:
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Commit failed for %s: %s", type(obj).__name__, exc)
        raise DatabaseError(f"Could not save {type(obj).__name__}", operation="save") from exc
    session.refresh(obj)
    return obj
