"""
Base repository providing common CRUD operations.
"""

from contextlib import contextmanager
from typing import Generic, TypeVar, Type, Any
import logging

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from exceptions import DatabaseError

T = TypeVar('T')

# Range of SQL INTEGER / BIGINT keys
MIN_INTEGER_KEY = -2**63
MAX_INTEGER_KEY = 2**63 - 1

logger = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """
    Generic base repository providing common CRUD operations.
    All specific repositories should inherit from this class.

    Write helpers commit before returning. Any SQLAlchemy failure rolls the
    session back and is re-raised as DatabaseError.
    """

    def __init__(self, db: Session, model: Type[T]):
        """
        Initialize the repository.

        Args:
            db: SQLAlchemy database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model
        self.pk = inspect(model).primary_key[0]

    @contextmanager
    def storage_operation(self, operation: str, commit: bool = False):
        """
        Run a block of store access as one unit.

        Args:
            operation: Name used in logs and in the raised DatabaseError
            commit: Commit the session when the block succeeds

        Raises:
            DatabaseError: If the block (or the commit) fails
        """
        try:
            yield
            if commit:
                self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{operation} failed, transaction rolled back: {e}")
            raise DatabaseError(operation, str(e)) from e

    def create(self, obj: T) -> T:
        """
        Create a new record in the database.

        Args:
            obj: Model instance to create

        Returns:
            Created model instance
        """
        with self.storage_operation(f"create {self.model.__name__}", commit=True):
            self.db.add(obj)
        return obj

    def count(self) -> int:
        """
        Count total records.

        Returns:
            Total number of records
        """
        with self.storage_operation(f"count {self.model.__name__}"):
            return self.db.query(self.model).count()

    def is_storable_key(self, id: Any) -> bool:
        """
        Check whether id can be bound as an integer primary key at all.

        Ids outside the signed 64-bit range can never match a row; the
        driver refuses to bind them, so callers treat them as not found.
        """
        if isinstance(id, int) and not isinstance(id, bool):
            return MIN_INTEGER_KEY <= id <= MAX_INTEGER_KEY
        return True

    def exists(self, id: Any) -> bool:
        """
        Check if a record exists by ID.

        Args:
            id: Primary key value

        Returns:
            True if exists, False otherwise
        """
        if not self.is_storable_key(id):
            return False
        with self.storage_operation(f"exists {self.model.__name__}"):
            return self.db.query(self.pk).filter(self.pk == id).first() is not None
