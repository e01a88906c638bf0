"""Repository pattern for data access layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from loguru import logger
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import SQLAlchemyError

from rest_mediator.db.metadata import get_table_map
from rest_mediator.db.query import EntityQuery

if TYPE_CHECKING:
    from typing import Any

    from sqlalchemy.orm import Session

__all__ = ["EntityRepository", "is_deleted"]

T = TypeVar("T")


def is_deleted(obj: Any) -> bool:
    """
    Check whether an entity has been deleted.

    True once the deletion is flushed, and stays True after the transaction
    commits and the object is detached.
    """
    state = sa_inspect(obj)
    return bool(state.deleted or state.was_deleted)


class EntityRepository(Generic[T]):
    """
    Repository providing persistence operations for one entity class.

    Parameters
    ----------
    session : Session
        SQLAlchemy database session
    entity_class : type[T]
        Mapped entity class

    Examples
    --------
    >>> from rest_mediator.models import Form
    >>> repo = EntityRepository(session, Form)
    >>> form = repo.find_pk(12)
    """

    def __init__(self, session: Session, entity_class: type[T]) -> None:
        """Initialize repository."""
        self.session = session
        self.entity_class = entity_class

    def query(self) -> EntityQuery[T]:
        """
        Start a new query on the entity class.

        Returns
        -------
        EntityQuery[T]
            Unexecuted query handle
        """
        return EntityQuery(self.session, self.entity_class)

    def find_one_by(self, field_name: str, value: Any) -> T | None:
        """
        Get the first entity whose column equals ``value``.

        Parameters
        ----------
        field_name : str
            Database column name
        value : Any
            Value to match

        Returns
        -------
        T | None
            Entity instance or None if not found

        Raises
        ------
        ColumnNotFoundError
            If ``field_name`` is not a column of the entity
        """
        column = get_table_map(self.entity_class).get_column(field_name)
        return self.query().find_one_by(column.property_name, value)

    def find_pk(self, key: Any) -> T | None:
        """
        Get entity by primary key.

        Parameters
        ----------
        key : Any
            Primary key value

        Returns
        -------
        T | None
            Entity instance or None if not found
        """
        if key is None:
            return None
        primary_key = get_table_map(self.entity_class).primary_key
        return self.find_one_by(primary_key.name, key)

    def save(self, obj: T) -> T:
        """
        Insert or update an entity.

        The write runs inside a SAVEPOINT. A failed flush rolls back only
        that savepoint, so earlier work in the caller's transaction is kept
        and the session stays usable.

        Parameters
        ----------
        obj : T
            Entity instance

        Returns
        -------
        T
            Saved entity (with DB-generated fields populated)

        Raises
        ------
        SQLAlchemyError
            If the database rejects the write
        """
        try:
            with self.session.begin_nested():
                self.session.add(obj)
                self.session.flush()
            self.session.refresh(obj)
        except SQLAlchemyError:
            logger.debug(f"Rolled back savepoint after failed save of {obj!r}")
            raise
        return obj

    def delete(self, obj: T) -> None:
        """
        Delete entity.

        Parameters
        ----------
        obj : T
            Entity instance to delete
        """
        self.session.delete(obj)
        self.session.flush()

    def is_deleted(self, obj: T) -> bool:
        """Check whether ``obj`` is in a deleted state."""
        return is_deleted(obj)
