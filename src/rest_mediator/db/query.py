"""Query builder bound to one entity class.

:class:`EntityQuery` is the query handle the mediator hands out. It
accumulates filter/order/limit/offset state on a SQLAlchemy ``select()`` and
only touches the database when a terminal method is called.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.sql import operators

from rest_mediator.db.metadata import get_table_map

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.engine import ScalarResult
    from sqlalchemy.orm import Session

    from rest_mediator.db.metadata import TableMap

__all__ = ["EntityQuery", "NULL_OPERATORS"]

T = TypeVar("T")

# Operators that compare against NULL and take no value
NULL_OPERATORS = frozenset({operators.is_, operators.is_not})


class EntityQuery(Generic[T]):
    """
    Mutable query builder for one entity class.

    Parameters
    ----------
    session : Session
        Session the query executes in
    entity_class : type[T]
        Mapped entity class

    Examples
    --------
    >>> query = EntityQuery(session, Element)
    >>> query.filter_by("type", "text").order_by("id").limit(10)
    >>> for element in query.find():
    ...     print(element.label)
    """

    def __init__(self, session: Session, entity_class: type[T]) -> None:
        self.session = session
        self.entity_class = entity_class
        self._stmt: Select = select(entity_class)

    def __repr__(self) -> str:
        return f"EntityQuery({self.entity_class.__name__})"

    @property
    def statement(self) -> Select:
        """Accumulated SELECT statement."""
        return self._stmt

    def get_table_map(self) -> TableMap:
        """Column catalog of the queried entity class."""
        return get_table_map(self.entity_class)

    def filter_by(
        self,
        property_name: str,
        value: Any = None,
        operator: Callable[..., Any] = operators.eq,
    ) -> EntityQuery[T]:
        """
        Add a WHERE condition on one column.

        Parameters
        ----------
        property_name : str
            Attribute name on the mapped class
        value : Any, optional
            Value to compare against, ignored by IS NULL / IS NOT NULL
        operator : Callable, optional
            SQLAlchemy operator, by default equality

        Returns
        -------
        EntityQuery
            This query
        """
        column = getattr(self.entity_class, property_name)
        if operator in NULL_OPERATORS:
            value = None
        self._stmt = self._stmt.where(operator(column, value))
        return self

    def order_by(self, property_name: str, descending: bool = False) -> EntityQuery[T]:
        """Add an ORDER BY on one column."""
        column = getattr(self.entity_class, property_name)
        self._stmt = self._stmt.order_by(column.desc() if descending else column.asc())
        return self

    def limit(self, limit: int) -> EntityQuery[T]:
        """Cap the number of returned rows."""
        self._stmt = self._stmt.limit(limit)
        return self

    def offset(self, offset: int) -> EntityQuery[T]:
        """Skip the first ``offset`` rows."""
        self._stmt = self._stmt.offset(offset)
        return self

    def find(self) -> ScalarResult[T]:
        """
        Execute the query.

        Returns
        -------
        ScalarResult[T]
            Single-pass iterable of entities
        """
        logger.debug(f"Executing {self!r}: {self._stmt}")
        return self.session.scalars(self._stmt)

    def find_one(self) -> T | None:
        """Execute the query and return the first entity, or None."""
        return self.session.scalars(self._stmt.limit(1)).first()

    def find_one_by(self, property_name: str, value: Any) -> T | None:
        """Return the first entity whose column equals ``value``, or None."""
        return self.filter_by(property_name, value).find_one()

    def count(self) -> int:
        """Count matching rows, honouring limit and offset."""
        stmt = select(func.count()).select_from(self._stmt.order_by(None).subquery())
        return self.session.scalar(stmt) or 0

    def delete(self) -> int:
        """
        Delete every matching entity.

        Entities are deleted through the session so ORM cascades apply.

        Returns
        -------
        int
            Number of deleted entities
        """
        entities = list(self.session.scalars(self._stmt))
        for entity in entities:
            self.session.delete(entity)
        self.session.flush()
        logger.debug(f"Deleted {len(entities)} {self.entity_class.__name__} rows")
        return len(entities)
