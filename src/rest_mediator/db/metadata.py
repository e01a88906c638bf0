"""Metadata catalog built from SQLAlchemy mapper introspection.

Every mapped entity class gets one :class:`TableMap` describing its columns in
declaration order. Column descriptors carry both naming conventions:

- ``name``: the database column name, used as the wire field name
- ``property_name``: the attribute name on the mapped class

Examples
--------
>>> table_map = get_table_map(Element)
>>> column = table_map.get_column("form_id")
>>> column.property_name, column.is_foreign_key, column.related_class_name
('form_id', True, 'Form')
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cache
from typing import TYPE_CHECKING, Any

from sqlalchemy import DateTime
from sqlalchemy import inspect as sa_inspect

from rest_mediator.exceptions import ColumnNotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy import Table
    from sqlalchemy.orm import registry as Registry

__all__ = ["ColumnDescriptor", "TableMap", "get_table_map"]


@dataclass(frozen=True)
class ColumnDescriptor:
    """
    Description of one mapped column.

    Attributes
    ----------
    name : str
        Database column name (wire field name)
    property_name : str
        Attribute name on the mapped class
    type : str
        Upper-case SQL type name (INTEGER, VARCHAR, DATETIME, ...)
    is_primary_key : bool
        Whether the column is part of the primary key
    is_foreign_key : bool
        Whether the column references another table
    is_timestamp : bool
        Whether values are date/time values
    related_class : type | None
        Mapped class of the referenced table, for foreign keys
    """

    name: str
    property_name: str
    type: str
    is_primary_key: bool = False
    is_foreign_key: bool = False
    is_timestamp: bool = False
    related_class: type | None = None

    @property
    def related_class_name(self) -> str | None:
        """Name of the referenced entity class, None if not a foreign key."""
        if self.related_class is None:
            return None
        return self.related_class.__name__


class TableMap:
    """
    Ordered column catalog for one entity class.

    Parameters
    ----------
    entity_class : type
        Mapped entity class
    table_name : str
        Name of the mapped table
    columns : list[ColumnDescriptor]
        Column descriptors in declaration order
    """

    def __init__(
        self,
        entity_class: type,
        table_name: str,
        columns: list[ColumnDescriptor],
    ) -> None:
        self.entity_class = entity_class
        self.table_name = table_name
        self._columns = {column.name: column for column in columns}
        self._by_property = {column.property_name: column for column in columns}

    def __repr__(self) -> str:
        return f"TableMap({self.table_name!r}, columns={list(self._columns)})"

    def __iter__(self) -> Iterator[ColumnDescriptor]:
        return iter(self._columns.values())

    @property
    def columns(self) -> list[ColumnDescriptor]:
        """Column descriptors in declaration order."""
        return list(self._columns.values())

    @property
    def primary_key(self) -> ColumnDescriptor:
        """First primary key column."""
        for column in self._columns.values():
            if column.is_primary_key:
                return column
        msg = f"Table {self.table_name!r} has no primary key"
        raise ValueError(msg)

    def has_column(self, name: str) -> bool:
        """Check whether a column with field name ``name`` exists."""
        return name in self._columns

    def get_column(self, name: str) -> ColumnDescriptor:
        """
        Look up a column by its field name.

        Parameters
        ----------
        name : str
            Database column name

        Returns
        -------
        ColumnDescriptor
            Matching column

        Raises
        ------
        ColumnNotFoundError
            If no column has this field name
        """
        try:
            return self._columns[name]
        except KeyError:
            raise ColumnNotFoundError(self.table_name, name) from None

    def get_column_by_property(self, property_name: str) -> ColumnDescriptor:
        """Look up a column by its attribute name on the mapped class."""
        try:
            return self._by_property[property_name]
        except KeyError:
            raise ColumnNotFoundError(self.table_name, property_name) from None


def _find_mapped_class(registry: Registry, table: Table) -> type | None:
    """Find the mapped class whose table is ``table``."""
    for mapper in registry.mappers:
        if mapper.local_table is table:
            return mapper.class_
    return None


def _type_name(sa_type: Any) -> str:
    return str(getattr(sa_type, "__visit_name__", type(sa_type).__name__)).upper()


@cache
def get_table_map(entity_class: type) -> TableMap:
    """
    Build (once) the table map of a mapped entity class.

    Parameters
    ----------
    entity_class : type
        SQLAlchemy mapped class

    Returns
    -------
    TableMap
        Column catalog in declaration order
    """
    mapper = sa_inspect(entity_class)
    columns = []
    for prop in mapper.column_attrs:
        column = prop.columns[0]
        foreign_key = next(iter(column.foreign_keys), None)
        related_class = None
        if foreign_key is not None:
            related_class = _find_mapped_class(mapper.registry, foreign_key.column.table)
        columns.append(
            ColumnDescriptor(
                name=column.name,
                property_name=prop.key,
                type=_type_name(column.type),
                is_primary_key=bool(column.primary_key),
                is_foreign_key=foreign_key is not None,
                is_timestamp=isinstance(column.type, DateTime),
                related_class=related_class,
            )
        )
    return TableMap(entity_class, mapper.local_table.name, columns)
