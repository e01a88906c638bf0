"""Exceptions raised by rest_mediator.

Only lookup failures are raised. Validation and persistence failures are
collected by the mediator instead, see
:meth:`~rest_mediator.mediator.SQLAlchemyMediator.error`.
"""

from __future__ import annotations

__all__ = [
    "ColumnNotFoundError",
    "MediatorError",
    "ResourceTypeNotFoundError",
]


class MediatorError(Exception):
    """Base class for rest_mediator errors."""


class ResourceTypeNotFoundError(MediatorError, LookupError):
    """Resource type is not registered with the mediator."""

    def __init__(self, resource_type: str) -> None:
        self.resource_type = resource_type
        msg = f"Unknown resource type: {resource_type!r}"
        super().__init__(msg)


class ColumnNotFoundError(MediatorError, LookupError):
    """Field name does not match any column of a table."""

    def __init__(self, table_name: str, name: str) -> None:
        self.table_name = table_name
        self.name = name
        msg = f"Table {table_name!r} has no column {name!r}"
        super().__init__(msg)
