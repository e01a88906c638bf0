"""rest_mediator: uniform REST-style access to SQLAlchemy ORM resources."""

from __future__ import annotations

__all__ = [
    "ColumnNotFoundError",
    "FilterCondition",
    "KeyType",
    "MediatorConfig",
    "MediatorError",
    "MediatorInterface",
    "ResourceTypeNotFoundError",
    "SQLAlchemyMediator",
]

from .config import MediatorConfig
from .constants import FilterCondition, KeyType
from .exceptions import ColumnNotFoundError, MediatorError, ResourceTypeNotFoundError
from .mediator import MediatorInterface, SQLAlchemyMediator
