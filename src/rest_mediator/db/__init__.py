"""Data access layer for rest_mediator."""

from __future__ import annotations

__all__ = [
    # Engine and sessions
    "create_db_and_tables",
    "get_engine",
    "get_session",
    # Metadata catalog
    "ColumnDescriptor",
    "TableMap",
    "get_table_map",
    # Queries and persistence
    "EntityQuery",
    "EntityRepository",
    "is_deleted",
    # Registry
    "ResourceBinding",
    "ResourceRegistry",
]

from .config import create_db_and_tables, get_engine, get_session
from .metadata import ColumnDescriptor, TableMap, get_table_map
from .query import EntityQuery
from .registry import ResourceBinding, ResourceRegistry
from .repository import EntityRepository, is_deleted
