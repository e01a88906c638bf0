"""Utility functions for rest_mediator."""

from __future__ import annotations

__all__ = [
    "to_unix_timestamp",
    "utc_now",
    "utcnow",
    # Mapped types
    "Pk",
    "Slug",
    "Label",
    "Desc",
    "Created_at",
    "Updated_at",
    "fk",
]

from .mapped_types import (
    Created_at,
    Desc,
    Label,
    Pk,
    Slug,
    Updated_at,
    fk,
)
from .time import to_unix_timestamp, utc_now, utcnow
