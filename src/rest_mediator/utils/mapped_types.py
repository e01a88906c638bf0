"""SQLAlchemy mapped type helpers for consistent column definitions."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import mapped_column

from rest_mediator.utils.time import utcnow

__all__ = [
    "Created_at",
    "Desc",
    "Label",
    "Pk",
    "Slug",
    "Updated_at",
    "fk",
]

# Primary Key Types
# Every resource exposes an integer ``id``; the href of a resource is built
# from it.
Pk = Annotated[
    int,
    mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Primary key",
    ),
]

# String Field Types
Slug = Annotated[
    str,
    mapped_column(
        String(128),
        unique=True,
        index=True,
        comment="Unique slug",
    ),
]

Label = Annotated[
    str,
    mapped_column(
        String(255),
        comment="Label",
    ),
]

Desc = Annotated[
    str,
    mapped_column(
        Text,
        nullable=True,
        comment="Description",
    ),
]

# Timestamp Types
Created_at = Annotated[
    datetime,
    mapped_column(
        DateTime(timezone=True),
        server_default=utcnow(),
        comment="Creation timestamp",
    ),
]

Updated_at = Annotated[
    datetime,
    mapped_column(
        DateTime(timezone=True),
        server_default=utcnow(),
        server_onupdate=utcnow(),
        comment="Last update timestamp",
    ),
]


# Foreign Key Helper
def fk(
    target_table: str,
    **kwargs,
):
    """
    Create a foreign key column referencing ``{target_table}.id``.

    The mediator derives link fields from foreign key column names, so the
    column must be named ``<relation>_id``.

    Parameters
    ----------
    target_table : str
        Target table name (will reference {table}.id)
    **kwargs
        Additional mapped_column arguments

    Returns
    -------
    mapped_column
        Configured foreign key column (integer)

    Examples
    --------
    >>> form_id: Mapped[int] = fk("forms", nullable=False)
    >>> parent_id: Mapped[int | None] = fk("elements", nullable=True)
    """
    kwargs.setdefault("comment", f"Foreign key to {target_table}.id")

    return mapped_column(
        ForeignKey(f"{target_table}.id"),
        **kwargs,
    )
