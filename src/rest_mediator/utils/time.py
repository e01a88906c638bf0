"""Time utility functions."""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any

import sqlalchemy as sa
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql import expression

__all__ = ["to_unix_timestamp", "utc_now", "utcnow"]


def utc_now() -> datetime:
    """
    Return current UTC time with timezone awareness.

    Used for Python-side datetime generation (e.g., test fixtures).

    Returns
    -------
    datetime
        Current UTC timestamp with tzinfo=timezone.utc

    Examples
    --------
    >>> from datetime import timezone
    >>> now = utc_now()
    >>> now.tzinfo == timezone.utc
    True
    """
    return datetime.now(tz=timezone.utc)


def to_unix_timestamp(value: Any) -> int | None:
    """
    Convert a timestamp column value to Unix epoch seconds.

    Parameters
    ----------
    value : datetime | date | str | int | float | None
        Column value. Naive datetimes are taken as UTC, strings are parsed
        as ISO 8601.

    Returns
    -------
    int | None
        Seconds since the epoch, or None when ``value`` is None

    Examples
    --------
    >>> to_unix_timestamp(datetime(1970, 1, 2, tzinfo=timezone.utc))
    86400
    >>> to_unix_timestamp("1970-01-01T00:01:00")
    60
    >>> to_unix_timestamp(None) is None
    True
    """
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    elif not isinstance(value, datetime) and isinstance(value, date):
        value = datetime.combine(value, time())
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp())


class utcnow(expression.FunctionElement):  # noqa: N801
    """SQL function element for database-generated UTC timestamps.

    Examples
    --------
    Use as default value in ORM mapped columns:

    >>> from sqlalchemy.orm import mapped_column
    >>> created_at: Mapped[datetime] = mapped_column(
    ...     DateTime(timezone=True),
    ...     server_default=utcnow()
    ... )
    """

    type = sa.DateTime()
    inherit_cache = True


@compiles(utcnow, "postgresql")
def pg_utcnow(_element, _compiler, **_kw):
    """PostgreSQL: TIMEZONE('utc', CURRENT_TIMESTAMP)."""
    return "TIMEZONE('utc', CURRENT_TIMESTAMP)"


@compiles(utcnow, "mysql")
def mysql_utcnow(_element, _compiler, **_kw):
    """MySQL: UTC_TIMESTAMP()."""
    return "UTC_TIMESTAMP()"


@compiles(utcnow, "sqlite")
@compiles(utcnow)  # Default for other databases
def default_utcnow(_element, _compiler, **_kw):
    """SQLite and others: CURRENT_TIMESTAMP."""
    return "CURRENT_TIMESTAMP"
