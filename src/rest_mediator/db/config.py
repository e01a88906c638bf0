"""Database engine and session management."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from loguru import logger
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from collections.abc import Generator

    from sqlalchemy.engine import Engine

__all__ = ["create_db_and_tables", "get_engine", "get_session"]


def get_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create database engine.

    Parameters
    ----------
    database_url : str
        Database connection URL
        Examples:
        - In-memory: "sqlite:///:memory:"
        - File: "sqlite:///./forms.sqlite"
        - Server: "postgresql+psycopg://user@host/forms"
    echo : bool, optional
        Whether to echo SQL statements, by default False

    Returns
    -------
    Engine
        SQLAlchemy engine instance

    Notes
    -----
    In-memory SQLite uses StaticPool so every session sees the same
    database (each new connection to :memory: creates a separate one).

    SQLite engines emit BEGIN themselves instead of leaving it to the
    pysqlite driver, so savepoints nest inside the session transaction.
    """
    kwargs = {}
    if database_url.startswith("sqlite") and ":memory:" in database_url:
        kwargs = {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }

    engine = create_engine(database_url, echo=echo, **kwargs)
    if engine.dialect.name == "sqlite":
        _emit_sqlite_begin(engine)
    logger.debug(f"Created engine for {engine.url!r}")
    return engine


def _emit_sqlite_begin(engine: Engine) -> None:
    """Take transaction control away from the pysqlite driver."""

    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin(conn):
        conn.exec_driver_sql("BEGIN")


def create_db_and_tables(engine: Engine) -> None:
    """
    Create all database tables.

    Parameters
    ----------
    engine : Engine
        SQLAlchemy engine instance

    Examples
    --------
    >>> engine = get_engine("sqlite:///:memory:")
    >>> create_db_and_tables(engine)
    """
    from rest_mediator.models.orm.base import Base

    # Import the schema so its tables are registered with Base.metadata
    import rest_mediator.models.orm.forms  # noqa: F401

    Base.metadata.create_all(engine)


@contextmanager
def get_session(engine: Engine) -> Generator[Session, None, None]:
    """
    Provide transactional database session.

    Automatically commits on success, rolls back on exception.

    Parameters
    ----------
    engine : Engine
        SQLAlchemy engine instance

    Yields
    ------
    Session
        SQLAlchemy session

    Examples
    --------
    >>> engine = get_engine("sqlite:///:memory:")
    >>> with get_session(engine) as session:
    ...     mediator = SQLAlchemyMediator(session, href, class_map)
    ...     ...  # Auto-committed
    """
    session = Session(engine)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
