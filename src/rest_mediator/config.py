"""Configuration for rest_mediator.

Environment variables
---------------------
REST_MEDIATOR_BASE_HREF
    Base URL of the API (required by :meth:`MediatorConfig.from_env`)
REST_MEDIATOR_DATABASE_URL
    SQLAlchemy database URL, by default in-memory SQLite
REST_MEDIATOR_ECHO
    Echo SQL statements when set to 1/true/yes
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

__all__ = ["ENV_PREFIX", "MediatorConfig"]

ENV_PREFIX = "REST_MEDIATOR_"


class MediatorConfig(BaseModel):
    """
    Settings shared by the mediators of one API.

    Examples
    --------
    >>> config = MediatorConfig(base_href="https://forms.example.org/v1/")
    >>> config.base_href
    'https://forms.example.org/v1'
    >>> config.database_url
    'sqlite:///:memory:'
    """

    model_config = ConfigDict(frozen=True)

    base_href: str = Field(
        ...,
        min_length=1,
        description="Base URL of the API; links are built as <base_href>/<type>/<id>",
    )
    database_url: str = Field(
        "sqlite:///:memory:",
        min_length=1,
        description="SQLAlchemy database URL",
    )
    echo: bool = Field(
        False,
        description="Echo SQL statements",
    )

    @field_validator("base_href")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        stripped = value.rstrip("/")
        if not stripped:
            msg = "base_href must not be empty"
            raise ValueError(msg)
        return stripped

    @classmethod
    def from_env(cls) -> MediatorConfig:
        """
        Build the configuration from ``REST_MEDIATOR_*`` environment variables.

        Raises
        ------
        pydantic.ValidationError
            If REST_MEDIATOR_BASE_HREF is missing or a value is invalid
        """
        values = {}
        for field in ("base_href", "database_url", "echo"):
            value = os.getenv(f"{ENV_PREFIX}{field.upper()}")
            if value is not None:
                values[field] = value
        return cls(**values)

    def create_engine(self) -> Engine:
        """Create the SQLAlchemy engine for ``database_url``."""
        from rest_mediator.db.config import get_engine

        return get_engine(self.database_url, echo=self.echo)
