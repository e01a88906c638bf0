"""Forms API models: Form, Element, Condition, Requirement, Note.

A small schema of the kind the mediator is meant to expose: plain columns,
foreign keys named ``<relation>_id`` and timestamp columns.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rest_mediator.models.orm.base import Base, Validatable
from rest_mediator.models.schemas import (
    ConditionSchema,
    ElementSchema,
    FormSchema,
    RequirementSchema,
)
from rest_mediator.utils import Created_at, Desc, Label, Pk, Slug, Updated_at, fk


class Form(Validatable, Base):
    """
    A form definition.

    Attributes
    ----------
    id : int
        Integer primary key
    slug : str
        Unique URL-safe identifier
    name : str
        Human-readable name
    success_message : str | None
        Message shown after a successful submission
    created_at : datetime
        Creation timestamp
    updated_at : datetime
        Last update timestamp
    """

    __tablename__ = "forms"
    __validation_schema__ = FormSchema

    id: Mapped[Pk]

    slug: Mapped[Slug]

    name: Mapped[Label]

    success_message: Mapped[Desc | None]

    created_at: Mapped[Created_at]
    updated_at: Mapped[Updated_at]

    # Relationships
    elements: Mapped[list[Element]] = relationship(
        back_populates="form",
        cascade="all, delete-orphan",
    )

    notes: Mapped[list[Note]] = relationship(back_populates="form")


class Element(Validatable, Base):
    """
    One input element of a form.

    Elements nest: ``parent_id`` points at an enclosing section element.
    """

    __tablename__ = "elements"
    __validation_schema__ = ElementSchema

    id: Mapped[Pk]

    form_id: Mapped[int] = fk("forms", index=True)

    parent_id: Mapped[int | None] = fk("elements", nullable=True)

    type: Mapped[str] = mapped_column(String(32))

    label: Mapped[str | None] = mapped_column(String(255))

    initial_value: Mapped[str | None] = mapped_column(Text)

    retired: Mapped[bool] = mapped_column(Boolean, default=False)

    # Relationships
    form: Mapped[Form] = relationship(back_populates="elements")

    requirements: Mapped[list[Requirement]] = relationship(
        back_populates="element",
        cascade="all, delete-orphan",
    )


class Condition(Validatable, Base):
    """A reusable validation rule applied through requirements."""

    __tablename__ = "conditions"
    __validation_schema__ = ConditionSchema

    id: Mapped[Pk]

    type: Mapped[str] = mapped_column(String(32))

    value: Mapped[str | None] = mapped_column(String(255))


class Requirement(Validatable, Base):
    """Links an element to a condition with the message shown on failure."""

    __tablename__ = "requirements"
    __validation_schema__ = RequirementSchema

    id: Mapped[Pk]

    element_id: Mapped[int] = fk("elements")

    condition_id: Mapped[int] = fk("conditions")

    failure_message: Mapped[str] = mapped_column(Text)

    # Relationships
    element: Mapped[Element] = relationship(back_populates="requirements")
    condition: Mapped[Condition] = relationship()


class Note(Base):
    """Free-text note, optionally attached to a form."""

    __tablename__ = "notes"

    id: Mapped[Pk]

    form_id: Mapped[int | None] = fk("forms", nullable=True)

    author: Mapped[str | None] = mapped_column(String(128))

    body: Mapped[str] = mapped_column(Text)

    created_at: Mapped[Created_at]

    # Relationships
    form: Mapped[Form | None] = relationship(back_populates="notes")
