"""Pydantic schemas used as entity validation capabilities.

An entity mixing in :class:`~rest_mediator.models.orm.base.Validatable` names
one of these schemas in ``__validation_schema__``. The entity is flattened to
its field-name attribute map and validated against the schema before it is
saved; each pydantic error becomes one ``ValidationFailure``.

Design Pattern
--------------
- ORM objects carry the data (repository and mediator layers)
- Pydantic only checks constraints at the save boundary
- Schemas ignore extra keys so they can be run on the full attribute map

Examples
--------
>>> FormSchema.model_validate({"slug": "intake", "name": "Intake form"})
FormSchema(slug='intake', name='Intake form', success_message=None)
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "ConditionSchema",
    "ElementSchema",
    "FormSchema",
    "RequirementSchema",
]


class FormSchema(BaseModel):
    """Constraints on a Form before it is saved."""

    model_config = ConfigDict(extra="ignore")

    slug: str = Field(
        ...,
        min_length=1,
        max_length=128,
        pattern="^[a-z0-9][a-z0-9-]*$",
        description="URL-safe unique identifier",
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Human-readable form name",
    )
    success_message: str | None = Field(
        None,
        description="Message shown after a successful submission",
    )


class ElementSchema(BaseModel):
    """Constraints on a form Element before it is saved."""

    model_config = ConfigDict(extra="ignore")

    form_id: int | None = Field(
        None,
        ge=1,
        description="Owning form, filled in on flush when set through Element.form",
    )
    type: str = Field(
        ...,
        pattern="^(text|textarea|select|checkbox|date|section)$",
        description="Element widget type",
    )
    label: str | None = Field(
        None,
        max_length=255,
        description="Label displayed next to the element",
    )


class ConditionSchema(BaseModel):
    """Constraints on a Condition."""

    model_config = ConfigDict(extra="ignore")

    type: str = Field(
        ...,
        pattern="^(not-blank|regex|max-length|min-length)$",
    )
    value: str | None = None


class RequirementSchema(BaseModel):
    """Constraints on a Requirement."""

    model_config = ConfigDict(extra="ignore")

    # Filled in on flush when set through the element and condition relationships
    element_id: int | None = Field(None, ge=1)
    condition_id: int | None = Field(None, ge=1)
    failure_message: str = Field(..., min_length=1)
