"""Data models for rest_mediator."""

from __future__ import annotations

__all__ = [
    # ORM models
    "Base",
    "Condition",
    "Element",
    "Form",
    "Note",
    "Requirement",
    "Validatable",
    "ValidationFailure",
    # Validation schemas
    "ConditionSchema",
    "ElementSchema",
    "FormSchema",
    "RequirementSchema",
]

from .orm import (
    Base,
    Condition,
    Element,
    Form,
    Note,
    Requirement,
    Validatable,
    ValidationFailure,
)
from .schemas import ConditionSchema, ElementSchema, FormSchema, RequirementSchema
