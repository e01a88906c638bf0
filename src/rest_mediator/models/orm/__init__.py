"""SQLAlchemy 2.0 ORM models for rest_mediator.

- base.py - Base class with attribute map support, Validatable mixin
- forms.py - Forms API schema (Form, Element, Condition, Requirement, Note)

Foreign key columns are named ``<relation>_id`` and reference ``<table>.id``;
the mediator derives link fields from these names.
"""

from __future__ import annotations

from rest_mediator.models.orm.base import AttributeMap, Base, Validatable, ValidationFailure
from rest_mediator.models.orm.forms import Condition, Element, Form, Note, Requirement

__all__ = [
    "AttributeMap",
    "Base",
    "Condition",
    "Element",
    "Form",
    "Note",
    "Requirement",
    "Validatable",
    "ValidationFailure",
]
