"""Resource mediators."""

from __future__ import annotations

__all__ = [
    "CONDITION_OPERATORS",
    "ExtraAttributeProvider",
    "MediatorInterface",
    "SQLAlchemyMediator",
    "translate_condition",
]

from .interface import MediatorInterface
from .operators import CONDITION_OPERATORS, translate_condition
from .sqlalchemy_mediator import ExtraAttributeProvider, SQLAlchemyMediator
