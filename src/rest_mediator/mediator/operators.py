"""Translation of abstract filter conditions to SQLAlchemy operators."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable

from sqlalchemy.sql import operators

from rest_mediator.constants import FilterCondition

__all__ = ["CONDITION_OPERATORS", "translate_condition"]

CONDITION_OPERATORS: MappingProxyType[FilterCondition, Callable[..., Any]] = MappingProxyType(
    {
        FilterCondition.GT: operators.gt,
        FilterCondition.LT: operators.lt,
        FilterCondition.EQUAL: operators.eq,
        FilterCondition.GTE: operators.ge,
        FilterCondition.LTE: operators.le,
        FilterCondition.NOT_EQUAL: operators.ne,
        FilterCondition.LIKE: operators.like_op,
        FilterCondition.NULL: operators.is_,
        FilterCondition.NOT_NULL: operators.is_not,
    }
)


def translate_condition(condition: FilterCondition | str) -> Callable[..., Any]:
    """
    Look up the SQLAlchemy operator for a filter condition.

    Parameters
    ----------
    condition : FilterCondition | str
        Abstract condition, or its string value

    Returns
    -------
    Callable
        Operator taking ``(column, value)``

    Examples
    --------
    >>> translate_condition(FilterCondition.GTE) is operators.ge
    True
    >>> translate_condition("like") is operators.like_op
    True
    """
    return CONDITION_OPERATORS[FilterCondition(condition)]
