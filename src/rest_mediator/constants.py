"""Constants and enumerations for rest_mediator."""

from __future__ import annotations

from enum import Enum

__all__ = [
    "FilterCondition",
    "FOREIGN_KEY_SUFFIX",
    "KeyType",
    "PERSISTENCE_ERROR_MESSAGE",
]


class FilterCondition(str, Enum):
    """Abstract filter operators accepted by the mediator."""

    GT = "gt"
    LT = "lt"
    EQUAL = "eq"
    NOT_EQUAL = "neq"
    GTE = "gte"
    LTE = "lte"
    LIKE = "like"
    NULL = "null"
    NOT_NULL = "notnull"


class KeyType(str, Enum):
    """Naming convention used for attribute map keys."""

    # Database column names, the wire convention
    FIELDNAME = "fieldname"
    # Python attribute names on the mapped class
    PROPNAME = "propname"


# Foreign key columns are named ``<relation>_id``
FOREIGN_KEY_SUFFIX = "_id"

PERSISTENCE_ERROR_MESSAGE = "Our database encountered an error fulfilling your request."
