"""Base class for all ORM models.

Adds the bulk assignment and flattening the mediator relies on, and the
optional validation capability.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError
from sqlalchemy import event
from sqlalchemy.orm import DeclarativeBase

from rest_mediator.constants import KeyType
from rest_mediator.db.metadata import get_table_map

if TYPE_CHECKING:
    from rest_mediator.db.metadata import TableMap

__all__ = ["AttributeMap", "Base", "Validatable", "ValidationFailure"]

AttributeMap = dict[str, Any]


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    @classmethod
    def get_table_map(cls) -> TableMap:
        """Column catalog of this entity class."""
        return get_table_map(cls)

    def _key(self, column, key_type: KeyType) -> str:
        if KeyType(key_type) is KeyType.PROPNAME:
            return column.property_name
        return column.name

    def to_dict(self, key_type: KeyType = KeyType.FIELDNAME) -> AttributeMap:
        """
        Flatten column values into an ordered attribute map.

        Parameters
        ----------
        key_type : KeyType, optional
            Naming convention of the keys, by default field names

        Returns
        -------
        AttributeMap
            Column values in declaration order
        """
        return {
            self._key(column, key_type): getattr(self, column.property_name)
            for column in self.get_table_map()
        }

    def from_dict(
        self,
        attributes: AttributeMap,
        key_type: KeyType = KeyType.FIELDNAME,
    ) -> None:
        """
        Assign column values from an attribute map.

        Keys that do not name a column are ignored.

        Parameters
        ----------
        attributes : AttributeMap
            Values keyed by field or property name
        key_type : KeyType, optional
            Naming convention of the keys, by default field names
        """
        columns = {self._key(column, key_type): column for column in self.get_table_map()}
        for key, value in attributes.items():
            column = columns.get(key)
            if column is not None:
                setattr(self, column.property_name, value)


@dataclass(frozen=True)
class ValidationFailure:
    """One failed constraint reported by :meth:`Validatable.validate`."""

    property_path: str
    message: str


class Validatable:
    """
    Mixin for entities that validate themselves before being saved.

    The flattened entity (field names) is validated against the pydantic
    model named by ``__validation_schema__``.

    Examples
    --------
    >>> class Form(Validatable, Base):
    ...     __tablename__ = "forms"
    ...     __validation_schema__ = FormSchema
    >>> form = Form(slug="")
    >>> form.validate()
    False
    >>> form.get_validation_failures()[0].property_path
    'slug'
    """

    #: pydantic model the flattened entity must satisfy
    __validation_schema__ = None

    def validate(self) -> bool:
        """Run validation, return True when the entity is valid."""
        self._validation_failures = self._collect_validation_failures()
        return not self._validation_failures

    def get_validation_failures(self) -> list[ValidationFailure]:
        """Failures found by the last :meth:`validate` call."""
        return list(getattr(self, "_validation_failures", []))

    def _collect_validation_failures(self) -> list[ValidationFailure]:
        schema = self.__validation_schema__
        if schema is None:
            return []
        try:
            schema.model_validate(self.to_dict(KeyType.FIELDNAME))
        except ValidationError as exc:
            return [
                ValidationFailure(
                    property_path=".".join(str(loc) for loc in error["loc"]),
                    message=error["msg"],
                )
                for error in exc.errors()
            ]
        return []


@event.listens_for(Base.metadata, "before_create")
def _set_table_comments(target, connection, **kw):
    """Auto-set table comments from class docstrings."""
    for table in target.tables.values():
        for mapper in Base.registry.mappers:
            if mapper.local_table is table and mapper.class_.__doc__:
                doc_lines = mapper.class_.__doc__.strip().split("\n")
                table.comment = doc_lines[0].strip()
                break
