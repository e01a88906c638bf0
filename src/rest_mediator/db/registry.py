"""Resource type registry.

Maps public resource type tags to the data-access bindings of one entity
class, and back from entity class to resource type. Built once when the
mediator is constructed and read-only afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from loguru import logger
from sqlalchemy import inspect as sa_inspect

from rest_mediator.db.metadata import get_table_map
from rest_mediator.db.query import EntityQuery
from rest_mediator.db.repository import EntityRepository
from rest_mediator.exceptions import ResourceTypeNotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from sqlalchemy.orm import Session

    from rest_mediator.db.metadata import TableMap

__all__ = ["ResourceBinding", "ResourceRegistry"]


@dataclass(frozen=True)
class ResourceBinding:
    """
    Data-access bindings of one resource type.

    Attributes
    ----------
    resource_type : str
        Public resource type tag (e.g. "forms")
    entity_class : type
        Mapped entity class
    table_map : TableMap
        Column catalog of the entity class
    """

    resource_type: str
    entity_class: type
    table_map: TableMap

    def create(self) -> Any:
        """Construct a new, empty entity."""
        return self.entity_class()

    def query(self, session: Session) -> EntityQuery:
        """Start a new query on the entity class."""
        return EntityQuery(session, self.entity_class)

    def repository(self, session: Session) -> EntityRepository:
        """Repository of the entity class in ``session``."""
        return EntityRepository(session, self.entity_class)


class ResourceRegistry:
    """
    Registry of resource types.

    Parameters
    ----------
    class_map : Mapping[str, type]
        Resource type tag to mapped entity class

    Raises
    ------
    ValueError
        If a class is not mapped, or is registered under two resource types

    Examples
    --------
    >>> registry = ResourceRegistry({"forms": Form, "elements": Element})
    >>> registry.get("forms").entity_class
    <class 'rest_mediator.models.orm.forms.Form'>
    >>> registry.resource_type_of(Element)
    'elements'
    """

    def __init__(self, class_map: Mapping[str, type]) -> None:
        bindings: dict[str, ResourceBinding] = {}
        reverse: dict[type, str] = {}
        for resource_type, entity_class in class_map.items():
            if sa_inspect(entity_class, raiseerr=False) is None:
                msg = f"Resource type {resource_type!r}: {entity_class!r} is not a mapped class"
                raise ValueError(msg)
            if entity_class in reverse:
                msg = (
                    f"{entity_class.__name__} is registered as both "
                    f"{reverse[entity_class]!r} and {resource_type!r}"
                )
                raise ValueError(msg)
            bindings[resource_type] = ResourceBinding(
                resource_type=resource_type,
                entity_class=entity_class,
                table_map=get_table_map(entity_class),
            )
            reverse[entity_class] = resource_type
        self._bindings = MappingProxyType(bindings)
        self._resource_types = MappingProxyType(reverse)
        logger.debug(f"Registered resource types: {list(bindings)}")

    def __contains__(self, resource_type: object) -> bool:
        return resource_type in self._bindings

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def get(self, resource_type: str) -> ResourceBinding:
        """
        Get the bindings of a resource type.

        Raises
        ------
        ResourceTypeNotFoundError
            If the resource type is not registered
        """
        try:
            return self._bindings[resource_type]
        except KeyError:
            raise ResourceTypeNotFoundError(resource_type) from None

    def resource_type_of(self, entity_class: type) -> str | None:
        """Resource type an entity class is registered under, or None."""
        return self._resource_types.get(entity_class)
