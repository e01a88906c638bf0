"""Abstract mediator interface.

A mediator hides model-specific code behind one small interface so that a
resource controller can serve any registered resource type the same way.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rest_mediator.constants import FilterCondition
    from rest_mediator.models.orm.base import AttributeMap

__all__ = ["MediatorInterface"]


class MediatorInterface(ABC):
    """
    Uniform access to resources: create, retrieve, filter, paginate, save,
    delete.

    Resources, collections and iterables are opaque to callers; only
    attribute maps and resource type tags cross the interface.
    """

    @abstractmethod
    def resource_type_exists(self, resource_type: str) -> bool:
        """Whether ``resource_type`` is registered."""

    @abstractmethod
    def create(self, resource_type: str) -> Any:
        """Create a new, empty resource of ``resource_type``."""

    @abstractmethod
    def set_attributes(self, resource: Any, attributes: AttributeMap) -> Any:
        """Assign fields from a wire attribute map, return ``resource``."""

    @abstractmethod
    def get_attributes(self, resource: Any) -> AttributeMap:
        """Wire attribute map of ``resource``, links included."""

    @abstractmethod
    def retrieve(self, resource_type: str, key: Any) -> Any:
        """Resource with primary key ``key``, or False when there is none."""

    @abstractmethod
    def retrieve_list(self, resource_type: str) -> Any:
        """Unexecuted collection of every resource of ``resource_type``."""

    @abstractmethod
    def filter(
        self,
        collection: Any,
        attribute: str,
        operator: FilterCondition | str,
        value: Any = None,
    ) -> Any:
        """Restrict ``collection`` to resources matching a condition."""

    @abstractmethod
    def limit(self, collection: Any, limit: int) -> Any:
        """Cap ``collection`` to at most ``limit`` (at least 1) resources."""

    @abstractmethod
    def offset(self, collection: Any, offset: int) -> Any:
        """Skip the first ``offset`` resources of ``collection``."""

    @abstractmethod
    def collection_to_iterable(self, collection: Any) -> Iterable[Any]:
        """Execute ``collection``, return a single-pass iterable."""

    @abstractmethod
    def save(self, resource: Any) -> Any:
        """Persist ``resource``; return it, or False and record errors."""

    @abstractmethod
    def delete(self, resource: Any) -> bool:
        """Delete ``resource``, return whether it is now deleted."""

    @abstractmethod
    def error(self) -> list[str]:
        """Errors recorded so far, in order."""
