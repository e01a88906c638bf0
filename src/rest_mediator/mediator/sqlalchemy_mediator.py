"""Mediator between a resource controller and SQLAlchemy ORM models.

:class:`SQLAlchemyMediator` implements :class:`MediatorInterface` on top of
the data access layer in :mod:`rest_mediator.db`:

- resource type tags resolve through a :class:`ResourceRegistry`
- attribute maps use database column names as keys
- foreign key columns ``<relation>_id`` are expanded into link fields
  ``<relation>`` pointing at the referenced resource
- validation and persistence failures of :meth:`save` are recorded in an
  append-only error list instead of being raised

Error handling
--------------
Lookup failures (unknown resource type, unknown column) raise
:class:`~rest_mediator.exceptions.ResourceTypeNotFoundError` and
:class:`~rest_mediator.exceptions.ColumnNotFoundError`. :meth:`save` records
its failures and returns False. :meth:`delete` does not record anything:
database errors during deletion propagate to the caller.

The error list is never reset. Use one mediator per request.

Examples
--------
>>> mediator = SQLAlchemyMediator(
...     session,
...     "https://forms.example.org/v1",
...     {"forms": Form, "elements": Element},
... )
>>> form = mediator.set_attributes(mediator.create("forms"), {"slug": "intake", "name": "Intake"})
>>> if mediator.save(form) is False:
...     print(mediator.error())
>>> mediator.get_attributes(form)["href"]
'https://forms.example.org/v1/forms/1/'
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from rest_mediator.constants import FOREIGN_KEY_SUFFIX, PERSISTENCE_ERROR_MESSAGE, KeyType
from rest_mediator.db.metadata import get_table_map
from rest_mediator.db.registry import ResourceRegistry
from rest_mediator.db.repository import EntityRepository
from rest_mediator.mediator.interface import MediatorInterface
from rest_mediator.mediator.operators import translate_condition
from rest_mediator.models.orm.base import Validatable
from rest_mediator.utils.time import to_unix_timestamp

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy.engine import ScalarResult
    from sqlalchemy.orm import Session

    from rest_mediator.config import MediatorConfig
    from rest_mediator.constants import FilterCondition
    from rest_mediator.db.metadata import ColumnDescriptor
    from rest_mediator.db.query import EntityQuery
    from rest_mediator.models.orm.base import AttributeMap

__all__ = ["ExtraAttributeProvider", "SQLAlchemyMediator"]

ExtraAttributeProvider = Callable[["AttributeMap"], "AttributeMap"]


class SQLAlchemyMediator(MediatorInterface):
    """
    Mediator backed by SQLAlchemy ORM.

    Parameters
    ----------
    session : Session
        Session used for every query and write. The caller owns its
        transaction: the mediator flushes but never commits.
    base_href : str
        Base URL of the API, e.g. "https://my.api.com/v1"
    class_map : Mapping[str, type]
        Resource type tag to mapped entity class
    extra_attribute_providers : Mapping[str, ExtraAttributeProvider], optional
        Resource type tag to a function post-processing the attribute map
        returned by :meth:`get_attributes`

    Notes
    -----
    Not safe for concurrent use: the error list is mutated without
    synchronization.
    """

    def __init__(
        self,
        session: Session,
        base_href: str,
        class_map: Mapping[str, type],
        extra_attribute_providers: Mapping[str, ExtraAttributeProvider] | None = None,
    ) -> None:
        self.session = session
        self.href = base_href
        self.registry = ResourceRegistry(class_map)
        self.extra_attribute_providers = MappingProxyType(dict(extra_attribute_providers or {}))
        self._errors: list[str] = []

    @classmethod
    def from_config(
        cls,
        session: Session,
        config: MediatorConfig,
        class_map: Mapping[str, type],
        extra_attribute_providers: Mapping[str, ExtraAttributeProvider] | None = None,
    ) -> SQLAlchemyMediator:
        """Create a mediator using the base href of ``config``."""
        return cls(session, config.base_href, class_map, extra_attribute_providers)

    def __repr__(self) -> str:
        return f"SQLAlchemyMediator({self.href!r}, resource_types={list(self.registry)})"

    # =========================================================================
    # Resources
    # =========================================================================

    def resource_type_exists(self, resource_type: str) -> bool:
        return resource_type in self.registry

    def create(self, resource_type: str) -> Any:
        return self.registry.get(resource_type).create()

    def set_attributes(self, resource: Any, attributes: AttributeMap) -> Any:
        resource.from_dict(attributes, KeyType.FIELDNAME)
        return resource

    def get_attributes(self, resource: Any) -> AttributeMap:
        """
        Flatten a resource into its wire attribute map.

        Starting from the column values keyed by column name:

        - every foreign key column ``<relation>_id`` adds a ``<relation>``
          field holding ``"<href>/<type>/<value>"``, or None when the key is
          None; the raw column is kept
        - timestamp columns are converted to Unix epoch seconds
        - ``href`` is set to ``"<href>/<type>/<id>/"``
        - the extra attribute provider of the resource type, if any, runs
          last and its result is returned

        Parameters
        ----------
        resource : Any
            Entity of a registered resource type

        Returns
        -------
        AttributeMap
            Ordered wire attribute map
        """
        attributes = resource.to_dict(KeyType.FIELDNAME)
        resource_type = self.registry.resource_type_of(type(resource))
        table_map = get_table_map(type(resource))

        for column in table_map:
            if column.is_foreign_key:
                reference_name = column.name[: -len(FOREIGN_KEY_SUFFIX)]
                foreign_key_value = attributes.get(column.name)
                if foreign_key_value is not None:
                    foreign_type = self._foreign_resource_type(column)
                    attributes[reference_name] = f"{self.href}/{foreign_type}/{foreign_key_value}"
                else:
                    attributes[reference_name] = None
            elif column.is_timestamp:
                attributes[column.name] = to_unix_timestamp(attributes.get(column.name))

        primary_key = attributes.get(table_map.primary_key.name)
        attributes["href"] = f"{self.href}/{resource_type}/{primary_key}/"

        provider = self.extra_attribute_providers.get(resource_type)
        if provider is not None:
            attributes = provider(attributes)

        return attributes

    def _foreign_resource_type(self, column: ColumnDescriptor) -> str | None:
        foreign_type = self.registry.resource_type_of(column.related_class)
        if foreign_type is None and column.related_class is not None:
            # Referenced class is not exposed; link by table name
            foreign_type = get_table_map(column.related_class).table_name
            logger.warning(
                f"{column.related_class_name} is not a registered resource type, "
                f"linking {column.name!r} to {foreign_type!r}"
            )
        return foreign_type

    def retrieve(self, resource_type: str, key: Any) -> Any:
        binding = self.registry.get(resource_type)
        resource = binding.repository(self.session).find_pk(key)
        if resource is None:
            logger.debug(f"No {resource_type} with primary key {key!r}")
            return False
        return resource

    # =========================================================================
    # Collections
    # =========================================================================

    def retrieve_list(self, resource_type: str) -> EntityQuery:
        return self.registry.get(resource_type).query(self.session)

    def filter(
        self,
        collection: EntityQuery,
        attribute: str,
        operator: FilterCondition | str,
        value: Any = None,
    ) -> EntityQuery:
        column = collection.get_table_map().get_column(attribute)
        return collection.filter_by(column.property_name, value, translate_condition(operator))

    def order(
        self,
        collection: EntityQuery,
        attribute: str,
        descending: bool = False,
    ) -> EntityQuery:
        """
        Sort ``collection`` by the column with field name ``attribute``.

        Raises
        ------
        ColumnNotFoundError
            If ``attribute`` is not a column of the collection's resource type
        """
        column = collection.get_table_map().get_column(attribute)
        return collection.order_by(column.property_name, descending=descending)

    def limit(self, collection: EntityQuery, limit: int) -> EntityQuery:
        return collection.limit(max(1, limit))

    def offset(self, collection: EntityQuery, offset: int) -> EntityQuery:
        return collection.offset(offset)

    def collection_to_iterable(self, collection: EntityQuery) -> ScalarResult:
        return collection.find()

    # =========================================================================
    # Persistence
    # =========================================================================

    def save(self, resource: Any) -> Any:
        """
        Validate and persist a resource.

        Validatable resources are validated first. Each validation failure
        is recorded as ``"Property <path>: <message>\\n"``; a database error
        is recorded as a generic message followed by the error text.

        Returns
        -------
        Any
            ``resource`` on success, False otherwise
        """
        if isinstance(resource, Validatable) and not resource.validate():
            failures = resource.get_validation_failures()
            for failure in failures:
                self._errors.append(f"Property {failure.property_path}: {failure.message}\n")
            logger.warning(f"{type(resource).__name__} failed validation: {len(failures)} error(s)")
            return False

        try:
            EntityRepository(self.session, type(resource)).save(resource)
        except SQLAlchemyError as exc:
            self._errors.append(PERSISTENCE_ERROR_MESSAGE)
            self._errors.append(str(exc))
            logger.opt(exception=exc).error(f"Failed to save {type(resource).__name__}")
            return False

        return resource

    def delete(self, resource: Any) -> bool:
        # Failures propagate and are not recorded in the error list
        repository = EntityRepository(self.session, type(resource))
        repository.delete(resource)
        return repository.is_deleted(resource)

    def error(self) -> list[str]:
        return list(self._errors)
