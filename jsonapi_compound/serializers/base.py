"""Base resource adapter for application objects and SQLAlchemy models."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Mapping

from sqlalchemy import inspect
from sqlalchemy.orm.attributes import NO_VALUE

from jsonapi_compound.core.elements import UNSET
from jsonapi_compound.core.resource import JSONAPIRelationship, JSONAPIResource

if TYPE_CHECKING:
    from jsonapi_compound.core.document import JSONAPIDocumentBuilder


def _get_value(instance: Any, name: str, default: Any) -> Any:
    if isinstance(instance, Mapping):
        return instance.get(name, default)
    return getattr(instance, name, default)


class JSONAPISerializer:
    """Adapt objects into JSON:API resources.

    Attributes come from ``Meta.fields`` or the mapped columns of a SQLAlchemy
    model. Relationships come from the SQLAlchemy mapper, or from
    ``Meta.relationships`` (name to related type) for plain objects. Related
    objects are adapted into full resources only when the query includes their
    relationship path and an adapter exists for their type; otherwise they are
    rendered as resource identifiers.
    """

    class Meta:
        """Serializer metadata (type, fields, relationships)."""

        type_: str = ""
        fields: list[str] = []
        relationships: dict[str, str] = {}

    def __init__(self, *, base_url: str | None = None) -> None:
        self.base_url = base_url.rstrip("/") if base_url else None

    @property
    def type_(self) -> str:
        return self.Meta.type_

    @property
    def fields(self) -> list[str]:
        return getattr(self.Meta, "fields", None) or []

    @property
    def relationship_types(self) -> dict[str, str]:
        return getattr(self.Meta, "relationships", None) or {}

    def get_resource(
        self,
        data: Any,
        document: JSONAPIDocumentBuilder,
        relationship_path: str | None = None,
    ) -> JSONAPIResource:
        """Serialize an object into a JSON:API resource."""
        resource = JSONAPIResource(self.type_, self.get_id(data), relationship_path=relationship_path)
        query = document.query

        for name, value in self.get_attributes(data).items():
            if query.is_field_requested(self.type_, name):
                resource.set_attribute(name, value)

        for name, relationship in self.get_relationships(data, document, relationship_path).items():
            resource.set_relationship(name, relationship)

        if self.base_url and resource.id is not None:
            resource.set_link("self", self._resource_url(resource.id))
        return resource

    def get_id(self, instance: Any) -> str | None:
        """Return the resource id as a string."""
        value = _get_value(instance, "id", None)
        return None if value is None else str(value)

    def get_attributes(self, instance: Any) -> dict[str, Any]:
        """Return attributes derived from serializer fields or mapped columns."""
        if self.fields:
            return {
                field: _get_value(instance, field, None)
                for field in self.fields
                if field != "id"
            }
        mapper = inspect(type(instance), raiseerr=False)
        if mapper is not None:
            return {
                column.key: getattr(instance, column.key)
                for column in mapper.column_attrs
                if column.key != "id"
            }
        values = instance if isinstance(instance, Mapping) else getattr(instance, "__dict__", None)
        if values is not None:
            return {
                key: value
                for key, value in values.items()
                if not key.startswith("_")
                and key != "id"
                and key not in self.relationship_types
            }
        return {}

    def get_relationships(
        self,
        instance: Any,
        document: JSONAPIDocumentBuilder,
        relationship_path: str | None = None,
    ) -> dict[str, JSONAPIRelationship]:
        """Return relationship objects honouring sparse fieldsets and includes."""
        relationships: dict[str, JSONAPIRelationship] = {}
        query = document.query

        for name, related_type, related in self._iter_relationships(instance):
            if not query.is_field_requested(self.type_, name):
                continue

            path = f"{relationship_path}.{name}" if relationship_path else name
            relationship = JSONAPIRelationship()
            if self.base_url:
                resource_id = self.get_id(instance)
                relationship.set_link("self", f"{self._resource_url(resource_id)}/relationships/{name}")
                relationship.set_link("related", f"{self._resource_url(resource_id)}/{name}")

            if related is UNSET:
                if relationship.links:
                    relationships[name] = relationship
                continue

            if isinstance(related, (list, tuple, set)):
                relationship.set_resource_collection(
                    self._related_resource(document, related_type, item, path) for item in related
                )
            elif related is None:
                relationship.set_resource(None)
            else:
                relationship.set_resource(self._related_resource(document, related_type, related, path))
            relationships[name] = relationship

        return relationships

    def _iter_relationships(self, instance: Any) -> Iterable[tuple[str, str, Any]]:
        mapper = inspect(type(instance), raiseerr=False)
        if mapper is None:
            for name, related_type in self.relationship_types.items():
                yield name, related_type, _get_value(instance, name, UNSET)
            return

        state = inspect(instance)
        for relationship in mapper.relationships:
            related_type = self.relationship_types.get(relationship.key) or getattr(
                relationship.mapper.class_, "__tablename__", relationship.mapper.class_.__name__.lower()
            )
            # unloaded relationships are never lazy loaded
            if state.attrs[relationship.key].loaded_value is NO_VALUE:
                yield relationship.key, related_type, UNSET
                continue
            related = getattr(instance, relationship.key)
            if relationship.uselist:
                related = list(related or [])
            yield relationship.key, related_type, related

    def _related_resource(
        self,
        document: JSONAPIDocumentBuilder,
        related_type: str,
        related: Any,
        path: str,
    ) -> JSONAPIResource:
        if isinstance(related, JSONAPIResource):
            return related
        registry = document.registry
        if (
            document.query.is_included(path)
            and registry is not None
            and registry.has_resource_adapter(related_type)
        ):
            return document.adapt_resource(related_type, related, path)
        return JSONAPIResource(related_type, self.get_id(related), relationship_path=path)

    def _resource_url(self, resource_id: str | None) -> str:
        return f"{self.base_url}/{self.type_}/{resource_id}"
