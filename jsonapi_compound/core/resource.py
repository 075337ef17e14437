"""JSON:API resource and relationship containers."""

from __future__ import annotations

from typing import Any, Iterable

from jsonapi_compound.core.elements import UNSET, JSONAPILinkedElement, JSONValue
from jsonapi_compound.exceptions import MalformedDocumentError, ValidationError


class JSONAPIResource(JSONAPILinkedElement):
    """Resource object: type, id, attributes, relationships, links and meta."""

    def __init__(
        self,
        type_: str,
        id_: str | None = None,
        *,
        relationship_path: str | None = None,
    ) -> None:
        super().__init__()
        if not isinstance(type_, str) or not type_:
            raise ValidationError("Resource type should be a non-empty string.", field="type")
        if id_ is not None and not isinstance(id_, str):
            id_ = str(id_)
        self._type = type_
        self._id = id_
        self.relationship_path = relationship_path
        self.attributes: dict[str, JSONValue] = {}
        self.relationships: dict[str, JSONAPIRelationship] = {}

    @property
    def type(self) -> str:
        return self._type

    @property
    def id(self) -> str | None:
        return self._id

    @property
    def identity(self) -> tuple[str, str | None]:
        """Return the (type, id) pair identifying this resource."""
        return (self._type, self._id)

    def __repr__(self) -> str:
        return f"JSONAPIResource({self._type!r}, {self._id!r})"

    def set_attribute(self, name: str, value: JSONValue) -> None:
        self.attributes[name] = value

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def set_relationship(self, name: str, relationship: JSONAPIRelationship) -> None:
        if not isinstance(relationship, JSONAPIRelationship):
            raise ValidationError(
                f"Could not set relationship '{name}': value should be a JSONAPIRelationship.",
                field="relationships",
            )
        self.relationships[name] = relationship

    def get_relationship(self, name: str) -> JSONAPIRelationship | None:
        return self.relationships.get(name)

    def is_identifier(self) -> bool:
        """Return True when the resource carries no attributes and no relationships."""
        return not self.attributes and not self.relationships

    def to_json(self, full: bool = True) -> dict[str, JSONValue]:
        """Return the full resource object, or its identifier when full is False."""
        value: dict[str, JSONValue] = {"type": self._type}
        if self._id is not None:
            value["id"] = self._id
        if not full:
            return value
        if self.links:
            value["links"] = self._links_json()
        if self.attributes:
            value["attributes"] = dict(self.attributes)
        if self.relationships:
            value["relationships"] = {
                name: relationship.to_json()
                for name, relationship in self.relationships.items()
            }
        if self.meta:
            value["meta"] = dict(self.meta)
        return value


class JSONAPIRelationship(JSONAPILinkedElement):
    """Relationship of a resource with its resource linkage, links and meta."""

    def __init__(self) -> None:
        super().__init__()
        self.data: Any = UNSET

    def set_resource(self, resource: JSONAPIResource | None) -> None:
        """Set a to-one linkage; None makes it an explicit empty relationship."""
        if resource is not None and not isinstance(resource, JSONAPIResource):
            raise ValidationError(
                "Could not set resource: value should be a JSONAPIResource or None.",
                field="data",
            )
        self.data = resource

    def set_resource_collection(self, collection: Iterable[JSONAPIResource]) -> None:
        """Set a to-many linkage."""
        resources = list(collection)
        for index, resource in enumerate(resources):
            if not isinstance(resource, JSONAPIResource):
                raise ValidationError(
                    f"Could not set resource collection: item {index} is not a JSONAPIResource.",
                    field="data",
                )
        self.data = resources

    def get_data(self) -> Any:
        return self.data

    def get_resources(self) -> list[JSONAPIResource]:
        """Return the linked resources as a list, empty when unset or null."""
        if isinstance(self.data, list):
            return list(self.data)
        if isinstance(self.data, JSONAPIResource):
            return [self.data]
        return []

    def to_json(self) -> dict[str, JSONValue]:
        """Return the relationship object with identifier-only linkage."""
        if not self.links and self.data is UNSET and not self.meta:
            raise MalformedDocumentError(
                "A relationship must contain at least links, data or a meta member."
            )
        value: dict[str, JSONValue] = {}
        if self.links:
            value["links"] = self._links_json()
        if self.data is not UNSET:
            if isinstance(self.data, list):
                value["data"] = [resource.to_json(full=False) for resource in self.data]
            elif self.data is None:
                value["data"] = None
            else:
                value["data"] = self.data.to_json(full=False)
        if self.meta:
            value["meta"] = dict(self.meta)
        return value
