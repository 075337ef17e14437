"""JSON:API compound document construction."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Iterable, Mapping

from jsonapi_compound.core.elements import UNSET, JSONAPILinkedElement, JSONValue
from jsonapi_compound.core.errors import JSONAPIError
from jsonapi_compound.core.query import JSONAPIQuery
from jsonapi_compound.core.resource import JSONAPIRelationship, JSONAPIResource
from jsonapi_compound.exceptions import ConfigurationError, MalformedDocumentError

if TYPE_CHECKING:
    from jsonapi_compound.registry import JSONAPIRegistry

logger = logging.getLogger(__name__)


class JSONAPIDocumentBuilder(JSONAPILinkedElement):
    """Build a JSON:API v1.0 compound document.

    The primary data is set as resources or as raw data adapted through the
    registry. Related resources reachable through relationships permitted by
    the query are collected once per (type, id) into ``included``.
    """

    version = "1.0"

    def __init__(
        self,
        registry: JSONAPIRegistry | None = None,
        query: JSONAPIQuery | None = None,
    ) -> None:
        super().__init__()
        self.registry = registry
        self.query = query or JSONAPIQuery(
            settings=registry.settings if registry is not None else None
        )
        self.status_code: int | None = None
        self.errors: list[JSONAPIError] = []
        self.data: Any = UNSET
        self.included: dict[str, dict[str, JSONAPIResource]] = {}
        self._index: set[tuple[str, str]] = set()
        if registry is not None:
            self.version = registry.settings.version

    def __str__(self) -> str:
        return self.to_json()

    def get_status_code(self) -> int:
        """Return the HTTP status code for this document."""
        if self.status_code:
            return self.status_code
        if not self.has_content():
            return 204
        if self.errors:
            for error in self.errors:
                if error.status_code:
                    return error.status_code
            return 400
        return 200

    def has_content(self) -> bool:
        return bool(self.errors) or bool(self.meta) or self.data is not UNSET

    def add_error(self, error: JSONAPIError) -> None:
        self.errors.append(error)
        if not self.status_code and error.status_code:
            self.status_code = error.status_code

    def get_errors(self) -> list[JSONAPIError]:
        return self.errors

    def get_data(self) -> Any:
        return self.data

    def set_resource_data(self, type_: str, data: Any) -> None:
        """Set a single resource, or raw data for the type's adapter, as primary data."""
        if data is not None and not isinstance(data, JSONAPIResource):
            data = self.adapt_resource(type_, data)

        self.index_resource(data)
        self.data = data
        self.errors = []
        self._promote_data_links()

        if data is not None:
            self.include_relationships(None, data.relationships)

    def set_resource_collection(self, type_: str, collection: Iterable[Any]) -> None:
        """Set a list of resources, or raw data for the type's adapter, as primary data."""
        resources: list[JSONAPIResource] = []
        for data in collection:
            if not isinstance(data, JSONAPIResource):
                data = self.adapt_resource(type_, data)
            resources.append(data)
            self.index_resource(data)

        # all items are indexed first so no primary resource ends up in included
        for resource in resources:
            self.include_relationships(None, resource.relationships)

        self.data = resources
        self.errors = []

    def set_relationship_data(self, relationship: JSONAPIRelationship) -> None:
        """Set the linkage of a relationship as primary data."""
        self.data = relationship.data
        self.errors = []
        self._promote_data_links()

    def _promote_data_links(self) -> None:
        if not isinstance(self.data, JSONAPIResource) or not self.data.links:
            return
        for name, link in self.data.links.items():
            self.set_link(name, link)
        self.data.clear_links()

    def adapt_resource(
        self, type_: str, data: Any, relationship_path: str | None = None
    ) -> JSONAPIResource:
        """Convert application data into a resource with the adapter of the type."""
        if self.registry is None:
            raise ConfigurationError(
                f"Could not adapt data of type '{type_}': no registry set on the document.",
                resource_type=type_,
            )
        adapter = self.registry.get_resource_adapter(type_)
        return adapter.get_resource(data, self, relationship_path)

    def index_resource(self, resource: JSONAPIResource | None) -> None:
        """Mark the resource as present so it is never included again."""
        if resource is None or resource.id is None:
            return
        self._index.add((resource.type, resource.id))

    def is_indexed(self, resource: JSONAPIResource) -> bool:
        return resource.id is not None and (resource.type, resource.id) in self._index

    def include_relationships(
        self,
        owner_path: str | None,
        relationships: Mapping[str, JSONAPIRelationship],
    ) -> None:
        """Include the targets of all relationships permitted by the query."""
        for name, relationship in relationships.items():
            relationship_path = f"{owner_path}.{name}" if owner_path else name
            if not self.query.is_included(relationship_path):
                logger.debug("Skipping relationship %s: not requested", relationship_path)
                continue
            for resource in relationship.get_resources():
                self.add_included(resource, relationship_path)

    def add_included(
        self, resource: JSONAPIResource, relationship_path: str | None = None
    ) -> bool:
        """Add a related resource to the compound document.

        Returns False when the resource is already present, has no id, or is a
        bare identifier without attributes and relationships. Otherwise the
        resource is stored and its own permitted relationships are followed.
        """
        if resource.id is None or self.is_indexed(resource) or resource.is_identifier():
            return False

        self.index_resource(resource)
        self.included.setdefault(resource.type, {})[resource.id] = resource
        logger.debug("Included %s/%s via %s", resource.type, resource.id, relationship_path)

        if relationship_path is not None:
            resource.relationship_path = relationship_path
        self.include_relationships(resource.relationship_path, resource.relationships)

        return True

    def get_included(self) -> list[JSONAPIResource]:
        """Return the included resources grouped by type in insertion order."""
        return [
            resource
            for resources in self.included.values()
            for resource in resources.values()
        ]

    def render(self) -> dict[str, JSONValue]:
        """Return the document as a value tree ready for JSON encoding."""
        if self.data is UNSET and not self.errors and not self.meta:
            raise MalformedDocumentError(
                "A document must contain at least the data, errors or meta top-level member."
            )

        value: dict[str, JSONValue] = {"jsonapi": {"version": self.version}}

        if self.links:
            value["links"] = self._links_json()

        if self.errors:
            value["errors"] = [error.to_json() for error in self.errors]
        elif self.data is not UNSET:
            if isinstance(self.data, list):
                value["data"] = [resource.to_json() for resource in self.data]
            elif self.data is None:
                value["data"] = None
            else:
                value["data"] = self.data.to_json()

            included = self.get_included()
            if included:
                value["included"] = [resource.to_json() for resource in included]

        if self.meta:
            value["meta"] = dict(self.meta)

        return value

    def to_json(self) -> str:
        return json.dumps(self.render())
