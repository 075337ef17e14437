"""Resource adapter registry and factory for JSON:API elements."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol, runtime_checkable

from jsonapi_compound.config import JSONAPISettings
from jsonapi_compound.core.document import JSONAPIDocumentBuilder
from jsonapi_compound.core.errors import JSONAPIError
from jsonapi_compound.core.query import JSONAPIQuery
from jsonapi_compound.core.resource import JSONAPIRelationship, JSONAPIResource
from jsonapi_compound.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@runtime_checkable
class JSONAPIResourceAdapter(Protocol):
    """Convert application data into a JSON:API resource."""

    def get_resource(
        self,
        data: Any,
        document: JSONAPIDocumentBuilder,
        relationship_path: str | None = None,
    ) -> JSONAPIResource:
        """Return the resource for data at the dot-separated relationship path."""
        ...


class JSONAPIRegistry:
    """Hold resource adapters by type and create queries, documents and elements."""

    def __init__(
        self,
        adapters: Mapping[str, JSONAPIResourceAdapter] | None = None,
        *,
        settings: JSONAPISettings | None = None,
    ) -> None:
        self.settings = settings or JSONAPISettings()
        self._adapters: dict[str, JSONAPIResourceAdapter] = {}
        if adapters:
            self.set_resource_adapters(adapters)

    def set_resource_adapters(self, adapters: Mapping[str, JSONAPIResourceAdapter]) -> None:
        for type_, adapter in adapters.items():
            self.set_resource_adapter(type_, adapter)

    def set_resource_adapter(self, type_: str, adapter: JSONAPIResourceAdapter) -> None:
        if not isinstance(adapter, JSONAPIResourceAdapter):
            raise ConfigurationError(
                f"Could not set resource adapter for type '{type_}': "
                "adapter should implement get_resource().",
                resource_type=type_,
            )
        self._adapters[type_] = adapter
        logger.debug("Registered resource adapter %s for type %s", type(adapter).__name__, type_)

    def get_resource_adapter(self, type_: str) -> JSONAPIResourceAdapter:
        try:
            return self._adapters[type_]
        except KeyError:
            raise ConfigurationError(
                f"Could not get resource adapter: no adapter set for type '{type_}'.",
                resource_type=type_,
            ) from None

    def has_resource_adapter(self, type_: str) -> bool:
        return type_ in self._adapters

    def create_query(self, parameters: Mapping[str, Any] | None = None) -> JSONAPIQuery:
        """Create a query for request parameters, eg. the request's query params."""
        return JSONAPIQuery(parameters, settings=self.settings)

    def create_document(self, query: JSONAPIQuery | None = None) -> JSONAPIDocumentBuilder:
        return JSONAPIDocumentBuilder(self, query)

    def create_resource(
        self, type_: str, id_: str | None, relationship_path: str | None = None
    ) -> JSONAPIResource:
        return JSONAPIResource(type_, id_, relationship_path=relationship_path)

    def create_relationship(self) -> JSONAPIRelationship:
        return JSONAPIRelationship()

    def create_error(
        self,
        status_code: int | None = None,
        code: str | int | None = None,
        title: str | None = None,
        detail: str | None = None,
    ) -> JSONAPIError:
        """Create an error; invalid values raise ``ValidationError``."""
        return JSONAPIError(status_code=status_code, code=code, title=title, detail=detail)
