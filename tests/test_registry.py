"""Tests for the resource adapter registry and settings."""

from __future__ import annotations

import pydantic
import pytest

from jsonapi_compound import (
    ConfigurationError,
    JSONAPIDocumentBuilder,
    JSONAPIError,
    JSONAPIQuery,
    JSONAPIRegistry,
    JSONAPIRelationship,
    JSONAPIResource,
    JSONAPIResourceAdapter,
    JSONAPISerializer,
    JSONAPISettings,
    ValidationError,
)


class NullAdapter:
    def get_resource(self, data, document, relationship_path=None):
        return JSONAPIResource("nulls", data)


# -- Adapters ---------------------------------------------------------------


def test_resource_adapters(registry):
    adapter = NullAdapter()
    assert not registry.has_resource_adapter("nulls")

    registry.set_resource_adapter("nulls", adapter)

    assert isinstance(adapter, JSONAPIResourceAdapter)
    assert registry.has_resource_adapter("nulls")
    assert registry.get_resource_adapter("nulls") is adapter


def test_resource_adapters_from_mapping():
    serializer = JSONAPISerializer()
    registry = JSONAPIRegistry({"nulls": NullAdapter(), "things": serializer})

    assert registry.has_resource_adapter("nulls")
    assert registry.get_resource_adapter("things") is serializer


def test_missing_resource_adapter(registry):
    with pytest.raises(ConfigurationError) as exc_info:
        registry.get_resource_adapter("unknown")
    assert exc_info.value.resource_type == "unknown"


@pytest.mark.parametrize("adapter", [None, "adapter", object()])
def test_invalid_resource_adapter(registry, adapter):
    with pytest.raises(ConfigurationError):
        registry.set_resource_adapter("nulls", adapter)


# -- Factories --------------------------------------------------------------


def test_create_query(registry):
    query = registry.create_query({"include": "author", "page[limit]": "5"})

    assert isinstance(query, JSONAPIQuery)
    assert query.settings is registry.settings
    assert query.get_include() == {"author"}
    assert query.get_limit() == 5


def test_create_document(registry):
    query = registry.create_query()
    document = registry.create_document(query)

    assert isinstance(document, JSONAPIDocumentBuilder)
    assert document.registry is registry
    assert document.query is query
    assert registry.create_document().query is not query


def test_create_elements(registry):
    resource = registry.create_resource("articles", "1", "comments.article")
    assert resource.identity == ("articles", "1")
    assert resource.relationship_path == "comments.article"

    assert isinstance(registry.create_relationship(), JSONAPIRelationship)

    error = registry.create_error(404, "not-found", "Not Found", "No article with id 1.")
    assert isinstance(error, JSONAPIError)
    assert error.to_json() == {
        "status": "404",
        "code": "not-found",
        "title": "Not Found",
        "detail": "No article with id 1.",
    }


def test_create_error_validates_status(registry):
    with pytest.raises(ValidationError):
        registry.create_error(200)


# -- Settings ---------------------------------------------------------------


def test_default_settings():
    settings = JSONAPIRegistry().settings
    assert settings == JSONAPISettings()
    assert settings.version == "1.0"
    assert settings.content_type == "application/vnd.api+json"
    assert settings.default_limit == 1000
    assert settings.maximum_limit is None


@pytest.mark.parametrize(
    "values",
    [
        {"default_limit": 0},
        {"default_limit": 50, "maximum_limit": 10},
        {"default_limit": "many"},
    ],
)
def test_invalid_settings(values):
    with pytest.raises(pydantic.ValidationError):
        JSONAPISettings(**values)
