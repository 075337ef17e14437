"""Shared fixtures for jsonapi_compound tests."""

from __future__ import annotations

import pytest

from jsonapi_compound import JSONAPIRegistry, JSONAPIRelationship, JSONAPIResource


def _to_one(resource: JSONAPIResource | None) -> JSONAPIRelationship:
    relationship = JSONAPIRelationship()
    relationship.set_resource(resource)
    return relationship


def _to_many(resources: list[JSONAPIResource]) -> JSONAPIRelationship:
    relationship = JSONAPIRelationship()
    relationship.set_resource_collection(resources)
    return relationship


@pytest.fixture
def registry():
    """Registry without adapters."""
    return JSONAPIRegistry()


@pytest.fixture
def article_graph():
    """articles/1 -> author people/9, comments [5, 12] each -> author people/9."""
    author = JSONAPIResource("people", "9")
    author.set_attribute("name", "Dan Gebhardt")

    comments = []
    for comment_id, body in (("5", "First!"), ("12", "I like XML better")):
        comment = JSONAPIResource("comments", comment_id)
        comment.set_attribute("body", body)
        comment.set_relationship("author", _to_one(author))
        comments.append(comment)

    article = JSONAPIResource("articles", "1")
    article.set_attribute("title", "JSON:API paints my bikeshed!")
    article.set_relationship("author", _to_one(author))
    article.set_relationship("comments", _to_many(comments))
    return article
