"""Tests for the serializer resource adapter."""

from __future__ import annotations

from types import SimpleNamespace

import pytest
from sqlalchemy import Column, ForeignKey, Integer, String, create_engine, select
from sqlalchemy.orm import Session, declarative_base, relationship, selectinload
from sqlalchemy.pool import StaticPool

from jsonapi_compound import JSONAPIRegistry, JSONAPISerializer

Base = declarative_base()


class Person(Base):
    __tablename__ = "people"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)


class Article(Base):
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    author_id = Column(Integer, ForeignKey("people.id"))
    author = relationship("Person")
    comments = relationship("Comment")


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True)
    body = Column(String, nullable=False)
    article_id = Column(Integer, ForeignKey("articles.id"))


class PersonSerializer(JSONAPISerializer):
    class Meta:
        type_ = "people"


class ArticleSerializer(JSONAPISerializer):
    class Meta:
        type_ = "articles"
        fields = ["title"]
        relationships = {"author": "people", "comments": "comments"}


class CommentSerializer(JSONAPISerializer):
    class Meta:
        type_ = "comments"
        fields = ["body"]
        relationships = {"author": "people"}


def _identities(document):
    return [resource.identity for resource in document.get_included()]


@pytest.fixture
def serializers():
    return {
        "people": PersonSerializer(),
        "articles": ArticleSerializer(),
        "comments": CommentSerializer(),
    }


@pytest.fixture
def article():
    author = SimpleNamespace(id=9, name="Dan Gebhardt")
    comments = [
        SimpleNamespace(id=5, body="First!", author=author),
        SimpleNamespace(id=12, body="I like XML better", author=author),
    ]
    return SimpleNamespace(id=1, title="JSON:API paints my bikeshed!", author=author, comments=comments)


# -- Plain objects ----------------------------------------------------------


def test_direct_relationships_are_adapted(serializers, article):
    registry = JSONAPIRegistry(serializers)
    document = registry.create_document(registry.create_query({}))
    document.set_resource_data("articles", article)
    rendered = document.render()

    assert rendered["data"] == {
        "type": "articles",
        "id": "1",
        "attributes": {"title": "JSON:API paints my bikeshed!"},
        "relationships": {
            "author": {"data": {"type": "people", "id": "9"}},
            "comments": {
                "data": [{"type": "comments", "id": "5"}, {"type": "comments", "id": "12"}]
            },
        },
    }
    assert _identities(document) == [("people", "9"), ("comments", "5"), ("comments", "12")]
    assert rendered["included"][0] == {
        "type": "people",
        "id": "9",
        "attributes": {"name": "Dan Gebhardt"},
    }


def test_nested_include(serializers, article):
    registry = JSONAPIRegistry(serializers)
    document = registry.create_document(registry.create_query({"include": "comments.author"}))
    document.set_resource_data("articles", article)

    assert _identities(document) == [("comments", "5"), ("comments", "12"), ("people", "9")]
    assert document.get_included()[-1].relationship_path == "comments.author"
    assert document.get_data().get_relationship("author").get_data().is_identifier()


def test_sparse_fieldsets(serializers, article):
    registry = JSONAPIRegistry(serializers)
    query = registry.create_query({"fields[articles]": "author", "fields[people]": ""})
    document = registry.create_document(query)
    document.set_resource_data("articles", article)
    rendered = document.render()

    assert rendered["data"] == {
        "type": "articles",
        "id": "1",
        "relationships": {"author": {"data": {"type": "people", "id": "9"}}},
    }
    # people without requested fields are identifiers and never included
    assert "included" not in rendered


def test_missing_adapter_renders_identifiers(article):
    registry = JSONAPIRegistry({"articles": ArticleSerializer()})
    document = registry.create_document()
    document.set_resource_data("articles", article)

    assert document.get_included() == []
    author = document.get_data().get_relationship("author").get_data()
    assert author.identity == ("people", "9")
    assert author.relationship_path == "author"


def test_empty_and_missing_relationships(serializers):
    registry = JSONAPIRegistry(serializers)
    document = registry.create_document()
    document.set_resource_data("articles", SimpleNamespace(id=2, title="Draft", author=None))

    assert document.render()["data"]["relationships"] == {"author": {"data": None}}


def test_mapping_data(serializers):
    registry = JSONAPIRegistry(serializers)
    document = registry.create_document()
    document.set_resource_collection("people", [{"id": 3, "name": "Jane", "_internal": True}])

    assert document.render()["data"] == [
        {"type": "people", "id": "3", "attributes": {"name": "Jane"}}
    ]


def test_base_url_links(article):
    registry = JSONAPIRegistry(
        {
            "articles": ArticleSerializer(base_url="http://example.com/"),
            "people": PersonSerializer(base_url="http://example.com"),
        }
    )
    document = registry.create_document(registry.create_query({"include": "author"}))
    document.set_resource_data("articles", SimpleNamespace(id=1, title="Title", author=article.author))
    rendered = document.render()

    assert rendered["links"] == {"self": "http://example.com/articles/1"}
    assert rendered["data"]["relationships"]["author"]["links"] == {
        "self": "http://example.com/articles/1/relationships/author",
        "related": "http://example.com/articles/1/author",
    }
    # comments are not set on the object, the relationship keeps its links only
    assert rendered["data"]["relationships"]["comments"] == {
        "links": {
            "self": "http://example.com/articles/1/relationships/comments",
            "related": "http://example.com/articles/1/comments",
        }
    }
    assert rendered["included"][0]["links"] == {"self": "http://example.com/people/9"}


# -- SQLAlchemy models ------------------------------------------------------


@pytest.fixture
def session():
    engine = create_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    with Session(engine) as setup:
        author = Person(id=9, name="Dan Gebhardt")
        setup.add_all(
            [
                author,
                Article(id=1, title="JSON:API paints my bikeshed!", author=author),
                Comment(id=5, body="First!", article_id=1),
            ]
        )
        setup.commit()

    with Session(engine) as read:
        yield read
    engine.dispose()


def test_mapped_models(session):
    registry = JSONAPIRegistry({"articles": ArticleSerializer(), "people": PersonSerializer()})
    article = session.scalars(select(Article).options(selectinload(Article.author))).one()

    document = registry.create_document()
    document.set_resource_data("articles", article)
    rendered = document.render()

    # comments were not loaded and are left out
    assert rendered["data"] == {
        "type": "articles",
        "id": "1",
        "attributes": {"title": "JSON:API paints my bikeshed!"},
        "relationships": {"author": {"data": {"type": "people", "id": "9"}}},
    }
    assert rendered["included"] == [
        {"type": "people", "id": "9", "attributes": {"name": "Dan Gebhardt"}}
    ]


def test_mapped_collection_relationship(session):
    registry = JSONAPIRegistry({"articles": ArticleSerializer()})
    article = session.scalars(
        select(Article).options(selectinload(Article.author), selectinload(Article.comments))
    ).one()

    document = registry.create_document()
    document.set_resource_data("articles", article)

    assert document.render()["data"]["relationships"]["comments"] == {
        "data": [{"type": "comments", "id": "5"}]
    }
