"""Example FastAPI app serving compound JSON:API documents.

Run with:
    uvicorn examples.jsonapi_example_app:app --reload

Try:
    /api/v1/articles/1
    /api/v1/articles/1?include=comments.author
    /api/v1/articles?fields[articles]=title,author&page[limit]=2&sort=-title
"""
from __future__ import annotations

from typing import Iterator

from fastapi import Depends, FastAPI, Request
from sqlalchemy import Column, ForeignKey, Integer, String, asc, create_engine, desc, select
from sqlalchemy.orm import Session, declarative_base, relationship, selectinload, sessionmaker

from jsonapi_compound import JSONAPIQuery, JSONAPIRegistry, JSONAPISerializer, JSONAPISettings
from jsonapi_compound.dependencies import JSONAPIQueryDependency
from jsonapi_compound.middleware import ErrorHandlerMiddleware, register_exception_handlers
from jsonapi_compound.responses import JSONAPIResponse

DATABASE_URL = "sqlite:///./jsonapi_example.db"

engine = create_engine(DATABASE_URL, echo=True)
session_factory = sessionmaker(engine, expire_on_commit=False)

Base = declarative_base()


class Person(Base):
    __tablename__ = "people"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    articles = relationship("Article", back_populates="author")
    comments = relationship("Comment", back_populates="author")


class Article(Base):
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    body = Column(String, nullable=False)
    author_id = Column(Integer, ForeignKey("people.id"))
    author = relationship("Person", back_populates="articles")
    comments = relationship("Comment", back_populates="article")


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True)
    body = Column(String, nullable=False)
    article_id = Column(Integer, ForeignKey("articles.id"))
    author_id = Column(Integer, ForeignKey("people.id"))
    article = relationship("Article", back_populates="comments")
    author = relationship("Person", back_populates="comments")


class PersonSerializer(JSONAPISerializer):
    class Meta:
        type_ = "people"
        fields = ["name", "email"]


class ArticleSerializer(JSONAPISerializer):
    class Meta:
        type_ = "articles"
        fields = ["title", "body"]


class CommentSerializer(JSONAPISerializer):
    class Meta:
        type_ = "comments"
        fields = ["body"]


BASE_URL = "http://localhost:8000/api/v1"

registry = JSONAPIRegistry(
    {
        "people": PersonSerializer(base_url=BASE_URL),
        "articles": ArticleSerializer(base_url=BASE_URL),
        "comments": CommentSerializer(base_url=BASE_URL),
    },
    settings=JSONAPISettings(default_limit=20, maximum_limit=100),
)
get_query = JSONAPIQueryDependency(registry)


def get_session() -> Iterator[Session]:
    with session_factory() as session:
        yield session


def seed_example_data(session: Session) -> None:
    """Insert example people, articles and comments if empty."""
    if session.execute(select(Person.id).limit(1)).first() is not None:
        return

    jane = Person(name="Jane Doe", email="jane.doe@example.com")
    john = Person(name="John Smith", email="john.smith@example.com")
    article = Article(title="JSON:API with FastAPI", body="Compound documents in practice.", author=jane)
    other = Article(title="Sparse fieldsets", body="Exploring fields[articles].", author=john)
    session.add_all(
        [
            jane,
            john,
            article,
            other,
            Comment(body="Great article!", article=article, author=john),
            Comment(body="Thanks for sharing.", article=article, author=jane),
        ]
    )
    session.commit()


ARTICLE_LOADERS = (
    selectinload(Article.author),
    selectinload(Article.comments).selectinload(Comment.author),
)

app = FastAPI(
    title="Compound JSON:API Example",
    description="Example API showcasing compound JSON:API documents.",
    version="0.1.0",
)
app.add_middleware(ErrorHandlerMiddleware, registry=registry)
register_exception_handlers(app, registry)


@app.on_event("startup")
def on_startup() -> None:
    Base.metadata.create_all(engine)
    with session_factory() as session:
        seed_example_data(session)


@app.get("/api/v1/articles", response_class=JSONAPIResponse)
def list_articles(
    request: Request,
    query: JSONAPIQuery = Depends(get_query),
    session: Session = Depends(get_session),
) -> JSONAPIResponse:
    limit, offset = query.get_page()
    statement = select(Article).options(*ARTICLE_LOADERS).limit(limit).offset(offset)
    for field, direction in query.get_sort("id").items():
        column = getattr(Article, field, None)
        if column is not None:
            statement = statement.order_by(desc(column) if direction == JSONAPIQuery.SORT_DESC else asc(column))

    document = registry.create_document(query)
    document.set_resource_collection("articles", session.scalars(statement).all())
    document.set_link("self", str(request.url))
    document.set_meta("limit", limit)
    document.set_meta("offset", offset)
    return JSONAPIResponse(document)


@app.get("/api/v1/articles/{article_id}", response_class=JSONAPIResponse)
def retrieve_article(
    article_id: int,
    query: JSONAPIQuery = Depends(get_query),
    session: Session = Depends(get_session),
) -> JSONAPIResponse:
    article = session.scalars(
        select(Article).options(*ARTICLE_LOADERS).where(Article.id == article_id)
    ).first()

    document = registry.create_document(query)
    if article is None:
        document.add_error(registry.create_error(404, "not-found", "Article not found"))
    else:
        document.set_resource_data("articles", article)
    return JSONAPIResponse(document)


@app.get("/api/v1/articles/{article_id}/relationships/{name}", response_class=JSONAPIResponse)
def retrieve_article_relationship(
    article_id: int,
    name: str,
    query: JSONAPIQuery = Depends(get_query),
    session: Session = Depends(get_session),
) -> JSONAPIResponse:
    article = session.scalars(
        select(Article).options(*ARTICLE_LOADERS).where(Article.id == article_id)
    ).first()

    document = registry.create_document(query)
    relationship = None
    if article is not None:
        relationship = registry.get_resource_adapter("articles").get_resource(
            article, document
        ).get_relationship(name)
    if relationship is None:
        document.add_error(registry.create_error(404, "not-found", "Relationship not found"))
    else:
        document.set_relationship_data(relationship)
    return JSONAPIResponse(document)
