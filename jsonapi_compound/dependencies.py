"""FastAPI dependencies for JSON:API requests."""

from __future__ import annotations

from fastapi import Request

from jsonapi_compound.core.query import JSONAPIQuery
from jsonapi_compound.registry import JSONAPIRegistry


class JSONAPIQueryDependency:
    """Build a ``JSONAPIQuery`` from the request's query parameters.

    Examples:
        get_query = JSONAPIQueryDependency(registry)

        @app.get("/articles/{article_id}")
        def retrieve(article_id: int, query: JSONAPIQuery = Depends(get_query)):
            document = registry.create_document(query)
            ...
    """

    def __init__(self, registry: JSONAPIRegistry) -> None:
        self.registry = registry

    def __call__(self, request: Request) -> JSONAPIQuery:
        return self.registry.create_query(request.query_params)
