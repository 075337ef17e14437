"""Convert exceptions into JSON:API error documents."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request

from jsonapi_compound.core.document import JSONAPIDocumentBuilder
from jsonapi_compound.core.errors import JSONAPIErrorBuilder
from jsonapi_compound.exceptions import BadRequestError
from jsonapi_compound.registry import JSONAPIRegistry
from jsonapi_compound.responses import JSONAPIResponse

logger = logging.getLogger(__name__)


def error_response(
    exc: Exception,
    registry: JSONAPIRegistry | None = None,
) -> JSONAPIResponse:
    """Return a response holding a fresh error document for the exception."""
    document = registry.create_document() if registry else JSONAPIDocumentBuilder()
    document.add_error(JSONAPIErrorBuilder().from_exception(exc))
    media_type = registry.settings.content_type if registry else None
    return JSONAPIResponse(document, media_type=media_type)


class ErrorHandlerMiddleware:
    """Convert exceptions into JSON:API error documents.

    ``BadRequestError`` becomes a 400 document pointing at the offending query
    parameter, any other exception a 500 document.
    """

    def __init__(self, app: Any, registry: JSONAPIRegistry | None = None) -> None:
        """Store the ASGI app for middleware chaining."""
        self.app = app
        self.registry = registry

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        """Handle exceptions and serialize JSON:API error documents."""
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        try:
            await self.app(scope, receive, send)
        except BadRequestError as exc:
            logger.info("Bad request on parameter %s: %s", exc.parameter, exc.message)
            await error_response(exc, self.registry)(scope, receive, send)
        except Exception as exc:
            logger.exception("Unhandled error while processing %s", scope.get("path"))
            await error_response(exc, self.registry)(scope, receive, send)


def register_exception_handlers(app: FastAPI, registry: JSONAPIRegistry | None = None) -> None:
    """Render ``BadRequestError`` raised by routes or dependencies as a 400 document."""

    async def bad_request_handler(request: Request, exc: BadRequestError) -> JSONAPIResponse:
        logger.info(
            "Bad request on %s, parameter %s: %s", request.url.path, exc.parameter, exc.message
        )
        return error_response(exc, registry)

    app.add_exception_handler(BadRequestError, bad_request_handler)
