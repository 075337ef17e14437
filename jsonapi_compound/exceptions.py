"""JSON:API exception hierarchy.

All exceptions inherit from ``JSONAPIException`` and provide ``to_dict()``
for logging and API-friendly error responses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from jsonapi_compound.core.errors import JSONAPIError


class JSONAPIException(Exception):
    """Base exception for all JSON:API errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class ConfigurationError(JSONAPIException):
    """No resource adapter is registered for the requested type."""

    def __init__(self, message: str, resource_type: str | None = None) -> None:
        self.resource_type = resource_type
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "CONFIGURATION_ERROR",
            "message": str(self),
            "type": self.resource_type,
        }


class ValidationError(JSONAPIException):
    """An invalid value was passed to an element setter."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "VALIDATION_ERROR",
            "message": self.message,
            "field": self.field,
        }


class MalformedDocumentError(JSONAPIException):
    """A document, relationship or error has no populated members to render."""


class BadRequestError(JSONAPIException):
    """
    A request query parameter is invalid.

    Carries the offending parameter so the boundary layer can point the client
    at it through ``source.parameter`` of the rendered error.
    """

    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        resource: str | None = None,
    ) -> None:
        self.message = message
        self.parameter = parameter
        self.resource = resource
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "BAD_REQUEST",
            "message": self.message,
            "parameter": self.parameter,
            "resource": self.resource,
        }

    def to_error(self) -> JSONAPIError:
        """Return a 400 error object describing this bad request."""
        from jsonapi_compound.core.errors import JSONAPIError

        error = JSONAPIError(status_code=400, title="Bad Request", detail=self.message)
        error.source_parameter = self.parameter
        return error
