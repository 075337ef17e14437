"""Compound JSON:API documents for FastAPI applications."""

from .config import JSONAPISettings
from .core.document import JSONAPIDocumentBuilder
from .core.elements import UNSET, JSONAPILink
from .core.errors import JSONAPIError, JSONAPIErrorBuilder
from .core.query import JSONAPIQuery
from .core.resource import JSONAPIRelationship, JSONAPIResource
from .exceptions import (
    BadRequestError,
    ConfigurationError,
    JSONAPIException,
    MalformedDocumentError,
    ValidationError,
)
from .registry import JSONAPIRegistry, JSONAPIResourceAdapter
from .serializers.base import JSONAPISerializer

__all__ = [
    "UNSET",
    "BadRequestError",
    "ConfigurationError",
    "JSONAPIDocumentBuilder",
    "JSONAPIError",
    "JSONAPIErrorBuilder",
    "JSONAPIException",
    "JSONAPILink",
    "JSONAPIQuery",
    "JSONAPIRegistry",
    "JSONAPIRelationship",
    "JSONAPIResource",
    "JSONAPIResourceAdapter",
    "JSONAPISerializer",
    "JSONAPISettings",
    "MalformedDocumentError",
    "ValidationError",
]
