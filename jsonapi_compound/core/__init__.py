"""Core JSON:API elements, query parsing and document assembly."""

from .document import JSONAPIDocumentBuilder
from .elements import UNSET, JSONAPIElement, JSONAPILink, JSONAPILinkedElement
from .errors import JSONAPIError, JSONAPIErrorBuilder
from .query import JSONAPIQuery
from .resource import JSONAPIRelationship, JSONAPIResource

__all__ = [
    "UNSET",
    "JSONAPIDocumentBuilder",
    "JSONAPIElement",
    "JSONAPIError",
    "JSONAPIErrorBuilder",
    "JSONAPILink",
    "JSONAPILinkedElement",
    "JSONAPIQuery",
    "JSONAPIRelationship",
    "JSONAPIResource",
]
