"""Pydantic schemas for JSON:API."""

from .resource import (
    JSONAPIDocument,
    JSONAPIErrorDocument,
    JSONAPIErrorObject,
    JSONAPIRelationshipObject,
    JSONAPIResource,
    JSONAPIResourceIdentifier,
)

__all__ = [
    "JSONAPIDocument",
    "JSONAPIErrorDocument",
    "JSONAPIErrorObject",
    "JSONAPIRelationshipObject",
    "JSONAPIResource",
    "JSONAPIResourceIdentifier",
]
