"""Pydantic schemas describing rendered JSON:API v1.0 documents."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, model_validator


class JSONAPILinkObject(BaseModel):
    """Link object with href and meta."""

    model_config = ConfigDict(extra="forbid")

    href: str
    meta: Optional[Dict[str, Any]] = None


JSONAPILinks = Dict[str, Union[str, JSONAPILinkObject]]


class JSONAPIResourceIdentifier(BaseModel):
    """Resource identifier object: type + id."""

    model_config = ConfigDict(extra="forbid")

    type: str
    id: Optional[str] = None


class JSONAPIRelationshipObject(BaseModel):
    """Relationship object with links, resource linkage and meta."""

    model_config = ConfigDict(extra="forbid")

    links: Optional[JSONAPILinks] = None
    data: Optional[Union[JSONAPIResourceIdentifier, List[JSONAPIResourceIdentifier]]] = None
    meta: Optional[Dict[str, Any]] = None


class JSONAPIResource(BaseModel):
    """Resource object with attributes and relationships."""

    model_config = ConfigDict(extra="forbid")

    type: str
    id: Optional[str] = None
    links: Optional[JSONAPILinks] = None
    attributes: Optional[Dict[str, Any]] = None
    relationships: Optional[Dict[str, JSONAPIRelationshipObject]] = None
    meta: Optional[Dict[str, Any]] = None


class JSONAPIErrorSource(BaseModel):
    model_config = ConfigDict(extra="forbid")

    pointer: Optional[str] = None
    parameter: Optional[str] = None


class JSONAPIErrorObject(BaseModel):
    """Error object; at least one member is present."""

    model_config = ConfigDict(extra="forbid")

    id: Optional[Union[str, int]] = None
    links: Optional[JSONAPILinks] = None
    status: Optional[str] = None
    code: Optional[Union[str, int]] = None
    title: Optional[str] = None
    detail: Optional[str] = None
    source: Optional[JSONAPIErrorSource] = None
    meta: Optional[Dict[str, Any]] = None


class JSONAPIVersion(BaseModel):
    version: str = "1.0"


class JSONAPIDocument(BaseModel):
    """Top-level JSON:API document."""

    model_config = ConfigDict(extra="forbid")

    jsonapi: JSONAPIVersion
    links: Optional[JSONAPILinks] = None
    data: Optional[Union[JSONAPIResource, List[JSONAPIResource]]] = None
    included: Optional[List[JSONAPIResource]] = None
    meta: Optional[Dict[str, Any]] = None

    @model_validator(mode="after")
    def check_included(self) -> "JSONAPIDocument":
        """A document may only carry included resources alongside data."""
        if self.included and self.data is None:
            raise ValueError("included requires a data member.")
        return self


class JSONAPIErrorDocument(BaseModel):
    """Top-level JSON:API error document."""

    model_config = ConfigDict(extra="forbid")

    jsonapi: JSONAPIVersion
    links: Optional[JSONAPILinks] = None
    errors: List[JSONAPIErrorObject]
    meta: Optional[Dict[str, Any]] = None
