"""Base JSON:API elements carrying meta and links."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Union

from jsonapi_compound.exceptions import ValidationError

JSONValue = Union[None, bool, int, float, str, List["JSONValue"], Dict[str, "JSONValue"]]


class _Unset:
    """Marker for data which was never assigned, as opposed to explicit null."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


class JSONAPIElement:
    """Element of a JSON:API document with a meta member."""

    def __init__(self) -> None:
        self.meta: dict[str, JSONValue] = {}

    def set_meta(self, meta: str | Mapping[str, JSONValue], value: JSONValue = None) -> None:
        """Set a single meta value, or replace all meta when a mapping is given."""
        if isinstance(meta, Mapping):
            self.meta = dict(meta)
        else:
            self.meta[meta] = value

    def get_meta(self, name: str | None = None, default: Any = None) -> Any:
        """Return all meta, or a single meta value with a fallback."""
        if name is None:
            return self.meta
        return self.meta.get(name, default)


class JSONAPILink(JSONAPIElement):
    """A link with an href and optional meta."""

    def __init__(self, href: str) -> None:
        super().__init__()
        if not isinstance(href, str) or not href:
            raise ValidationError("Link href should be a non-empty string.", field="href")
        self.href = href

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JSONAPILink):
            return NotImplemented
        return self.href == other.href and self.meta == other.meta

    def __repr__(self) -> str:
        return f"JSONAPILink({self.href!r})"

    def to_json(self) -> JSONValue:
        """Return the bare href, or an href/meta object when meta is set."""
        if not self.meta:
            return self.href
        return {"href": self.href, "meta": dict(self.meta)}


class JSONAPILinkedElement(JSONAPIElement):
    """Element of a JSON:API document with links and meta."""

    def __init__(self) -> None:
        super().__init__()
        self.links: dict[str, JSONAPILink] = {}

    def set_link(self, name: str, link: str | JSONAPILink) -> JSONAPILink:
        """Set a link by URL or link object and return the link object."""
        if isinstance(link, str):
            link = JSONAPILink(link)
        elif not isinstance(link, JSONAPILink):
            raise ValidationError(
                "Could not set link: provided link should be a string or a JSONAPILink.",
                field="links",
            )
        self.links[name] = link
        return link

    def get_link(self, name: str) -> JSONAPILink | None:
        return self.links.get(name)

    def get_links(self) -> dict[str, JSONAPILink]:
        return self.links

    def clear_links(self) -> None:
        self.links = {}

    def _links_json(self) -> dict[str, JSONValue]:
        return {name: link.to_json() for name, link in self.links.items()}
