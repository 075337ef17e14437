"""Helpers for JSON:API query parameter parsing."""

from __future__ import annotations

import re
from typing import Any, Mapping

from jsonapi_compound.exceptions import BadRequestError

_KEY_PATTERN = re.compile(r"^([^\[\]]+)((?:\[[^\[\]]*\])*)$")
_SEGMENT_PATTERN = re.compile(r"\[([^\[\]]*)\]")


def split_csv(value: str) -> list[str]:
    return [item for item in (part.strip() for part in value.split(",")) if item]


def nest_query_params(params: Mapping[str, Any]) -> dict[str, Any]:
    """Fold bracketed keys into nested mappings.

    ``{"fields[articles]": "title", "page[limit]": "10"}`` becomes
    ``{"fields": {"articles": "title"}, "page": {"limit": "10"}}``. Keys without
    brackets and values which are already mappings are kept as they are, so
    feeding an already nested mapping is a no-op.
    """
    nested: dict[str, Any] = {}

    for key, value in params.items():
        if value is None:
            continue
        match = _KEY_PATTERN.match(str(key))
        if match is None:
            nested[key] = value
            continue

        name = match.group(1)
        segments = _SEGMENT_PATTERN.findall(match.group(2))
        if not segments:
            if isinstance(nested.get(name), dict) and not isinstance(value, Mapping):
                raise BadRequestError(
                    f"Could not parse parameter '{key}': '{name}' is already set to a mapping.",
                    parameter=name,
                )
            if isinstance(value, Mapping) and isinstance(nested.get(name), dict):
                nested[name].update(value)
            else:
                nested[name] = dict(value) if isinstance(value, Mapping) else value
            continue

        # filter[author][name] nests one level per bracket
        current = nested
        path = [name, *segments[:-1]]
        for segment in path:
            child = current.setdefault(segment, {})
            if not isinstance(child, dict):
                raise BadRequestError(
                    f"Could not parse parameter '{key}': '{segment}' is already set to a plain value.",
                    parameter=name,
                )
            current = child
        current[segments[-1]] = value

    return nested
