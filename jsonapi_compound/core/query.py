"""Parsed JSON:API query parameters: include, fields, filter, page and sort."""

from __future__ import annotations

import math
from typing import Any, Callable, Mapping

from jsonapi_compound.config import JSONAPISettings
from jsonapi_compound.exceptions import BadRequestError
from jsonapi_compound.utils.query_params import nest_query_params, split_csv

ItemParser = Callable[[str], tuple[str, Any]]


class JSONAPIQuery:
    """Normalized view on the query parameters of a JSON:API request.

    The include and fields parameters are parsed when the query is built, the
    raw parameters are expected to stay untouched afterwards. Malformed values
    raise ``BadRequestError`` carrying the name of the offending parameter.
    """

    PARAMETER_FIELDS = "fields"
    PARAMETER_FILTER = "filter"
    PARAMETER_INCLUDE = "include"
    PARAMETER_LIMIT = "limit"
    PARAMETER_OFFSET = "offset"
    PARAMETER_PAGE = "page"
    PARAMETER_SORT = "sort"

    SORT_ASC = "ASC"
    SORT_DESC = "DESC"

    def __init__(
        self,
        parameters: Mapping[str, Any] | None = None,
        *,
        settings: JSONAPISettings | None = None,
    ) -> None:
        self.parameters = nest_query_params(parameters or {})
        self.settings = settings or JSONAPISettings()
        self._include = self._parse_include()
        self._fields = self._parse_fields()

    def __repr__(self) -> str:
        return f"JSONAPIQuery({self.parameters!r})"

    @staticmethod
    def parse_list(raw: Any, item_parser: ItemParser, parameter: str | None = None) -> dict[str, Any]:
        """Parse a comma separated value into a dict keyed on the parsed items.

        Duplicate keys keep the last parsed value.
        """
        result: dict[str, Any] = {}
        if not raw:
            return result
        if not isinstance(raw, str):
            raise BadRequestError(
                "Could not parse parameter: value should be a string.",
                parameter=parameter,
            )
        for item in split_csv(raw):
            key, value = item_parser(item)
            result[key] = value
        return result

    @staticmethod
    def parse_item_generic(value: str) -> tuple[str, bool]:
        return value, True

    @classmethod
    def parse_item_sort(cls, value: str) -> tuple[str, str]:
        if value.startswith("-"):
            return value[1:], cls.SORT_DESC
        if value.startswith("+"):
            return value[1:], cls.SORT_ASC
        return value, cls.SORT_ASC

    def _parse_include(self) -> set[str] | None:
        raw = self.get_parameter(self.PARAMETER_INCLUDE)
        if not raw:
            return None
        include = self.parse_list(raw, self.parse_item_generic, self.PARAMETER_INCLUDE)
        return set(include) or None

    def _parse_fields(self) -> dict[str, set[str]]:
        raw = self.get_parameter(self.PARAMETER_FIELDS)
        if raw is None:
            return {}
        if not isinstance(raw, Mapping):
            raise BadRequestError(
                "Provided fields parameter should be an array with the resource type as key "
                "and a comma separated field list as value.",
                parameter=self.PARAMETER_FIELDS,
            )
        return {
            type_: set(self.parse_list(value, self.parse_item_generic, self.PARAMETER_FIELDS))
            for type_, value in raw.items()
        }

    def get_include(self) -> set[str] | None:
        """Return the requested relationship paths, None when not specified."""
        return self._include

    def is_included(self, relationship_path: str | None) -> bool:
        """Return whether the relationship at the dot-separated path is requested.

        Without an include parameter only direct relationships are included.
        With one, a path is included when requested or when it leads to a
        deeper requested path.
        """
        if relationship_path is None:
            return True
        if self._include is None:
            return "." not in relationship_path

        prefix = relationship_path + "."
        return any(
            included == relationship_path or included.startswith(prefix)
            for included in self._include
        )

    def get_fields(self, type_: str) -> set[str] | None:
        """Return the requested fields of a type, None for all fields."""
        return self._fields.get(type_)

    def is_field_requested(self, type_: str, field_name: str) -> bool:
        fields = self.get_fields(type_)
        if fields is None:
            return True
        return field_name in fields

    def get_filters(self) -> Any:
        return self.get_parameter(self.PARAMETER_FILTER, {})

    def get_filter(self, name: str, default: Any = None) -> Any:
        return self._get_sub_parameter(self.PARAMETER_FILTER, name, default)

    def get_limit(self, default: int | None = None, maximum: int | None = None) -> int:
        """Return the requested page limit.

        ``default`` and ``maximum`` fall back to the query settings.
        """
        if default is None:
            default = self.settings.default_limit
        if maximum is None:
            maximum = self.settings.maximum_limit

        limit = self._to_int(
            self._get_sub_parameter(self.PARAMETER_PAGE, self.PARAMETER_LIMIT, default), minimum=1
        )
        if limit is None:
            raise BadRequestError(
                "Provided limit parameter should be a number greater than or equal to 1.",
                parameter=self.PARAMETER_PAGE,
            )
        if maximum and limit > maximum:
            raise BadRequestError(
                f"Provided limit parameter cannot be greater than {maximum}.",
                parameter=self.PARAMETER_PAGE,
            )
        return limit

    def get_offset(self, default: int = 0) -> int:
        offset = self._to_int(
            self._get_sub_parameter(self.PARAMETER_PAGE, self.PARAMETER_OFFSET, default), minimum=0
        )
        if offset is None:
            raise BadRequestError(
                "Provided offset parameter should be a number greater than or equal to 0.",
                parameter=self.PARAMETER_PAGE,
            )
        return offset

    def get_page(self) -> tuple[int, int]:
        """Return (limit, offset) using the configured limits."""
        return self.get_limit(), self.get_offset()

    def get_sort(self, default: str | None = None) -> dict[str, str]:
        """Return the sort fields in requested order mapped to ASC or DESC."""
        sort = self.get_parameter(self.PARAMETER_SORT, default)
        return self.parse_list(sort, self.parse_item_sort, self.PARAMETER_SORT)

    def get_parameter(self, name: str, default: Any = None) -> Any:
        value = self.parameters.get(name)
        return default if value is None else value

    def _get_sub_parameter(self, name: str, sub_name: str, default: Any = None) -> Any:
        value = self.parameters.get(name)
        if not isinstance(value, Mapping) or value.get(sub_name) is None:
            return default
        return value[sub_name]

    @staticmethod
    def _to_int(value: Any, minimum: int) -> int | None:
        """Truncate a numeric value to an int, None when not numeric or below minimum."""
        if isinstance(value, bool):
            return None
        if isinstance(value, str):
            try:
                value = float(value.strip())
            except ValueError:
                return None
        if not isinstance(value, (int, float)):
            return None
        if isinstance(value, float) and not math.isfinite(value):
            return None
        if value < minimum:
            return None
        return int(value)
