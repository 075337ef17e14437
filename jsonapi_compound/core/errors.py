"""JSON:API error objects."""

from __future__ import annotations

from typing import Any, Mapping

from jsonapi_compound.core.elements import JSONAPILinkedElement, JSONValue
from jsonapi_compound.exceptions import (
    BadRequestError,
    MalformedDocumentError,
    ValidationError,
)


def _is_set(value: Any) -> bool:
    return value is not None and value != ""


class JSONAPIError(JSONAPILinkedElement):
    """Error object describing a problem encountered while processing a request."""

    def __init__(
        self,
        *,
        status_code: int | None = None,
        code: str | int | None = None,
        title: str | None = None,
        detail: str | None = None,
    ) -> None:
        super().__init__()
        self._id: str | int | None = None
        self._status_code: int | None = None
        self._code: str | int | None = None
        self._title: str | None = None
        self._detail: str | None = None
        self._source_pointer: str | None = None
        self._source_parameter: str | None = None
        self.status_code = status_code
        self.code = code
        self.title = title
        self.detail = detail

    @property
    def id(self) -> str | int | None:
        return self._id

    @id.setter
    def id(self, value: str | int | None) -> None:
        self._id = self._check_identifier("id", value)

    @property
    def status_code(self) -> int | None:
        return self._status_code

    @status_code.setter
    def status_code(self, value: int | str | None) -> None:
        if value is None:
            self._status_code = None
            return
        if isinstance(value, bool):
            status = None
        elif isinstance(value, int):
            status = value
        elif isinstance(value, str) and value.strip().isdigit():
            status = int(value)
        else:
            status = None
        if status is None or status < 400 or status > 599:
            raise ValidationError(
                "Could not set the status code of the error: value should be an integer "
                "between 400 (4XX client error) and 599 (5XX server error).",
                field="status",
            )
        self._status_code = status

    @property
    def code(self) -> str | int | None:
        return self._code

    @code.setter
    def code(self, value: str | int | None) -> None:
        self._code = self._check_identifier("code", value)

    @property
    def title(self) -> str | None:
        return self._title

    @title.setter
    def title(self, value: str | None) -> None:
        self._title = self._check_string("title", value)

    @property
    def detail(self) -> str | None:
        return self._detail

    @detail.setter
    def detail(self, value: str | None) -> None:
        self._detail = self._check_string("detail", value)

    @property
    def source_pointer(self) -> str | None:
        return self._source_pointer

    @source_pointer.setter
    def source_pointer(self, value: str | None) -> None:
        self._source_pointer = self._check_string("source pointer", value)

    @property
    def source_parameter(self) -> str | None:
        return self._source_parameter

    @source_parameter.setter
    def source_parameter(self, value: str | None) -> None:
        self._source_parameter = self._check_string("source parameter", value)

    @staticmethod
    def _check_identifier(name: str, value: Any) -> Any:
        if value is not None and (isinstance(value, bool) or not isinstance(value, (str, int, float))):
            raise ValidationError(
                f"Could not set the {name} of the error: value should be a number or a string.",
                field=name,
            )
        return value

    @staticmethod
    def _check_string(name: str, value: Any) -> Any:
        if value is not None and not isinstance(value, str):
            raise ValidationError(
                f"Could not set the {name} of the error: value should be a string.",
                field=name.replace(" ", "_"),
            )
        return value

    def __repr__(self) -> str:
        return f"JSONAPIError(status_code={self._status_code!r}, title={self._title!r})"

    def to_json(self) -> dict[str, JSONValue]:
        """Return the error object; raises when no member is populated."""
        value: dict[str, JSONValue] = {}
        if _is_set(self._id):
            value["id"] = self._id
        if self.links:
            value["links"] = self._links_json()
        if self._status_code is not None:
            value["status"] = str(self._status_code)
        if _is_set(self._code):
            value["code"] = self._code
        if _is_set(self._title):
            value["title"] = self._title
        if _is_set(self._detail):
            value["detail"] = self._detail
        source: dict[str, JSONValue] = {}
        if _is_set(self._source_pointer):
            source["pointer"] = self._source_pointer
        if _is_set(self._source_parameter):
            source["parameter"] = self._source_parameter
        if source:
            value["source"] = source
        if self.meta:
            value["meta"] = dict(self.meta)
        if not value:
            raise MalformedDocumentError(
                "Could not render the error: no properties set, set at least one property."
            )
        return value


class JSONAPIErrorBuilder:
    """Build JSON:API error objects from values and exceptions."""

    def error_object(
        self,
        *,
        status: int | None = None,
        code: str | int | None = None,
        title: str | None = None,
        detail: str | None = None,
        source: Mapping[str, str] | None = None,
        meta: Mapping[str, JSONValue] | None = None,
    ) -> JSONAPIError:
        """Return a JSON:API error object."""
        error = JSONAPIError(status_code=status, code=code, title=title, detail=detail)
        if source:
            error.source_pointer = source.get("pointer")
            error.source_parameter = source.get("parameter")
        if meta:
            error.set_meta(meta)
        return error

    def from_exception(self, exc: Exception) -> JSONAPIError:
        """Return a 400 error for a bad request, a 500 error otherwise."""
        if isinstance(exc, BadRequestError):
            return exc.to_error()
        return self.error_object(
            status=500,
            title="Internal Server Error",
            detail=str(exc) or exc.__class__.__name__,
        )
