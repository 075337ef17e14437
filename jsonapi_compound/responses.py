"""Starlette response rendering JSON:API documents."""

from __future__ import annotations

from typing import Any, Mapping

from starlette.background import BackgroundTask
from starlette.responses import JSONResponse

from jsonapi_compound.core.document import JSONAPIDocumentBuilder


class JSONAPIResponse(JSONResponse):
    """JSON response with the JSON:API media type.

    A document builder passed as content is rendered with its own status code
    unless one is given explicitly. A 204 status is sent without a body.
    """

    media_type = "application/vnd.api+json"

    def __init__(
        self,
        content: Any,
        status_code: int | None = None,
        headers: Mapping[str, str] | None = None,
        media_type: str | None = None,
        background: BackgroundTask | None = None,
    ) -> None:
        if isinstance(content, JSONAPIDocumentBuilder):
            status_code = status_code or content.get_status_code()
            content = content.render() if status_code != 204 else None
        super().__init__(
            content,
            status_code=status_code or 200,
            headers=headers,
            media_type=media_type,
            background=background,
        )

    def render(self, content: Any) -> bytes:
        if content is None and self.status_code == 204:
            return b""
        return super().render(content)
