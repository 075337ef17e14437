"""Settings shared by the registry, queries and the HTTP boundary."""

from typing import Optional

from pydantic import BaseModel, model_validator


class JSONAPISettings(BaseModel):
    """Registry-wide JSON:API settings."""

    version: str = "1.0"
    content_type: str = "application/vnd.api+json"
    default_limit: int = 1000
    maximum_limit: Optional[int] = None

    @model_validator(mode="after")
    def check_limits(self) -> "JSONAPISettings":
        """Ensure the configured limits can be satisfied together."""
        if self.default_limit < 1:
            raise ValueError("default_limit must be greater than or equal to 1.")
        if self.maximum_limit is not None and self.maximum_limit < self.default_limit:
            raise ValueError("maximum_limit cannot be lower than default_limit.")
        return self
