"""Resource adapters for application objects."""

from .base import JSONAPISerializer

__all__ = ["JSONAPISerializer"]
