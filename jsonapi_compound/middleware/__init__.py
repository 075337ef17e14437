"""Middleware for JSON:API error handling."""

from .error_handler import ErrorHandlerMiddleware, error_response, register_exception_handlers

__all__ = ["ErrorHandlerMiddleware", "error_response", "register_exception_handlers"]
