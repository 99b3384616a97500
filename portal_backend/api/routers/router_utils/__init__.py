"""Shared router helpers: error mapping and credential resolution."""

from .credentials import resolve_credentials
from .error_handling import error_response, handle_api_errors, register_exception_handlers

__all__ = [
    "error_response",
    "handle_api_errors",
    "register_exception_handlers",
    "resolve_credentials",
]
