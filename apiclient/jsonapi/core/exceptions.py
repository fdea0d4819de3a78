"""Custom exception hierarchy."""

from __future__ import annotations


class ApiClientError(Exception):
    """Base exception for all library errors."""

    pass


class ArgumentError(ApiClientError, ValueError):
    """Required argument is missing or blank.

    Raised synchronously, before any network activity, so callers can tell
    a bad call apart from a failed request.
    """

    def __init__(self, param_name: str, message: str | None = None) -> None:
        super().__init__(message or f"{param_name} must not be None or blank")
        self.param_name = param_name
