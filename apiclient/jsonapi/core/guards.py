"""Argument guards shared by the transport functions and clients."""

from __future__ import annotations

from typing import Any, TypeVar

from .exceptions import ArgumentError

T = TypeVar("T")


def require(value: T | None, param_name: str) -> T:
    """Return value, or raise ArgumentError if it is None."""
    if value is None:
        raise ArgumentError(param_name)
    return value


def require_url(url: str | None, param_name: str = "url") -> str:
    """Return url, or raise ArgumentError if it is None, empty or whitespace."""
    if url is None or not str(url).strip():
        raise ArgumentError(param_name)
    return url


def require_callable(func: Any, param_name: str) -> Any:
    if not callable(func):
        raise ArgumentError(param_name, f"{param_name} must be callable")
    return func
