"""Core components."""

from .base import ApiClient
from .exceptions import ApiClientError, ArgumentError
from .guards import require, require_callable, require_url

__all__ = [
    "ApiClient",
    "ApiClientError",
    "ArgumentError",
    "require",
    "require_callable",
    "require_url",
]
