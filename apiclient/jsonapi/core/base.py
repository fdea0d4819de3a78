"""Base API client abstract class.

Architecture:
    ApiClient owns (or borrows) one aiohttp session and defines the request
    flow every concrete client follows:
    - format_url: hook to turn a relative path into the request URL
    - get / post / post_without_response / delete: abstract verbs
    - process_response: hook run on every response before it is consumed
    - Async context manager support

Design Decisions:
    - Injected sessions are borrowed and never closed by the client
    - Owned sessions are created lazily and recreated once closed
    - Hooks are coroutines so subclasses may await (token refresh, signing)

See Also:
    - JsonApiClient: JSON implementation of the verbs
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, TypeVar

import aiohttp

from .guards import require_url

TResponse = TypeVar("TResponse")

Transformer = Callable[[aiohttp.ClientResponse, Any], Any]

logger = logging.getLogger(__name__)


class ApiClient(ABC):
    """Abstract base class for HTTP API clients."""

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        *,
        base_url: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get the injected session, or create an owned one when needed."""
        if self._owns_session and (self._session is None or self._session.closed):
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            logger.debug("Created HTTP session", extra={"client": type(self).__name__})
        return self._session

    async def format_url(self, url: str) -> str:
        """Return the URL a request for url is sent to.

        Relative URLs are appended to base_url; absolute ones pass through.
        """
        require_url(url)
        if self.base_url and not url.startswith(("http://", "https://")):
            return f"{self.base_url.rstrip('/')}/{url.lstrip('/')}"
        return url

    @abstractmethod
    async def process_response(
        self, response: aiohttp.ClientResponse, *args: Any
    ) -> aiohttp.ClientResponse:
        """Inspect or reject a response before its body is used."""

    @abstractmethod
    async def get(
        self,
        url: str,
        response_type: type[TResponse] | Any,
        transformer: Transformer | None = None,
    ) -> Any:
        """GET url and return the transformed response body."""

    @abstractmethod
    async def post(
        self,
        url: str,
        request: Any,
        response_type: type[TResponse] | Any,
        transformer: Transformer | None = None,
    ) -> Any:
        """POST request to url and return the transformed response body."""

    @abstractmethod
    async def post_without_response(self, url: str, request: Any) -> None:
        """POST request to url, checking only the response status."""

    @abstractmethod
    async def delete(
        self,
        url: str,
        response_type: type[TResponse] | Any,
        transformer: Transformer | None = None,
    ) -> Any:
        """DELETE url and return the transformed response body."""

    async def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> ApiClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
