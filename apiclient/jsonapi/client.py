"""Abstract JSON API client.

Concrete clients subclass JsonApiClient and expose domain methods built on the
protected-by-convention verbs::

    class UsersClient(JsonApiClient):
        async def get_user(self, user_id: int) -> User:
            return await self.get(f"/users/{user_id}", User)

Every verb runs the same linear flow: format the URL, send, run
``process_response`` (status check by default), deserialize, transform.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import aiohttp

from .core.base import ApiClient, Transformer
from .core.guards import require, require_callable, require_url
from .serialization import DEFAULT_SERIALIZER_OPTIONS, SerializerOptions
from .transport import PostJsonOptions, post_json_for_response, read_json

T = TypeVar("T")

logger = logging.getLogger(__name__)


def _body_only(response: aiohttp.ClientResponse, value: Any) -> Any:
    return value


class JsonApiClient(ApiClient):
    """Base class for clients of JSON HTTP APIs.

    Override points:
        create_serializer_options: options used for every request.
        process_response: cross-cutting response handling (error translation,
            header inspection, logging). Runs before any deserialization.
        format_url: URL construction (inherited from ApiClient).
    """

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        *,
        base_url: str | None = None,
        timeout: float = 30.0,
        serializer_options: SerializerOptions | None = None,
    ) -> None:
        super().__init__(session, base_url=base_url, timeout=timeout)
        self._serializer_options = serializer_options

    def create_serializer_options(self) -> SerializerOptions:
        """Return the serializer options for a request."""
        if self._serializer_options is not None:
            return self._serializer_options
        return DEFAULT_SERIALIZER_OPTIONS

    async def process_response(
        self,
        response: aiohttp.ClientResponse,
        serializer_options: SerializerOptions | None = None,
    ) -> aiohttp.ClientResponse:
        """Verify the response status and return the response unchanged.

        Args:
            response: Response of the request, body not yet read.
            serializer_options: Options in effect for the request, for
                overrides that decode error bodies.

        Returns:
            The response to read. Overrides normally return response itself;
            a different response returned here is read and then released by
            the client, and response is released as well.

        Raises:
            aiohttp.ClientResponseError: Status is not a success code.
        """
        require(response, "response")
        response.raise_for_status()
        return response

    async def get(
        self,
        url: str,
        response_type: type[T] | Any,
        transformer: Transformer | None = None,
    ) -> Any:
        transformer = self._resolve_transformer(transformer)
        url = await self.format_url(require_url(url))
        options = self.create_serializer_options()

        logger.debug("GET", extra={"url": url})
        async with self.session.get(url) as response:
            return await self._read(response, response_type, options, transformer)

    async def post(
        self,
        url: str,
        request: Any,
        response_type: type[T] | Any,
        transformer: Transformer | None = None,
    ) -> Any:
        require(request, "request")
        transformer = self._resolve_transformer(transformer)
        url = await self.format_url(require_url(url))
        options = self.create_serializer_options()

        response = await post_json_for_response(
            self.session, url, request, PostJsonOptions(serializer_options=options)
        )
        async with response:
            return await self._read(response, response_type, options, transformer)

    async def post_without_response(self, url: str, request: Any) -> None:
        require(request, "request")
        url = await self.format_url(require_url(url))
        options = self.create_serializer_options()

        response = await post_json_for_response(
            self.session, url, request, PostJsonOptions(serializer_options=options)
        )
        async with response:
            processed = await self.process_response(response, options)
            self._release_replacement(response, processed)

    async def delete(
        self,
        url: str,
        response_type: type[T] | Any,
        transformer: Transformer | None = None,
    ) -> Any:
        transformer = self._resolve_transformer(transformer)
        url = await self.format_url(require_url(url))
        options = self.create_serializer_options()

        logger.debug("DELETE", extra={"url": url})
        async with self.session.delete(url) as response:
            return await self._read(response, response_type, options, transformer)

    async def _read(
        self,
        response: aiohttp.ClientResponse,
        response_type: type[T] | Any,
        options: SerializerOptions,
        transformer: Transformer,
    ) -> Any:
        processed = await self.process_response(response, options)
        try:
            value = await read_json(processed, response_type, options)
            return transformer(processed, value)
        finally:
            self._release_replacement(response, processed)

    @staticmethod
    def _release_replacement(
        response: aiohttp.ClientResponse, processed: aiohttp.ClientResponse
    ) -> None:
        # The caller releases response; a different object returned by
        # process_response is released here.
        if processed is not response:
            processed.release()

    @staticmethod
    def _resolve_transformer(transformer: Transformer | None) -> Transformer:
        if transformer is None:
            return _body_only
        return require_callable(transformer, "transformer")
