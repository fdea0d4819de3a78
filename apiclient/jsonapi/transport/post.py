"""POST helpers that send a JSON body over an aiohttp session.

One function per result shape:

- ``post_json_for_response``: the raw ``aiohttp.ClientResponse``; the caller
  owns it and must release it (``async with response:``).
- ``post_json_without_response``: status verified, body ignored.
- ``post_json``: status verified, body deserialized into a type.

Optional behavior is selected with ``PostJsonOptions``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

import aiohttp

from ..core.guards import require, require_url
from ..serialization import DEFAULT_SERIALIZER_OPTIONS, SerializerOptions, to_json_bytes
from .response import read_json

T = TypeVar("T")

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
JSON_CONTENT_TYPE_UTF8 = "application/json; charset=utf-8"


@dataclass(frozen=True)
class PostJsonOptions:
    """Per-call options for the POST helpers.

    Attributes:
        include_charset: Send ``application/json; charset=utf-8`` instead of
            ``application/json``.
        serializer_options: Options for encoding the request and decoding the
            response. Must not be None.
        request_type: Declared type to serialize the request as; only its
            fields are written. Defaults to the runtime type of the request.
        headers: Extra request headers. ``Content-Type`` is always overridden.
        timeout: Per-request timeout passed to aiohttp.
    """

    include_charset: bool = False
    serializer_options: SerializerOptions = DEFAULT_SERIALIZER_OPTIONS
    request_type: type | None = None
    headers: Mapping[str, str] | None = None
    timeout: aiohttp.ClientTimeout | None = None

    def __post_init__(self) -> None:
        require(self.serializer_options, "serializer_options")

    @property
    def content_type(self) -> str:
        return JSON_CONTENT_TYPE_UTF8 if self.include_charset else JSON_CONTENT_TYPE


DEFAULT_POST_OPTIONS = PostJsonOptions()


async def post_json_for_response(
    session: aiohttp.ClientSession,
    url: str,
    request: Any,
    options: PostJsonOptions | None = None,
) -> aiohttp.ClientResponse:
    """Serialize request to JSON, POST it, and return the raw response.

    The status code is not checked. The caller owns the returned response.

    Raises:
        ArgumentError: session or request is None, or url is blank.
    """
    require(session, "session")
    require_url(url)
    require(request, "request")
    if options is None:
        options = DEFAULT_POST_OPTIONS

    body = to_json_bytes(request, options.serializer_options, as_type=options.request_type)

    headers = dict(options.headers or {})
    headers["Content-Type"] = options.content_type

    logger.debug(
        "POST JSON",
        extra={"url": url, "content_type": options.content_type, "bytes": len(body)},
    )

    kwargs: dict[str, Any] = {"data": body, "headers": headers}
    if options.timeout is not None:
        kwargs["timeout"] = options.timeout
    return await session.post(url, **kwargs)


async def post_json_without_response(
    session: aiohttp.ClientSession,
    url: str,
    request: Any,
    options: PostJsonOptions | None = None,
) -> None:
    """POST request as JSON and verify the status code; the body is ignored.

    Raises:
        ArgumentError: session or request is None, or url is blank.
        aiohttp.ClientResponseError: Response status is not a success code.
    """
    response = await post_json_for_response(session, url, request, options)
    async with response:
        response.raise_for_status()


async def post_json(
    session: aiohttp.ClientSession,
    url: str,
    request: Any,
    response_type: type[T] | Any,
    options: PostJsonOptions | None = None,
) -> T:
    """POST request as JSON and deserialize the response into response_type.

    Raises:
        ArgumentError: session or request is None, or url is blank.
        aiohttp.ClientResponseError: Response status is not a success code.
        ValueError: Response body is empty or not valid JSON.
        pydantic.ValidationError: Response body does not match response_type.
    """
    if options is None:
        options = DEFAULT_POST_OPTIONS

    response = await post_json_for_response(session, url, request, options)
    async with response:
        response.raise_for_status()
        return await read_json(response, response_type, options.serializer_options)
