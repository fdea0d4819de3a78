"""Response body deserialization."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import aiohttp

from ..core.guards import require
from ..serialization import DEFAULT_SERIALIZER_OPTIONS, SerializerOptions, from_json_bytes

T = TypeVar("T")

logger = logging.getLogger(__name__)


async def read_json(
    response: aiohttp.ClientResponse,
    response_type: type[T] | Any,
    serializer_options: SerializerOptions | None = None,
) -> T:
    """Read the response body and deserialize it into response_type.

    Args:
        response: Response whose body has not been consumed yet.
        response_type: Type to validate the decoded document against.
        serializer_options: Options used to decode; the shared default when None.

    Raises:
        ArgumentError: response is None.
        ValueError: Body is empty or not valid JSON.
        pydantic.ValidationError: Body does not match response_type.
    """
    require(response, "response")
    if serializer_options is None:
        serializer_options = DEFAULT_SERIALIZER_OPTIONS

    body = await response.read()
    logger.debug(
        "Deserializing response body",
        extra={"status": response.status, "bytes": len(body)},
    )
    return from_json_bytes(body, response_type, serializer_options)
