"""apiclient.jsonapi - JSON request/response helpers and API client base for aiohttp."""

from .client import JsonApiClient
from .core import ApiClient, ApiClientError, ArgumentError
from .serialization import (
    DEFAULT_SERIALIZER_OPTIONS,
    SerializerOptions,
    create_default_serializer_options,
    from_json_bytes,
    to_json_bytes,
)
from .transport import (
    DEFAULT_POST_OPTIONS,
    JSON_CONTENT_TYPE,
    JSON_CONTENT_TYPE_UTF8,
    PostJsonOptions,
    post_json,
    post_json_for_response,
    post_json_without_response,
    read_json,
)

__version__ = "0.1.0"

__all__ = [
    # Clients
    "ApiClient",
    "JsonApiClient",
    # Transport
    "PostJsonOptions",
    "DEFAULT_POST_OPTIONS",
    "JSON_CONTENT_TYPE",
    "JSON_CONTENT_TYPE_UTF8",
    "post_json",
    "post_json_for_response",
    "post_json_without_response",
    "read_json",
    # Serialization
    "SerializerOptions",
    "DEFAULT_SERIALIZER_OPTIONS",
    "create_default_serializer_options",
    "to_json_bytes",
    "from_json_bytes",
    # Exceptions
    "ApiClientError",
    "ArgumentError",
]
