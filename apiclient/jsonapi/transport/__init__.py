"""JSON transport helpers over aiohttp."""

from .post import (
    DEFAULT_POST_OPTIONS,
    JSON_CONTENT_TYPE,
    JSON_CONTENT_TYPE_UTF8,
    PostJsonOptions,
    post_json,
    post_json_for_response,
    post_json_without_response,
)
from .response import read_json

__all__ = [
    "DEFAULT_POST_OPTIONS",
    "JSON_CONTENT_TYPE",
    "JSON_CONTENT_TYPE_UTF8",
    "PostJsonOptions",
    "post_json",
    "post_json_for_response",
    "post_json_without_response",
    "read_json",
]
