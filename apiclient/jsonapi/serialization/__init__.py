"""JSON serialization."""

from .codec import from_json_bytes, to_json_bytes
from .options import (
    DEFAULT_SERIALIZER_OPTIONS,
    SerializerOptions,
    create_default_serializer_options,
)

__all__ = [
    "DEFAULT_SERIALIZER_OPTIONS",
    "SerializerOptions",
    "create_default_serializer_options",
    "from_json_bytes",
    "to_json_bytes",
]
