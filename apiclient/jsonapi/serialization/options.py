"""JSON serializer options and the shared default instance."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from pydantic.alias_generators import to_camel


@dataclass(frozen=True)
class SerializerOptions:
    """Settings controlling JSON encoding and decoding.

    Attributes:
        naming_policy: Maps a Python attribute name to its JSON property name.
            Applied to pydantic model and dataclass fields without an explicit
            alias. Mapping keys are never renamed. ``None`` keeps names as-is.
        exclude_none: Omit attributes whose value is ``None``. Mapping values
            and sequence items are always written.
    """

    naming_policy: Callable[[str], str] | None = to_camel
    exclude_none: bool = True

    def property_name(self, name: str) -> str:
        """Apply the naming policy to an attribute name."""
        if self.naming_policy is None:
            return name
        return self.naming_policy(name)


def create_default_serializer_options() -> SerializerOptions:
    """Create the default options: camelCase property names, ``None`` omitted.

    Omitting ``None`` attributes is kept for compatibility with servers that
    treat an explicit ``null`` differently from a missing property.
    """
    return SerializerOptions(naming_policy=to_camel, exclude_none=True)


DEFAULT_SERIALIZER_OPTIONS = create_default_serializer_options()
