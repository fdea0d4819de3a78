"""JSON encoding and decoding with naming-policy support.

Encoding walks pydantic models and dataclasses, renaming their fields through
``SerializerOptions.naming_policy`` (explicit aliases win) and dropping
``None`` attributes when ``exclude_none`` is set; pydantic-core writes the
result as UTF-8 bytes. Decoding parses with pydantic-core, maps property names
back onto field names guided by the requested type, and validates with a
pydantic ``TypeAdapter``. With ``exclude_none`` set, decoding mirrors encoding:
a ``null`` property is treated as absent, and an absent field whose annotation
allows ``None`` is set to ``None``.
"""

from __future__ import annotations

import dataclasses
import types
from collections import abc
from functools import lru_cache
from typing import Annotated, Any, TypeVar, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel, TypeAdapter
from pydantic_core import from_json, to_json

from .options import DEFAULT_SERIALIZER_OPTIONS, SerializerOptions

T = TypeVar("T")

_SEQUENCE_ORIGINS = {
    list,
    tuple,
    set,
    frozenset,
    abc.Sequence,
    abc.MutableSequence,
    abc.Set,
    abc.MutableSet,
    abc.Iterable,
    abc.Collection,
}
_MAPPING_ORIGINS = {dict, abc.Mapping, abc.MutableMapping}


def to_json_bytes(
    value: Any,
    options: SerializerOptions | None = None,
    *,
    as_type: type | None = None,
) -> bytes:
    """Serialize value to UTF-8 JSON bytes.

    Args:
        value: Model, dataclass, mapping, sequence or scalar to encode. Model
            computed fields are written like fields; extra attributes
            (``extra="allow"``) keep their original names.
        options: Serializer options; the shared default when None.
        as_type: Declared model or dataclass type to serialize value as. Only
            the fields of that type are written. Defaults to type(value).

    Returns:
        The encoded JSON document.
    """
    if options is None:
        options = DEFAULT_SERIALIZER_OPTIONS
    return to_json(_to_wire(value, options, as_type))


def from_json_bytes(
    data: bytes | str,
    return_type: type[T] | Any,
    options: SerializerOptions | None = None,
) -> T:
    """Deserialize JSON into return_type.

    With ``options.exclude_none`` set, ``null`` model and dataclass properties
    are dropped before validation, so fields that reject ``None`` keep their
    default. Missing fields that accept ``None`` decode as ``None``, so values
    encoded with the same options round-trip.

    Raises:
        ValueError: data is empty or not valid JSON.
        pydantic.ValidationError: the document does not match return_type.
    """
    if options is None:
        options = DEFAULT_SERIALIZER_OPTIONS
    raw = from_json(data)
    return _type_adapter(return_type).validate_python(_from_wire(raw, return_type, options))


@lru_cache(maxsize=256)
def _type_adapter(tp: Any) -> TypeAdapter:
    return TypeAdapter(tp)


def _is_model_type(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, BaseModel)


def _is_dataclass_type(tp: Any) -> bool:
    return isinstance(tp, type) and dataclasses.is_dataclass(tp)


def _to_wire(value: Any, options: SerializerOptions, as_type: type | None = None) -> Any:
    if isinstance(value, BaseModel):
        model_type = as_type if _is_model_type(as_type) else type(value)
        out: dict[str, Any] = {}
        for name, field in model_type.model_fields.items():
            if field.exclude:
                continue
            _put(out, field.serialization_alias or field.alias, name, getattr(value, name), options)
        for name, computed in model_type.model_computed_fields.items():
            _put(out, computed.alias, name, getattr(value, name), options)
        # Extra attributes keep the names they arrived with.
        if model_type is type(value) and value.model_extra:
            for key, item in value.model_extra.items():
                if item is None and options.exclude_none:
                    continue
                out[key] = _to_wire(item, options)
        return out

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        target = as_type if _is_dataclass_type(as_type) else value
        out = {}
        for field in dataclasses.fields(target):
            _put(out, None, field.name, getattr(value, field.name), options)
        return out

    if isinstance(value, abc.Mapping):
        return {key: _to_wire(item, options) for key, item in value.items()}

    if isinstance(value, (list, tuple, set, frozenset)):
        return [_to_wire(item, options) for item in value]

    # Scalars (str, numbers, datetime, Decimal, UUID, Enum...) are written by pydantic-core.
    return value


def _put(out: dict[str, Any], alias: str | None, name: str, item: Any, options: SerializerOptions) -> None:
    if item is None and options.exclude_none:
        return
    out[alias or options.property_name(name)] = _to_wire(item, options)


def _allows_none(tp: Any) -> bool:
    if tp is Any or tp is None or tp is type(None):
        return True
    origin = get_origin(tp)
    if origin is Annotated:
        return _allows_none(get_args(tp)[0])
    if origin is Union or origin is types.UnionType:
        return any(_allows_none(arg) for arg in get_args(tp))
    return False


def _from_wire(raw: Any, tp: Any, options: SerializerOptions) -> Any:
    if raw is None or tp is Any:
        return raw

    origin = get_origin(tp)
    if origin is Annotated:
        return _from_wire(raw, get_args(tp)[0], options)

    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(tp) if arg is not type(None)]
        # Ambiguous unions are left for pydantic to resolve on the raw names.
        if len(members) == 1:
            return _from_wire(raw, members[0], options)
        return raw

    if isinstance(raw, list) and origin in _SEQUENCE_ORIGINS:
        args = get_args(tp)
        if origin is tuple and args and args[-1] is not Ellipsis:
            return [_from_wire(item, arg, options) for item, arg in zip(raw, args)] + raw[len(args) :]
        item_type = args[0] if args else Any
        return [_from_wire(item, item_type, options) for item in raw]

    if isinstance(raw, dict):
        if origin in _MAPPING_ORIGINS:
            args = get_args(tp)
            value_type = args[1] if len(args) == 2 else Any
            return {key: _from_wire(item, value_type, options) for key, item in raw.items()}

        fields = _wire_fields(tp, options)
        if fields is None:
            return raw
        renamed: dict[str, Any] = {}
        for key, item in raw.items():
            if key not in fields:
                renamed[key] = item
                continue
            target, annotation = fields[key]
            # A null property leaves the field at its default.
            if item is None and options.exclude_none:
                continue
            renamed[target] = _from_wire(item, annotation, options)
        if options.exclude_none:
            # Attributes written as None were omitted on encode; restore them.
            for target, annotation in fields.values():
                if target not in renamed and _allows_none(annotation):
                    renamed[target] = None
        return renamed

    return raw


def _wire_fields(tp: Any, options: SerializerOptions) -> dict[str, tuple[str, Any]] | None:
    """Map JSON property name -> (validation key, annotation) for a model or dataclass."""
    if _is_model_type(tp):
        fields: dict[str, tuple[str, Any]] = {}
        for name, field in tp.model_fields.items():
            if field.validation_alias is not None and not isinstance(field.validation_alias, str):
                # AliasPath / AliasChoices are matched by pydantic itself.
                continue
            alias = field.validation_alias or field.alias
            if alias:
                fields[alias] = (alias, field.annotation)
            else:
                fields[options.property_name(name)] = (name, field.annotation)
        return fields

    if _is_dataclass_type(tp):
        hints = get_type_hints(tp, include_extras=True)
        return {
            options.property_name(field.name): (field.name, hints.get(field.name, Any))
            for field in dataclasses.fields(tp)
            if field.init
        }

    return None
