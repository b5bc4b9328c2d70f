"""Decode parsed YAML/JSON documents into the dataclass models.

Each dataclass field is read from the document key named by
``field.metadata["key"]`` (falling back to the attribute name). Unknown keys
are ignored. Fields declared with ``init=False`` are derived at validation
time and are never read from a document.
"""

from __future__ import annotations

import dataclasses
import typing
from typing import Any, Dict, Type, TypeVar, Union

T = TypeVar("T")

# Value used when a scalar key is present but null (``name:`` in YAML).
_ZERO: Dict[Any, Any] = {str: "", bool: False, int: 0, float: 0.0}


class DecodeError(ValueError):
    """Raised when a document does not have the shape a model expects."""


def wire_key(f: dataclasses.Field) -> str:
    """Return the document key for dataclass field *f*."""
    return f.metadata.get("key", f.name)


def build(cls: Type[T], data: Any, where: str = "") -> T:
    """Build an instance of dataclass *cls* from mapping *data*."""
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise DecodeError(
            f"{where or cls.__name__}: expected a mapping, got {type(data).__name__}"
        )

    hints = typing.get_type_hints(cls)
    kwargs: Dict[str, Any] = {}
    for f in dataclasses.fields(cls):
        if not f.init:
            continue
        key = wire_key(f)
        if key not in data:
            continue
        kwargs[f.name] = _convert(hints[f.name], data[key], _join(where, key))
    return cls(**kwargs)


def _join(where: str, key: str) -> str:
    return f"{where}.{key}" if where else key


def _convert(tp: Any, value: Any, where: str) -> Any:
    origin = typing.get_origin(tp)
    args = typing.get_args(tp)

    if origin is Union:
        if value is None:
            return None
        inner = [a for a in args if a is not type(None)]
        return _convert(inner[0], value, where)

    if tp is Any:
        return value

    if origin is list:
        if value is None:
            return []
        if not isinstance(value, list):
            raise DecodeError(f"{where}: expected a list, got {type(value).__name__}")
        return [_convert(args[0], item, f"{where}[{i}]") for i, item in enumerate(value)]

    if origin is dict:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise DecodeError(f"{where}: expected a mapping, got {type(value).__name__}")
        return {
            str(k): _convert(args[1], v, _join(where, str(k))) for k, v in value.items()
        }

    if dataclasses.is_dataclass(tp):
        return build(tp, value, where)

    if value is None:
        return _ZERO.get(tp)

    # bool is a subclass of int, so check it explicitly.
    if tp is bool:
        ok = isinstance(value, bool)
    elif tp is int:
        ok = isinstance(value, int) and not isinstance(value, bool)
    elif tp is float:
        ok = isinstance(value, (int, float)) and not isinstance(value, bool)
        if ok:
            value = float(value)
    else:
        ok = isinstance(value, tp)
    if not ok:
        raise DecodeError(
            f"{where}: expected {tp.__name__}, got {type(value).__name__} ({value!r})"
        )
    return value
