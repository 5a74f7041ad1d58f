"""The data model shared by every serializer and the function that walks values."""

from __future__ import annotations

import abc
import dataclasses
import enum
from collections.abc import Iterable, Mapping, Sequence, Set
from typing import Any


class Serializer(abc.ABC):
    """A format-side visitor that :func:`serialize` drives.

    Scalar methods receive the value itself. Container methods receive the
    raw children (values, or ``(key, value)`` pairs for maps and structs)
    and serialize each child with ``serialize(child, self)``.
    """

    @abc.abstractmethod
    def serialize_bool(self, value: bool) -> Any:
        """Write a boolean."""

    @abc.abstractmethod
    def serialize_int(self, value: int) -> Any:
        """Write an integer."""

    @abc.abstractmethod
    def serialize_float(self, value: float) -> Any:
        """Write a floating point number."""

    @abc.abstractmethod
    def serialize_str(self, value: str) -> Any:
        """Write a string."""

    @abc.abstractmethod
    def serialize_bytes(self, value: bytes) -> Any:
        """Write raw bytes."""

    @abc.abstractmethod
    def serialize_none(self) -> Any:
        """Write an absent value."""

    @abc.abstractmethod
    def serialize_unit(self) -> Any:
        """Write an empty value."""

    @abc.abstractmethod
    def serialize_unit_variant(self, name: str, variant: str) -> Any:
        """Write an enumeration member without payload."""

    @abc.abstractmethod
    def serialize_newtype_struct(self, name: str, value: Any) -> Any:
        """Write a named wrapper around a single value."""

    @abc.abstractmethod
    def serialize_newtype_variant(self, name: str, variant: str, value: Any) -> Any:
        """Write an enumeration member carrying a single value."""

    @abc.abstractmethod
    def serialize_seq(self, items: Iterable[Any]) -> Any:
        """Write a homogeneous sequence; ``items`` may lack a length."""

    @abc.abstractmethod
    def serialize_tuple(self, items: Sequence[Any]) -> Any:
        """Write a fixed-size tuple."""

    @abc.abstractmethod
    def serialize_tuple_struct(self, name: str, items: Sequence[Any]) -> Any:
        """Write a named tuple with positional fields."""

    @abc.abstractmethod
    def serialize_map(self, items: Sequence[tuple[Any, Any]]) -> Any:
        """Write key/value pairs."""

    @abc.abstractmethod
    def serialize_struct(self, name: str, fields: Sequence[tuple[str, Any]]) -> Any:
        """Write a named record of ``(key, value)`` fields."""


def serialize(value: Any, serializer: Serializer) -> Any:
    """Feed ``value`` to ``serializer`` and return what the serializer returns.

    Objects with a ``serialize(serializer)`` method describe themselves;
    plain Python values are mapped onto the data model by their type.
    """
    if value is None:
        return serializer.serialize_none()
    method = getattr(value, "serialize", None)
    if method is not None and callable(method) and not isinstance(value, type):
        return method(serializer)
    if isinstance(value, bool):
        return serializer.serialize_bool(value)
    if isinstance(value, enum.Enum):
        return serializer.serialize_unit_variant(type(value).__name__, value.name)
    if isinstance(value, int):
        return serializer.serialize_int(value)
    if isinstance(value, float):
        return serializer.serialize_float(value)
    if isinstance(value, str):
        return serializer.serialize_str(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return serializer.serialize_bytes(bytes(value))
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        fields = [(f.name, getattr(value, f.name)) for f in dataclasses.fields(value)]
        return serializer.serialize_struct(type(value).__name__, fields)
    if isinstance(value, tuple):
        field_names = getattr(type(value), "_fields", None)
        if field_names is not None:
            return serializer.serialize_struct(type(value).__name__, list(zip(field_names, value)))
        if not value:
            return serializer.serialize_unit()
        return serializer.serialize_tuple(value)
    if isinstance(value, Mapping):
        return serializer.serialize_map(list(value.items()))
    if isinstance(value, Set):
        return serializer.serialize_seq(list(value))
    if isinstance(value, Sequence):
        return serializer.serialize_seq(value)
    if isinstance(value, Iterable):
        return serializer.serialize_seq(iter(value))
    raise TypeError(f"cannot serialize value of type {type(value).__name__}")