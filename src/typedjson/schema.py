"""Convert Python type annotations to ordered descriptor lists."""

from __future__ import annotations

import datetime
import types
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import (
    Annotated,
    Any,
    Protocol,
    Union,
    get_args,
    get_origin,
    runtime_checkable,
)

from typedjson.types import (
    ArrayType,
    BoolType,
    DateType,
    InstanceType,
    NestedType,
    NullType,
    NumberType,
    ObjectType,
    StrType,
    TypeDescriptor,
    Undefined,
    UndefinedType,
)

_NUMBER_TYPES: tuple[type, ...] = (int, float, Decimal)
_OBJECT_TYPES: tuple[Any, ...] = (object, dict, Mapping)
_ARRAY_TYPES: tuple[Any, ...] = (list, tuple, Sequence)


@runtime_checkable
class SupportsFromJSON(Protocol):
    """A class whose default-constructed instances can be filled from JSON."""

    def from_json(self, raw: Any) -> Any: ...


@dataclass(frozen=True)
class PropertySchema:
    """Declared accepted types and ignore flag for one property."""

    name: str
    types: tuple[TypeDescriptor, ...]
    ignore: bool = False


def extract_types(py_type: Any) -> tuple[TypeDescriptor, ...]:
    """Convert an annotation to its ordered descriptor list.

    Unions expand to their members in declaration order, so ``str | None``
    gives ``(StrType(), NullType())``. ``Any`` accepts every JSON value.
    """
    if isinstance(py_type, TypeDescriptor):
        return (py_type,)

    origin = get_origin(py_type)

    if origin is Annotated:
        return extract_types(get_args(py_type)[0])

    if isinstance(py_type, types.UnionType) or origin is Union:
        result: list[TypeDescriptor] = []
        for arg in get_args(py_type):
            result.extend(extract_types(arg))
        return tuple(result)

    if py_type is Any:
        return (NullType(), BoolType(), NumberType(), StrType(), ObjectType())

    return (extract_type(py_type),)


def extract_type(py_type: Any) -> TypeDescriptor:
    """Convert a single, non-union annotation to a descriptor.

    A one-element list such as ``[str]`` is shorthand for ``list[str]``; an
    empty list declares an array with no element type.
    """
    if isinstance(py_type, TypeDescriptor):
        return py_type

    origin = get_origin(py_type)
    args = get_args(py_type)

    if py_type is None or py_type is type(None):
        return NullType()
    if py_type is Undefined:
        return UndefinedType()
    if py_type is bool:
        return BoolType()
    if py_type in _NUMBER_TYPES:
        return NumberType()
    if py_type is str:
        return StrType()

    # datetime is a subclass of date, one check covers both
    if isinstance(py_type, type) and issubclass(py_type, datetime.date):
        return DateType()

    if py_type in _OBJECT_TYPES or origin in (dict, Mapping):
        return ObjectType()

    if isinstance(py_type, list):
        return _array_of(py_type)

    if py_type in _ARRAY_TYPES:
        return ArrayType()

    if origin in _ARRAY_TYPES:
        if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
            args = args[:1]
        return _array_of(list(args))

    if isinstance(py_type, type):
        if issubclass(py_type, SupportsFromJSON):
            return NestedType(cls=py_type)
        return InstanceType(cls=py_type)

    msg = f"Cannot extract type from: {py_type!r}"
    raise TypeError(msg)


def _array_of(element_types: list[Any]) -> ArrayType:
    """Array descriptor; only the first declared element type is used.

    That element type must resolve to exactly one descriptor: unions and
    ``Any`` are rejected rather than narrowed to one of their members.
    """
    if not element_types:
        return ArrayType()

    element = element_types[0]
    descriptors = extract_types(element)
    if len(descriptors) != 1:
        msg = (
            f"Array element must be a single type, got {element!r}; "
            "use a bare list to keep elements unchanged"
        )
        raise TypeError(msg)
    return ArrayType(element=descriptors[0])
