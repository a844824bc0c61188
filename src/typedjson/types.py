"""Type descriptors: the accepted shapes of a property value."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Final, dataclass_transform


class Undefined:
    """Type of the UNDEFINED sentinel, an absent value distinct from None."""

    _instance: ClassVar[Undefined | None] = None

    def __new__(cls) -> Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> Undefined:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Undefined:
        return self

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Final = Undefined()


@dataclass(frozen=True)
@dataclass_transform(frozen_default=True)
class TypeDescriptor:
    """Base for type descriptors."""

    tag: ClassVar[str]

    def __init_subclass__(cls, tag: str | None = None) -> None:
        """Make the subclass a frozen dataclass and derive its tag."""
        dataclass(frozen=True)(cls)
        cls.tag = tag if tag is not None else cls.__name__.lower().removesuffix("type")


class NullType(TypeDescriptor, tag="null"):
    """Accepts None."""


class UndefinedType(TypeDescriptor, tag="undefined"):
    """Accepts UNDEFINED."""


class BoolType(TypeDescriptor, tag="bool"):
    """Accepts booleans."""


class NumberType(TypeDescriptor, tag="number"):
    """Accepts ints and floats, never bools."""


class StrType(TypeDescriptor, tag="str"):
    """Accepts strings."""


class ObjectType(TypeDescriptor, tag="object"):
    """Accepts any object-shaped value: mappings, lists, None, instances."""


class DateType(TypeDescriptor, tag="date"):
    """Accepts ISO 8601 strings and datetime/date values."""


class ArrayType(TypeDescriptor, tag="array"):
    """Array of one element type: list[str] → ArrayType(element=StrType()).

    ``element`` is None when the declaration named no element type.
    """

    element: TypeDescriptor | None = None


class NestedType(TypeDescriptor, tag="nested"):
    """A Serializable class, built and filled from a mapping.

    The capability check happens when the descriptor is extracted, so this
    holds only classes that provide ``from_json``.
    """

    cls: type


class InstanceType(TypeDescriptor, tag="instance"):
    """Any other class: an existing instance is accepted unchanged."""

    cls: type


def describe(descriptor: TypeDescriptor | None) -> str:
    """Human-readable form of a descriptor, used in log and error messages."""
    match descriptor:
        case None:
            return "?"
        case ArrayType(element=element):
            return f"{describe(element)}[]"
        case NestedType(cls=cls) | InstanceType(cls=cls):
            return cls.__qualname__
        case _:
            return descriptor.tag
