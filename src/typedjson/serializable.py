"""Serializable base class: type-directed fill from JSON and back."""

from __future__ import annotations

import inspect
import numbers
from collections.abc import Callable, Mapping
from dataclasses import MISSING, Field, dataclass
from datetime import date
from decimal import Decimal
from functools import update_wrapper, wraps
from types import MethodType
from typing import Any, ClassVar, Self, dataclass_transform

from typedjson.dates import InvalidDate, parse_date
from typedjson.metadata import MetadataProvider, default_provider
from typedjson.reporting import LogReporter, MismatchReporter
from typedjson.types import (
    UNDEFINED,
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


class constructing_method:  # noqa: N801
    """Method that, called on the class, runs on a new default instance.

    ``Model.from_json(raw)`` is ``Model().from_json(raw)``.
    """

    def __init__(self, func: Callable[..., Any]) -> None:
        self.__func__ = func
        update_wrapper(self, func)

    def __get__(self, instance: Any, owner: type | None = None) -> Callable[..., Any]:
        if instance is not None:
            return MethodType(self.__func__, instance)

        func = self.__func__

        @wraps(func)
        def construct(*args: Any, **kwargs: Any) -> Any:
            return func(owner(), *args, **kwargs)

        return construct


@dataclass_transform()
class Serializable:
    """Base for classes filled from JSON-like data.

    Annotated attributes declare the accepted types of each property; a
    subclass is turned into a dataclass, and attributes without a default
    start out as UNDEFINED so that a default-constructed instance owns every
    declared property.

    Example:
        class User(Serializable):
            id: int | None = None
            name: str = ""
            tags: list[str] = field(default_factory=list)
            password: Annotated[str, IGNORE] = ""

        user = User.from_json({"id": 1, "name": "Ann", "tags": ["admin"]})

    Class keywords configure where mismatches go and where metadata lives:

        class Strict(Serializable, reporter=RaisingReporter()):
            ...

    """

    json_reporter: ClassVar[MismatchReporter] = LogReporter()
    json_metadata: ClassVar[MetadataProvider] = default_provider

    def __init_subclass__(
        cls,
        *,
        reporter: MismatchReporter | None = None,
        metadata: MetadataProvider | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)
        if reporter is not None:
            cls.json_reporter = reporter
        if metadata is not None:
            cls.json_metadata = metadata

        for name, hint in inspect.get_annotations(cls).items():
            if _names_class_var(hint):
                continue
            if name not in cls.__dict__:
                setattr(cls, name, UNDEFINED)
            elif _lacks_default(attr := cls.__dict__[name]):
                attr.default = UNDEFINED
        dataclass(cls)
        cls.json_metadata.declare(cls)

    @constructing_method
    def from_json(self, raw: Any) -> Self:
        """Fill declared properties from a JSON-like mapping.

        Only keys that are also public attributes of this instance and have
        declared accepted types are read; others are ignored. Mismatches are
        reported through on_wrong_type and never abort the pass.
        """
        if (fields := _object_fields(raw)) is None:
            self.on_wrong_type("", "is not object", raw)
            return self

        owned = vars(self)
        for prop, value in fields.items():
            if not isinstance(prop, str) or prop.startswith("_") or prop not in owned:
                continue
            accepted = self.json_metadata.accepted_types(type(self), prop)
            if not accepted:
                continue
            setattr(self, prop, self.deserialize_property(prop, accepted, value))

        return self

    def to_json(self) -> dict[str, Any]:
        """Shallow copy of public attributes, ignored ones set to UNDEFINED."""
        data = {k: v for k, v in vars(self).items() if not k.startswith("_")}
        for prop in data:
            if self.json_metadata.is_ignored(type(self), prop):
                data[prop] = UNDEFINED
        return data

    def on_wrong_type(self, prop: str, message: str, value: Any) -> None:
        """Called for every value that cannot be deserialized.

        Delegates to the class reporter, which logs by default. Override to
        escalate or to record mismatches per instance.
        """
        self.json_reporter(type(self), prop, message, value)

    def deserialize_property(
        self,
        prop: str,
        accepted: tuple[TypeDescriptor, ...],
        value: Any,
    ) -> Any:
        """Coerce value to the first accepted type it matches.

        If nothing matches, the mismatch is reported and the property's
        current value is returned, leaving it unchanged.
        """
        for accepted_type in accepted:
            match accepted_type:
                case NullType() if value is None:
                    return None
                case UndefinedType() if value is UNDEFINED:
                    return UNDEFINED
                case BoolType() if isinstance(value, bool):
                    return bool(value)
                case NumberType() if _is_number(value):
                    return int(value) if isinstance(value, numbers.Integral) else float(value)
                case StrType() if isinstance(value, str):
                    return str(value)
                case ObjectType() if _is_object(value):
                    return {} if value is None else value
                case DateType() if isinstance(value, str | date):
                    parsed = parse_date(value)
                    if isinstance(parsed, InvalidDate):
                        self.on_wrong_type(prop, "is invalid date", value)
                    return parsed
                case ArrayType(element=element) if isinstance(value, list | tuple):
                    if element is None:
                        self.on_wrong_type(prop, "invalid type", value)
                        return list(value)
                    return [
                        self.deserialize_property(prop, (element,), item)
                        for item in value
                    ]
                case NestedType(cls=cls) if _object_fields(value) is not None:
                    return cls().from_json(value)
                case InstanceType(cls=cls) if isinstance(value, cls):
                    return value

        self.on_wrong_type(prop, "is invalid", value)
        return getattr(self, prop, UNDEFINED)


def _object_fields(value: Any) -> Mapping[Any, Any] | None:
    """Key/value view of an object-shaped input, None for anything else.

    Another Serializable reads as its public attributes, so the shallow
    output of to_json can be fed back to from_json.
    """
    if isinstance(value, Mapping):
        return value
    if isinstance(value, Serializable):
        return {k: v for k, v in vars(value).items() if not k.startswith("_")}
    return None


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real | Decimal) and not isinstance(value, bool)


def _is_object(value: Any) -> bool:
    """Object-shaped: anything but booleans, numbers, strings and UNDEFINED."""
    return not isinstance(value, bool | numbers.Number | str | Undefined)


def _lacks_default(attr: Any) -> bool:
    """A field() declaration with neither default nor default_factory."""
    return (
        isinstance(attr, Field)
        and attr.default is MISSING
        and attr.default_factory is MISSING
    )


def _names_class_var(hint: Any) -> bool:
    if isinstance(hint, str):
        return hint.startswith(("ClassVar", "typing.ClassVar"))
    return hint is ClassVar or getattr(hint, "__origin__", None) is ClassVar
