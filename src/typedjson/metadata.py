"""Per-class property metadata: accepted types and the ignore flag.

Classes are declared once, when they are defined; their annotations are
resolved into PropertySchema records on first lookup so that forward
references to classes defined later in the same module work.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from types import UnionType
from typing import Annotated, Any, ClassVar, Union, get_args, get_origin, get_type_hints

from typedjson.schema import PropertySchema, extract_types
from typedjson.types import TypeDescriptor, describe

logger = logging.getLogger(__name__)


@dataclass(frozen=True, init=False)
class Accepts:
    """Annotated marker overriding the accepted types derived from the hint.

    Example:
        started: Annotated[datetime | str, Accepts(datetime, str)]

    Order is match priority; the first accepted type that fits wins.
    """

    types: tuple[Any, ...]

    def __init__(self, *types: Any) -> None:
        object.__setattr__(self, "types", types)


@dataclass(frozen=True)
class Ignore:
    """Annotated marker: blank this property when serializing."""


IGNORE = Ignore()


class MetadataProvider:
    """Registry of property schemas, keyed by class.

    Lookups walk the MRO, so subclasses inherit their bases' declarations
    and may redeclare a property to change its accepted types.
    """

    def __init__(self) -> None:
        self._declared: set[type] = set()
        self._explicit: dict[type, dict[str, PropertySchema]] = {}
        self._resolved: dict[type, dict[str, PropertySchema]] = {}
        self._merged: dict[type, dict[str, PropertySchema]] = {}

    def declare(self, cls: type) -> None:
        """Record a class whose annotations declare its properties."""
        self._declared.add(cls)
        self._resolved.pop(cls, None)
        self._merged.clear()

    def register(
        self,
        cls: type,
        prop: str,
        *accepted: Any,
        ignore: bool = False,
    ) -> PropertySchema:
        """Declare a property explicitly, without annotations.

        Explicit declarations take precedence over annotations on the same
        class.

        Example:
            provider.register(User, "tags", [str])
            provider.register(User, "password", str, ignore=True)

        """
        types: list[TypeDescriptor] = []
        for py_type in accepted:
            types.extend(extract_types(py_type))
        schema = PropertySchema(name=prop, types=tuple(types), ignore=ignore)
        self._explicit.setdefault(cls, {})[prop] = schema
        self._merged.clear()
        return schema

    def schema(self, cls: type) -> dict[str, PropertySchema]:
        """All property schemas visible on cls, bases first."""
        if (merged := self._merged.get(cls)) is not None:
            return merged

        merged = {}
        for klass in reversed(cls.__mro__):
            if klass in self._declared:
                merged.update(self._resolve(klass))
            merged.update(self._explicit.get(klass, {}))
        self._merged[cls] = merged
        return merged

    def accepted_types(self, cls: type, prop: str) -> tuple[TypeDescriptor, ...]:
        """Accepted types for a property; empty if it was never declared."""
        if (schema := self.schema(cls).get(prop)) is None:
            return ()
        return schema.types

    def is_ignored(self, cls: type, prop: str) -> bool:
        """Whether serialization blanks the property."""
        schema = self.schema(cls).get(prop)
        return schema is not None and schema.ignore

    def _resolve(self, cls: type) -> dict[str, PropertySchema]:
        """Build schemas from the class's own annotations."""
        if (resolved := self._resolved.get(cls)) is not None:
            return resolved

        hints = get_type_hints(cls, include_extras=True)
        resolved = {}
        for name in inspect.get_annotations(cls):
            hint = hints[name]
            if _is_class_var(hint):
                continue
            resolved[name] = property_schema(name, hint)

        logger.debug(
            "Resolved %d properties for %s: %s",
            len(resolved),
            cls.__qualname__,
            ", ".join(
                f"{name}: {' | '.join(describe(t) for t in schema.types)}"
                for name, schema in resolved.items()
            ),
        )
        self._resolved[cls] = resolved
        return resolved


def property_schema(name: str, hint: Any) -> PropertySchema:
    """Build the schema for one annotated property.

    ``Accepts`` must annotate the whole hint. ``IGNORE`` may also mark one
    member of a union, as in ``Annotated[str, IGNORE] | None``.
    """
    types = extract_types(hint)
    ignore = False
    if get_origin(hint) is Annotated:
        for marker in get_args(hint)[1:]:
            if isinstance(marker, Accepts):
                types = tuple(t for py_type in marker.types for t in extract_types(py_type))
            elif _is_ignore(marker):
                ignore = True
    elif isinstance(hint, UnionType) or get_origin(hint) is Union:
        for member in get_args(hint):
            if get_origin(member) is not Annotated:
                continue
            for marker in get_args(member)[1:]:
                if isinstance(marker, Accepts):
                    msg = f"Accepts must annotate the whole of {name!r}, not a union member"
                    raise TypeError(msg)
                if _is_ignore(marker):
                    ignore = True
    return PropertySchema(name=name, types=types, ignore=ignore)


def _is_ignore(marker: Any) -> bool:
    return isinstance(marker, Ignore) or marker is Ignore


def _is_class_var(hint: Any) -> bool:
    return hint is ClassVar or get_origin(hint) is ClassVar


default_provider = MetadataProvider()
