"""typedjson - Type-directed conversion between JSON data and Python objects."""

from typedjson.codecs import to_builtins
from typedjson.dates import InvalidDate
from typedjson.errors import (
    DeserializationError,
    Mismatch,
    TypedJSONError,
    WrongTypeError,
)
from typedjson.formats.json import dumps, loads
from typedjson.metadata import (
    IGNORE,
    Accepts,
    Ignore,
    MetadataProvider,
    default_provider,
)
from typedjson.reporting import (
    CollectingReporter,
    LogReporter,
    MismatchReporter,
    RaisingReporter,
)
from typedjson.schema import PropertySchema, extract_type, extract_types
from typedjson.serializable import Serializable
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

__all__ = [
    # Markers and sentinels
    "IGNORE",
    "UNDEFINED",
    "Accepts",
    # Descriptors
    "ArrayType",
    "BoolType",
    # Reporters
    "CollectingReporter",
    "DateType",
    # Errors
    "DeserializationError",
    "Ignore",
    "InstanceType",
    "InvalidDate",
    "LogReporter",
    # Metadata
    "MetadataProvider",
    "Mismatch",
    "MismatchReporter",
    "NestedType",
    "NullType",
    "NumberType",
    "ObjectType",
    "PropertySchema",
    "RaisingReporter",
    # Core
    "Serializable",
    "StrType",
    "TypeDescriptor",
    "TypedJSONError",
    "Undefined",
    "UndefinedType",
    "WrongTypeError",
    "default_provider",
    # Serialization
    "dumps",
    "extract_type",
    "extract_types",
    "loads",
    "to_builtins",
]
