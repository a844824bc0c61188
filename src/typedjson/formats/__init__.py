"""Format adapters for serialization.

Each format module provides dumps/loads functions built on to_builtins and
Serializable.from_json.
"""

from typedjson.formats.json import dumps, loads

__all__ = ["dumps", "loads"]
