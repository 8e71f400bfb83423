"""Schema compilation and instance validation engines.

The orchestrator depends on :class:`SchemaEngine` only; the ``jsonschema``
backed implementation is the default.
"""

from .base import CompiledValidator, InstanceError, SchemaEngine, to_json_pointer
from .jsonschema_engine import JsonSchemaEngine, JsonSchemaValidator

__all__ = [
    "CompiledValidator",
    "InstanceError",
    "SchemaEngine",
    "to_json_pointer",
    "JsonSchemaEngine",
    "JsonSchemaValidator",
]
