# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Schema engine backed by the ``jsonschema`` library."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Tuple

from jsonschema import Draft202012Validator, validators
from jsonschema.exceptions import SchemaError
from referencing import Registry, Resource
from referencing.exceptions import Unresolvable
from referencing.jsonschema import DRAFT202012

from ..exceptions import SchemaCompileError
from .base import CompiledValidator, InstanceError, SchemaEngine, to_json_pointer

logger = logging.getLogger(__name__)

# Keywords whose values are data, not subschemas.
_DATA_KEYWORDS = frozenset({"const", "default", "enum", "examples"})


def _iter_local_refs(node: Any, path: Tuple[Any, ...] = ()) -> Iterator[Tuple[str, Tuple[Any, ...]]]:
    """Yield ``(ref, location)`` for every ``#...`` reference under the root base URI.

    Subschemas that set their own ``$id`` (or draft 4 ``id``) change the base
    URI and are not descended into.
    """
    if isinstance(node, dict):
        if path and (isinstance(node.get("$id"), str) or isinstance(node.get("id"), str)):
            return
        ref = node.get("$ref")
        if isinstance(ref, str) and ref.startswith("#"):
            yield ref, path + ("$ref",)
        for key, value in node.items():
            if key not in _DATA_KEYWORDS:
                yield from _iter_local_refs(value, path + (key,))
    elif isinstance(node, list):
        for index, value in enumerate(node):
            yield from _iter_local_refs(value, path + (index,))


def _check_local_refs(schema: Dict[str, Any]) -> None:
    """Resolve in-document references up front.

    ``jsonschema`` only follows ``$ref`` while validating, so a dangling
    pointer would otherwise surface in the middle of a run.
    """
    resource = Resource.from_contents(schema, default_specification=DRAFT202012)
    resolver = Registry().resolver_with_root(resource)
    for ref, location in _iter_local_refs(schema):
        try:
            resolver.lookup(ref)
        except Unresolvable as e:
            raise SchemaCompileError(
                f"Unresolvable reference '{ref}' (at {to_json_pointer(location)})"
            ) from e


class JsonSchemaValidator(CompiledValidator):
    """Wraps a ``jsonschema`` validator instance built for one schema."""

    def __init__(self, validator):
        self._validator = validator

    @property
    def draft(self) -> str:
        return type(self._validator).__name__

    def iter_errors(self, instance: Any) -> Iterator[InstanceError]:
        for error in self._validator.iter_errors(instance):
            yield InstanceError(
                message=error.message,
                instance_path=to_json_pointer(error.absolute_path),
                schema_path=to_json_pointer(error.absolute_schema_path),
                keyword=error.validator if isinstance(error.validator, str) else None,
            )


class JsonSchemaEngine(SchemaEngine):
    """Compiles schemas with the draft named by ``$schema``.

    Schemas without ``$schema`` use ``default_validator`` (Draft 2020-12).
    """

    def __init__(self, *, default_validator=Draft202012Validator, check_formats: bool = True):
        self.default_validator = default_validator
        self.check_formats = check_formats

    def compile(self, schema: Any) -> JsonSchemaValidator:
        if not isinstance(schema, (dict, bool)):
            raise SchemaCompileError(
                f"{schema!r} is not of type 'object', 'boolean'"
            )

        dialect = schema.get("$schema") if isinstance(schema, dict) else None
        if dialect is not None and not isinstance(dialect, str):
            raise SchemaCompileError(f"{dialect!r} is not of type 'string' (at /$schema)")

        cls = validators.validator_for(schema, default=self.default_validator)
        try:
            cls.check_schema(schema)
        except SchemaError as e:
            raise SchemaCompileError(e.message) from e

        if isinstance(schema, dict):
            _check_local_refs(schema)

        format_checker = cls.FORMAT_CHECKER if self.check_formats else None
        compiled = JsonSchemaValidator(cls(schema, format_checker=format_checker))
        logger.debug("Compiled schema with %s", compiled.draft)
        return compiled

    def validate(self, validator: CompiledValidator, instance: Any) -> List[InstanceError]:
        # References compile() cannot check (remote, or below a nested $id)
        # are still resolved lazily here.
        try:
            return list(validator.iter_errors(instance))
        except Unresolvable as e:
            raise SchemaCompileError(f"Unresolvable reference in schema: {e}") from e
