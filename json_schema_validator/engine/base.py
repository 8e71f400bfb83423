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

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

JsonPointer = str


@dataclass(frozen=True)
class InstanceError:
    """One schema rule violated by an instance document."""

    message: str
    instance_path: JsonPointer = ""
    schema_path: JsonPointer = ""
    keyword: Optional[str] = None


def _jp_escape(token: Any) -> str:
    return str(token).replace("~", "~0").replace("/", "~1")


def to_json_pointer(tokens: Iterable[Any]) -> JsonPointer:
    """Build a JSON Pointer (RFC 6901) from path tokens; the root is ``""``."""
    return "".join(f"/{_jp_escape(token)}" for token in tokens)


class CompiledValidator(ABC):
    """A schema prepared for repeated validation. Never mutated after compile."""

    @abstractmethod
    def iter_errors(self, instance: Any) -> Iterable[InstanceError]:
        """Yield violations in the order the engine finds them."""


class SchemaEngine(ABC):
    """Compiles schemas and validates instances against them.

    The orchestrator only talks to this interface, so any engine that can
    compile a schema value and report ordered violations can be plugged in.
    """

    @abstractmethod
    def compile(self, schema: Any) -> CompiledValidator:
        """Compile a schema value.

        Raises:
            SchemaCompileError: If the schema itself is malformed
        """

    def validate(self, validator: CompiledValidator, instance: Any) -> List[InstanceError]:
        """Validate an instance; an empty list means the instance is valid."""
        return list(validator.iter_errors(instance))
