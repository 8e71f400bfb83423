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

"""Validation results for a run and for each instance."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..engine.base import InstanceError


@dataclass(frozen=True)
class InstanceResult:
    """Outcome of validating a single instance file.

    ``path`` is the instance path as the user gave it; ``errors`` keeps
    the order produced by the engine.
    """

    path: str
    errors: List[InstanceError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            'instance': self.path,
            'valid': self.is_valid,
            'errors': [
                {
                    'message': error.message,
                    'instance_path': error.instance_path,
                    'schema_path': error.schema_path,
                    'keyword': error.keyword,
                }
                for error in self.errors
            ],
        }


@dataclass
class RunResult:
    """Aggregated outcome of one schema checked against many instances."""

    schema_path: str
    schema_error: Optional[str] = None
    instances: List[InstanceResult] = field(default_factory=list)

    @property
    def schema_valid(self) -> bool:
        return self.schema_error is None

    @property
    def success(self) -> bool:
        """True only if the schema compiled and every instance is valid."""
        return self.schema_valid and all(r.is_valid for r in self.instances)

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            'schema': self.schema_path,
            'valid': self.success,
            'schema_error': self.schema_error,
            'instances': [r.to_dict() for r in self.instances],
        }
