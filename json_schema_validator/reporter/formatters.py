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

"""Output formats for validation results."""

import json
import sys
from typing import Dict, Optional, TextIO, Type

from .report import InstanceResult, RunResult


class Reporter:
    """Human readable report, one block per instance."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout

    def _write(self, line: str) -> None:
        print(line, file=self.stream)

    def schema_invalid(self, schema_path: str, message: str) -> None:
        self._write(f"Schema is invalid. Error: {message}")

    def instance(self, result: InstanceResult) -> None:
        if result.is_valid:
            self._write(f"{result.path} - VALID")
            return

        self._write(f"{result.path} - INVALID. Errors:")
        for index, error in enumerate(result.errors, 1):
            self._write(f"{index}. {error.message}")

    def finish(self, run_result: RunResult) -> None:
        """Called once after the last instance has been reported."""
        pass


class JsonReporter(Reporter):
    """Emits a single JSON document once the run is complete."""

    def schema_invalid(self, schema_path: str, message: str) -> None:
        pass

    def instance(self, result: InstanceResult) -> None:
        pass

    def finish(self, run_result: RunResult) -> None:
        self._write(json.dumps(run_result.to_dict(), indent=2))


class GithubActionsReporter(Reporter):
    """Workflow command annotations; valid instances print nothing."""

    def schema_invalid(self, schema_path: str, message: str) -> None:
        self._write(f"::error file={schema_path}::Schema is invalid. Error: {message}")

    def instance(self, result: InstanceResult) -> None:
        for error in result.errors:
            location = f" (at {error.instance_path})" if error.instance_path else ""
            self._write(f"::error file={result.path}::{error.message}{location}")


REPORTERS: Dict[str, Type[Reporter]] = {
    'human': Reporter,
    'json': JsonReporter,
    'github-actions': GithubActionsReporter,
}


def get_reporter(output_format: str, stream: Optional[TextIO] = None) -> Reporter:
    """Create the reporter for an output format name."""
    try:
        reporter_cls = REPORTERS[output_format]
    except KeyError:
        raise ValueError(
            f"Unknown output format: '{output_format}'. Valid formats: {list(REPORTERS)}"
        ) from None
    return reporter_cls(stream)
