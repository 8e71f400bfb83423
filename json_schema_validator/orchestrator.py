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

"""Validation flow: load the schema, compile it, check every instance."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, TextIO, Union

from .engine import CompiledValidator, JsonSchemaEngine, SchemaEngine
from .exceptions import SchemaCompileError
from .file_io import load_json
from .reporter import InstanceResult, Reporter, RunResult

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ValidationOrchestrator:
    """Runs one schema against a list of instance files.

    Loader errors (missing file, malformed JSON) are not caught here: they
    abort the run. A schema that fails to compile and instances that fail
    validation are reported and reflected in :attr:`RunResult.success`.
    """

    def __init__(
        self,
        engine: SchemaEngine,
        reporter: Optional[Reporter] = None,
        jobs: int = 1,
    ):
        if jobs < 1:
            raise ValueError(f"jobs must be at least 1, got {jobs}")
        self.engine = engine
        self.reporter = reporter if reporter is not None else Reporter()
        self.jobs = jobs

    def run(self, schema_path: PathLike, instance_paths: Sequence[PathLike]) -> RunResult:
        """Validate every instance against the schema.

        Paths are reported exactly as given; they are only normalized for
        loading.

        Args:
            schema_path: Path to the JSON Schema document
            instance_paths: Instance documents, reported in this order

        Returns:
            RunResult holding the schema error (if any) and per-instance results

        Raises:
            FileAccessError: If the schema or an instance cannot be read
            MalformedJsonError: If the schema or an instance is not valid JSON
        """
        schema_name = os.fspath(schema_path)
        run_result = RunResult(schema_path=schema_name)

        schema = load_json(schema_path)
        try:
            validator = self.engine.compile(schema)
        except SchemaCompileError as e:
            logger.info(f"Schema {schema_name} failed to compile, skipping {len(instance_paths)} instance(s)")
            self._schema_invalid(run_result, e)
            return run_result

        try:
            for result in self._check_all(validator, [os.fspath(p) for p in instance_paths]):
                if not result.is_valid:
                    logger.debug(f"{result.path}: {len(result.errors)} error(s)")
                run_result.instances.append(result)
                self.reporter.instance(result)
        except SchemaCompileError as e:
            # Raised by engines that only detect some schema defects while
            # validating; remaining instances are skipped.
            logger.info(f"Schema {schema_name} became invalid during validation after {len(run_result.instances)} instance(s)")
            self._schema_invalid(run_result, e)
            return run_result

        self.reporter.finish(run_result)
        return run_result

    def _schema_invalid(self, run_result: RunResult, error: SchemaCompileError) -> None:
        run_result.schema_error = str(error)
        self.reporter.schema_invalid(run_result.schema_path, str(error))
        self.reporter.finish(run_result)

    def _check_all(self, validator: CompiledValidator, paths: List[str]) -> Iterator[InstanceResult]:
        if self.jobs == 1 or len(paths) <= 1:
            for path in paths:
                yield self._check_instance(validator, path)
            return

        # Executor.map yields in submission order, so the report never
        # depends on which instance finishes first.
        with ThreadPoolExecutor(max_workers=self.jobs) as executor:
            yield from executor.map(lambda path: self._check_instance(validator, path), paths)

    def _check_instance(self, validator: CompiledValidator, path: str) -> InstanceResult:
        instance = load_json(Path(path))
        return InstanceResult(path=path, errors=self.engine.validate(validator, instance))


def validate_files(
    schema_path: PathLike,
    instance_paths: Iterable[PathLike],
    *,
    engine: Optional[SchemaEngine] = None,
    stream: Optional[TextIO] = None,
) -> RunResult:
    """Validate instance files against a schema file with the human report."""
    orchestrator = ValidationOrchestrator(
        engine if engine is not None else JsonSchemaEngine(),
        Reporter(stream),
    )
    return orchestrator.run(schema_path, list(instance_paths))
