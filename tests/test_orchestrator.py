from __future__ import annotations

import io
import time
from pathlib import Path
from typing import Any, Iterator, List

import pytest

from json_schema_validator import validate_files
from json_schema_validator.engine import CompiledValidator, InstanceError, SchemaEngine
from json_schema_validator.exceptions import (
    FileAccessError,
    MalformedJsonError,
    SchemaCompileError,
)
from json_schema_validator.orchestrator import ValidationOrchestrator
from json_schema_validator.reporter import Reporter


class FakeValidator(CompiledValidator):
    """Reports whatever messages the instance lists under "errors"."""

    def iter_errors(self, instance: Any) -> Iterator[InstanceError]:
        # Later instances finish first when run concurrently.
        time.sleep(instance.get("delay", 0))
        for message in instance.get("errors", []):
            yield InstanceError(message=message)


class FakeEngine(SchemaEngine):
    def __init__(self):
        self.validated: List[Any] = []

    def compile(self, schema: Any) -> CompiledValidator:
        if schema.get("broken"):
            raise SchemaCompileError("schema is broken")
        return FakeValidator()

    def validate(self, validator, instance):
        self.validated.append(instance)
        if instance.get("dangling"):
            raise SchemaCompileError("dangling reference")
        return super().validate(validator, instance)


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def stream() -> io.StringIO:
    return io.StringIO()


def _orchestrator(engine, stream, jobs=1) -> ValidationOrchestrator:
    return ValidationOrchestrator(engine, Reporter(stream), jobs=jobs)


def test_all_valid(engine, stream, write_json):
    schema = write_json("schema.json", {})
    a = write_json("a.json", {})
    b = write_json("b.json", {})

    result = _orchestrator(engine, stream).run(schema, [a, b])

    assert result.success
    assert result.exit_code == 0
    assert stream.getvalue() == f"{a} - VALID\n{b} - VALID\n"


def test_invalid_instance_is_numbered_in_engine_order(engine, stream, write_json):
    schema = write_json("schema.json", {})
    a = write_json("a.json", {"errors": ["zeta", "alpha", "mu"]})
    b = write_json("b.json", {})

    result = _orchestrator(engine, stream).run(schema, [a, b])

    assert not result.success
    assert result.exit_code == 1
    assert stream.getvalue().splitlines() == [
        f"{a} - INVALID. Errors:",
        "1. zeta",
        "2. alpha",
        "3. mu",
        f"{b} - VALID",
    ]
    assert [r.is_valid for r in result.instances] == [False, True]


def test_one_invalid_instance_fails_the_run(engine, stream, write_json):
    schema = write_json("schema.json", {})
    paths = [
        write_json("a.json", {}),
        write_json("b.json", {"errors": ["bad"]}),
        write_json("c.json", {}),
    ]

    result = _orchestrator(engine, stream).run(schema, paths)

    assert not result.success
    assert len(result.instances) == 3


def test_compile_failure_skips_instances(engine, stream, write_json, tmp_path: Path):
    schema = write_json("schema.json", {"broken": True})
    # Never read, otherwise the run would abort with FileAccessError.
    missing = tmp_path / "missing.json"

    result = _orchestrator(engine, stream).run(schema, [missing])

    assert not result.success
    assert result.schema_error == "schema is broken"
    assert result.instances == []
    assert engine.validated == []
    assert stream.getvalue() == "Schema is invalid. Error: schema is broken\n"


def test_compile_failure_without_instances_still_fails(engine, stream, write_json):
    schema = write_json("schema.json", {"broken": True})
    result = _orchestrator(engine, stream).run(schema, [])
    assert not result.success
    assert result.exit_code == 1


def test_no_instances_with_valid_schema_succeeds_silently(engine, stream, write_json):
    schema = write_json("schema.json", {})
    result = _orchestrator(engine, stream).run(schema, [])
    assert result.success
    assert stream.getvalue() == ""


def test_missing_schema_is_fatal(engine, stream, tmp_path: Path):
    with pytest.raises(FileAccessError):
        _orchestrator(engine, stream).run(tmp_path / "schema.json", [])


def test_malformed_schema_is_fatal(engine, stream, tmp_path: Path):
    schema = tmp_path / "schema.json"
    schema.write_text("{not json", encoding="utf-8")
    with pytest.raises(MalformedJsonError):
        _orchestrator(engine, stream).run(schema, [])


def test_broken_instance_aborts_after_earlier_reports(engine, stream, write_json, tmp_path: Path):
    schema = write_json("schema.json", {})
    a = write_json("a.json", {})
    broken = tmp_path / "broken.json"
    broken.write_text("[1, 2", encoding="utf-8")
    c = write_json("c.json", {})

    with pytest.raises(MalformedJsonError):
        _orchestrator(engine, stream).run(schema, [a, broken, c])

    assert stream.getvalue() == f"{a} - VALID\n"
    assert len(engine.validated) == 1


def test_parallel_run_reports_in_input_order(write_json):
    schema = write_json("schema.json", {})
    paths = [
        write_json("a.json", {"delay": 0.2, "errors": ["late"]}),
        write_json("b.json", {"delay": 0.1}),
        write_json("c.json", {"delay": 0.0, "errors": ["early"]}),
    ]

    sequential, parallel = io.StringIO(), io.StringIO()
    _orchestrator(FakeEngine(), sequential).run(schema, paths)
    result = _orchestrator(FakeEngine(), parallel, jobs=3).run(schema, paths)

    assert parallel.getvalue() == sequential.getvalue()
    assert [r.path for r in result.instances] == [str(p) for p in paths]


def test_jobs_must_be_positive(engine):
    with pytest.raises(ValueError):
        ValidationOrchestrator(engine, jobs=0)


def test_validate_files_uses_jsonschema(write_json, stream):
    schema = write_json("schema.json", {"type": "integer"})
    hello = write_json("hello.json", "hello")
    answer = write_json("answer.json", 42)

    result = validate_files(schema, [hello, answer], stream=stream)

    assert not result.success
    assert stream.getvalue().splitlines() == [
        f"{hello} - INVALID. Errors:",
        "1. 'hello' is not of type 'integer'",
        f"{answer} - VALID",
    ]


def test_validate_files_reports_invalid_schema(write_json, stream):
    schema = write_json("schema.json", {"type": "not-a-type"})
    instance = write_json("instance.json", 1)

    result = validate_files(schema, [instance], stream=stream)

    assert not result.success
    lines = stream.getvalue().splitlines()
    assert len(lines) == 1
    assert lines[0].startswith("Schema is invalid. Error: ")


def test_schema_error_found_while_validating_is_reported(engine, stream, write_json):
    schema = write_json("schema.json", {})
    a = write_json("a.json", {})
    b = write_json("b.json", {"dangling": True})
    c = write_json("c.json", {})

    result = _orchestrator(engine, stream).run(schema, [a, b, c])

    assert not result.success
    assert result.schema_error == "dangling reference"
    assert [r.path for r in result.instances] == [str(a)]
    assert len(engine.validated) == 2
    assert stream.getvalue().splitlines() == [
        f"{a} - VALID",
        "Schema is invalid. Error: dangling reference",
    ]


def test_paths_are_reported_as_given(engine, stream, write_json, tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    write_json("schema.json", {})
    (tmp_path / "sub").mkdir()
    write_json("sub/a.json", {"errors": ["bad"]})
    write_json("b.json", {})

    result = _orchestrator(engine, stream).run("./schema.json", ["./sub//a.json", "./b.json"])

    assert result.schema_path == "./schema.json"
    assert stream.getvalue().splitlines() == [
        "./sub//a.json - INVALID. Errors:",
        "1. bad",
        "./b.json - VALID",
    ]
