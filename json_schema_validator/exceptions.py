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

"""Custom exceptions for the JSON Schema validator tool."""

from pathlib import Path
from typing import Optional, Union


class SchemaValidatorToolError(Exception):
    """Base exception for validator tool errors."""
    pass


class FileAccessError(SchemaValidatorToolError):
    """Exception raised when a JSON file cannot be opened or read."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to open file {self.path}: {reason}")


class MalformedJsonError(SchemaValidatorToolError):
    """Exception raised when a file's contents are not well-formed JSON."""

    def __init__(
        self,
        path: Union[str, Path],
        reason: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        self.path = Path(path)
        self.reason = reason
        self.line = line
        self.column = column
        location = f":{line}:{column}" if line is not None and column is not None else ""
        super().__init__(f"Invalid JSON in {self.path}{location}: {reason}")


class SchemaCompileError(SchemaValidatorToolError):
    """Exception raised when a schema document is not a valid schema."""
    pass
