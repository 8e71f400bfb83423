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

"""JSON document loader for schema and instance files."""

import json
import logging
from pathlib import Path
from typing import Any, Union

from ..exceptions import FileAccessError, MalformedJsonError

logger = logging.getLogger(__name__)


def load_json(path: Union[str, Path]) -> Any:
    """Load a JSON document from disk.

    Args:
        path: Path to a UTF-8 encoded JSON file

    Returns:
        The decoded JSON value (dict, list, str, int, float, bool or None)

    Raises:
        FileAccessError: If the file cannot be opened or read
        MalformedJsonError: If the file is not valid UTF-8 JSON
    """
    path = Path(path)
    logger.debug("Loading JSON document: %s", path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise MalformedJsonError(path, e.msg, line=e.lineno, column=e.colno) from e
    except UnicodeDecodeError as e:
        raise MalformedJsonError(path, f"not valid UTF-8 ({e.reason})") from e
    except OSError as e:
        raise FileAccessError(path, e.strerror or str(e)) from e
