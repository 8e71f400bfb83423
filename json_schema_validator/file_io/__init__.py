"""File I/O related utilities.

Reading schema and instance documents lives here so that the orchestrator
never touches the filesystem directly.
"""

from .json_loader import load_json

__all__ = ["load_json"]
