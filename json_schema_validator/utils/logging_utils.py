import logging
import sys
from typing import Optional, TextIO


def parse_log_level(name: str) -> int:
    """Translate a level name such as ``"debug"`` into a logging constant."""
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name}")
    return level


def configure_logging(
    *,
    level: int = logging.WARNING,
    stream: Optional[TextIO] = None,
    formatter: Optional[logging.Formatter] = None,
) -> None:
    """Configure root logging to a single stderr handler.

    Standard output carries the validation report, so diagnostics are kept
    off it entirely. Calling this again replaces the previous handlers.
    """

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    if formatter is None:
        formatter = logging.Formatter("%(name)s - %(levelname)s - %(message)s")

    handler = logging.StreamHandler(stream=stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)

    root.addHandler(handler)
