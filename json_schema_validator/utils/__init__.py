"""Shared helpers that do not depend on the validation flow."""

from .logging_utils import configure_logging, parse_log_level

__all__ = ["configure_logging", "parse_log_level"]
