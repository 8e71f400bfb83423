#!/usr/bin/env python3
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

"""CLI entry point for validating JSON instances against a JSON Schema."""

import argparse
import logging
import sys
from dataclasses import dataclass, field
from typing import List, Optional

from . import __version__
from .engine import JsonSchemaEngine
from .exceptions import SchemaValidatorToolError
from .orchestrator import ValidationOrchestrator
from .reporter import REPORTERS, get_reporter
from .utils.logging_utils import configure_logging, parse_log_level

logger = logging.getLogger(__name__)

EXIT_FATAL = 2

VERSION_FLAGS = ('-v', '--version')


@dataclass(frozen=True)
class RunOptions:
    """Settings for one invocation, as given on the command line."""

    schema: str
    instances: List[str] = field(default_factory=list)
    output_format: str = 'human'
    jobs: int = 1
    log_level: int = logging.WARNING


def version_string() -> str:
    return f"Version: {__version__}"


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: '{value}'") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='json-schema-validate',
        description='Validate JSON instances against a JSON Schema',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'schema',
        nargs='?',
        help='The JSON Schema to validate with (i.e. schema.json)',
    )
    parser.add_argument(
        '-i', '--instance',
        dest='instances',
        action='append',
        default=[],
        metavar='PATH',
        help='A path to a JSON instance to validate (may be specified multiple times)',
    )
    parser.add_argument(
        *VERSION_FLAGS,
        action='version',
        version=version_string(),
        help="Show program's version number and exit",
    )
    parser.add_argument(
        '--format',
        dest='output_format',
        choices=list(REPORTERS),
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '-j', '--jobs',
        type=_positive_int,
        default=1,
        help='Number of instances validated concurrently (default: 1)',
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='WARNING',
        help='Diagnostics written to stderr (default: WARNING)',
    )
    return parser


def parse_options(argv: Optional[List[str]] = None) -> RunOptions:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.schema is None:
        parser.error('the following arguments are required: schema')

    return RunOptions(
        schema=args.schema,
        instances=list(args.instances),
        output_format=args.output_format,
        jobs=args.jobs,
        log_level=parse_log_level(args.log_level),
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the validator CLI."""
    if argv is None:
        argv = sys.argv[1:]

    # The version flag wins over everything else, including arguments that
    # would otherwise fail to parse. Tokens after "--" are positional.
    options_part = argv[:argv.index('--')] if '--' in argv else argv
    if any(arg in VERSION_FLAGS for arg in options_part):
        print(version_string())
        sys.exit(0)

    options = parse_options(argv)
    configure_logging(level=options.log_level)

    orchestrator = ValidationOrchestrator(
        JsonSchemaEngine(),
        get_reporter(options.output_format),
        jobs=options.jobs,
    )

    try:
        result = orchestrator.run(options.schema, options.instances)
    except SchemaValidatorToolError as e:
        logger.error(str(e))
        sys.exit(EXIT_FATAL)

    sys.exit(result.exit_code)


if __name__ == '__main__':
    main()
