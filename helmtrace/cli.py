# Copyright 2025 Roger Cibrian
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

"""Command-line interface for helmtrace.

This module provides the `helmtrace` entry point. It takes a base values
file followed by one or more override files, merges the overrides in order
and prints which override added or changed each value.

Example:
    Trace overrides:
        ```bash
        $ helmtrace values.yaml values-staging.yaml values-prod.yaml
        ```

    Machine-readable output:
        ```bash
        $ helmtrace --format json values.yaml values-prod.yaml
        ```

    Print the full effective configuration:
        ```bash
        $ helmtrace --effective values.yaml values-prod.yaml
        ```

    Enable verbose output:
        ```bash
        $ helmtrace -v values.yaml values-prod.yaml
        ```

Exit Codes:

- 0: Success
- 1: Error (too few files, unreadable file, or invalid YAML)

Note:
    Progress and diagnostics go to stderr; the report goes to stdout.
    Verbose mode shows full tracebacks on errors for debugging.
    Debug mode implies verbose mode and dumps every loaded document.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version
import sys

from helmtrace.core import trace_overrides
from helmtrace.exceptions import HelmTraceError, LoadError, ParseError, UsageError
from helmtrace.logging import get_logger, set_global_logger
from helmtrace.report import render_effective, render_json, render_text

OUTPUT_FORMATS = ("text", "json")


@dataclass(frozen=True)
class TraceOptions:
    """Settings for one CLI run, built from the parsed arguments.

    Attributes:
        files: Base file followed by override files.
        output_format: "text" or "json" for the audit report.
        effective: Print the full effective configuration instead of
            the audit report.
        verbose: Show progress on stderr.
        debug: Show detailed diagnostics (implies verbose).
    """

    files: tuple[str, ...]
    output_format: str = "text"
    effective: bool = False
    verbose: bool = False
    debug: bool = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> TraceOptions:
        return cls(
            files=tuple(args.files),
            output_format=args.format,
            effective=args.effective,
            verbose=args.verbose or args.debug,
            debug=args.debug,
        )


def run_trace(options: TraceOptions) -> int:
    """Run a trace and print the report.

    Args:
        options: Settings for this run.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    logger = get_logger(verbose=options.verbose, debug=options.debug)
    set_global_logger(logger)

    try:
        result = trace_overrides(options.files, seed_base=options.effective)
    except UsageError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1
    except (LoadError, ParseError) as err:
        print(f"Error: {err}", file=sys.stderr)
        if options.verbose:
            import traceback

            traceback.print_exc()
        return 1
    except HelmTraceError as err:
        # Catch any other helmtrace errors we might have missed
        print(f"Error: {err}", file=sys.stderr)
        if options.verbose:
            import traceback

            traceback.print_exc()
        return 1

    if options.effective:
        sys.stdout.write(render_effective(result))
    elif options.output_format == "json":
        sys.stdout.write(render_json(result))
    else:
        sys.stdout.write(render_text(result))
    return 0


def _package_version() -> str:
    try:
        return version("helmtrace")
    except PackageNotFoundError:
        from helmtrace import __version__

        return __version__


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the helmtrace command."""
    parser = argparse.ArgumentParser(
        prog="helmtrace",
        description=(
            "Merge override values files onto a base values file and show "
            "which override added or changed each value."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"helmtrace {_package_version()}",
    )
    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="Base values file followed by one or more override files",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default="text",
        help="Report format (default: text)",
    )
    output.add_argument(
        "--effective",
        action="store_true",
        help="Print the full effective configuration (base plus overrides) as "
        "YAML instead of the report",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the helmtrace CLI.

    This function is registered as the 'helmtrace' console script in
    pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if len(args.files) < 2:
        parser.print_usage(sys.stderr)

    exit_code = run_trace(TraceOptions.from_args(args))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
