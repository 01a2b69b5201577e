#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from lic_config import DEFAULT_CONFIG_NAME, ConfigError, load_config, to_license_text
from lic_context import LogLevel, RunContext
from lic_diagnostics import Diagnostic
from lic_driver import LicenseDriver
from lic_handlers import builtin_handlers
from lic_logger import log_debug, log_error
from lic_paths import GlobPatternError, collect_files
from lic_registry import DuplicateExtensionError, FormatRegistry

__version__ = "0.1.0"

EXIT_OK = 0
EXIT_FAILURE = 1        # check: files missing a header; add: files changed
EXIT_USAGE = 2          # bad arguments, same code argparse uses
EXIT_NO_INPUT = 3       # no input files matched
EXIT_CONFIG_ERROR = 4   # invalid configuration or handler registry


class SetupError(Exception):
    """A run-level failure detected before any file is processed."""

    def __init__(self, diagnostic: Diagnostic, exit_code: int):
        super().__init__(diagnostic.message)
        self.diagnostic = diagnostic
        self.exit_code = exit_code


@dataclass
class SetupContext:
    """
    Everything check and add need after the common setup.

    - base_dir: directory used to resolve relative paths and display paths
    - input_files: collected files, minus ignored ones
    - license_text: plain license text built from the configuration
    - registry: extension to handler mapping
    """
    base_dir: Path
    input_files: List[Path]
    license_text: str
    registry: FormatRegistry


def build_run_context(args: argparse.Namespace) -> RunContext:
    """Build a RunContext from command-line arguments."""
    verbosity = getattr(args, 'verbosity', 0)
    if getattr(args, 'quiet', False):
        log_level = LogLevel.WARNING
    elif verbosity >= 1:
        log_level = LogLevel.DEBUG
    else:
        log_level = LogLevel.INFO

    return RunContext(
        log_rich_format=getattr(args, 'log', False),
        log_level=log_level,
    )


def build_registry() -> FormatRegistry:
    """Build the registry from the built-in handlers, raising SetupError on conflicts."""
    try:
        return FormatRegistry(builtin_handlers())
    except DuplicateExtensionError as e:
        raise SetupError(
            Diagnostic(kind="error", code="LIC-0030", message=f"Handler configuration error: {e}"),
            EXIT_CONFIG_ERROR,
        ) from e


def setup_command(args: argparse.Namespace, context: RunContext) -> SetupContext:
    """
    Collect input files, load the configuration and build the registry.

    Raises SetupError when a glob is invalid, no files match, the config
    cannot be loaded, or two handlers claim the same extension.
    """
    base_dir = Path(os.path.abspath(os.getcwd()))

    try:
        input_files = collect_files(args.files, args.ignore, base_dir, context)
    except GlobPatternError as e:
        raise SetupError(
            Diagnostic(kind="error", code="LIC-0011", message=str(e)),
            EXIT_USAGE,
        ) from e
    if not input_files:
        raise SetupError(
            Diagnostic(kind="error", code="LIC-0010", message="No input files matched."),
            EXIT_NO_INPUT,
        )

    try:
        config = load_config(args.config, base_dir)
    except ConfigError as e:
        code = "LIC-0020" if e.not_found else "LIC-0021"
        raise SetupError(
            Diagnostic(kind="error", code=code, message=f"Config error: {e.message}"),
            EXIT_CONFIG_ERROR,
        ) from e
    log_debug(context, f"Holder: {config.holder}")

    registry = build_registry()

    return SetupContext(
        base_dir=base_dir,
        input_files=input_files,
        license_text=to_license_text(config),
        registry=registry,
    )


def _prepare(args: argparse.Namespace):
    """Run the common setup, returning (driver, setup, exit_code)."""
    context = build_run_context(args)
    try:
        setup = setup_command(args, context)
    except SetupError as e:
        log_error(context, e.diagnostic.format())
        return None, None, e.exit_code
    driver = LicenseDriver(
        license_text=setup.license_text,
        registry=setup.registry,
        base_dir=setup.base_dir,
        context=context,
    )
    return driver, setup, EXIT_OK


def cmd_check(args: argparse.Namespace) -> int:
    """Verify that every input file carries the license header."""
    driver, setup, exit_code = _prepare(args)
    if driver is None:
        return exit_code

    summary = driver.check_files(setup.input_files)
    if summary.missing > 0 or summary.has_errors():
        return EXIT_FAILURE
    return EXIT_OK


def cmd_add(args: argparse.Namespace) -> int:
    """
    Add the license header to input files missing it.

    Exits with EXIT_FAILURE when at least one file was changed, so a CI run
    fails until the headers are committed.
    """
    driver, setup, exit_code = _prepare(args)
    if driver is None:
        return exit_code

    summary = driver.add_files(setup.input_files, dry_run=args.dry_run)
    if summary.added > 0 or summary.has_errors():
        return EXIT_FAILURE
    return EXIT_OK


def cmd_formats(args: argparse.Namespace) -> int:
    """Print each registered handler and the extensions it claims."""
    context = build_run_context(args)
    try:
        registry = build_registry()
    except SetupError as e:
        log_error(context, e.diagnostic.format())
        return e.exit_code

    claimed: Dict[str, List[str]] = {handler.name: [] for handler in registry.handlers}
    for ext in sorted(registry.supported_extensions()):
        claimed[registry.lookup(ext).name].append(ext)
    for name, exts in claimed.items():
        print(f"{name:<12} {' '.join(exts)}")
    return EXIT_OK



def cmd_version(args: argparse.Namespace) -> int:
    print(f"licensor {__version__}")
    print("Released under the MIT OR Apache-2.0 license")
    print("Use licensor --help for help")
    return EXIT_OK


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add the config, ignore and files arguments shared by check and add."""
    parser.add_argument(
        "--config", "-c",
        default=DEFAULT_CONFIG_NAME,
        help=f"Configuration file path (default: {DEFAULT_CONFIG_NAME})",
    )
    parser.add_argument(
        "--ignore",
        action="append",
        default=[],
        help="Glob to ignore (can be passed multiple times)",
    )
    parser.add_argument("files", nargs="+", help="Files, directories or glob patterns")


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="licensor", description="Check and add license headers")
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    parser.add_argument("-v", "--verbose",
                        action='count',
                        default=0,
                        dest='verbosity',
                        help="Increase verbosity: -v=DEBUG")
    parser.add_argument("-q", "--quiet",
                        action='store_true',
                        default=False,
                        help="Only report missing headers, warnings and errors")
    parser.add_argument("-l", "--log",
                        action='store_true',
                        default=False,
                        help="Enable rich log formatting (timestamps, levels)")

    ###########################
    # check command
    ###########################
    p_check = subparsers.add_parser("check", help="Verify that files carry the license header")
    _add_common_args(p_check)
    p_check.set_defaults(func=cmd_check)

    ###########################
    # add command
    ###########################
    p_add = subparsers.add_parser("add", help="Add the license header to files missing it")
    p_add.add_argument("--dry-run", "-n", action="store_true",
                       help="Report files that would change without writing them")
    _add_common_args(p_add)
    p_add.set_defaults(func=cmd_add)

    ###########################
    # formats command
    ###########################
    p_formats = subparsers.add_parser("formats", help="List supported file extensions")
    p_formats.set_defaults(func=cmd_formats)

    ###########################
    # version command
    ###########################
    p_version = subparsers.add_parser("version", help="Print version information")
    p_version.set_defaults(func=cmd_version)

    args = parser.parse_args(argv)

    rc = args.func(args)
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
