"""
Command-line argument parsing for the translation updater.
"""

import argparse
import sys
from pathlib import Path
from typing import NamedTuple

from ..core.version import get_version


class PathValidationError(Exception):
    """Raised when a path validation fails."""

    pass


class ParsedArgs(NamedTuple):
    """Container for parsed command-line arguments."""

    config_file: Path | None
    root_dir: Path | None
    new_build: bool
    skip_push: bool
    verbose: bool
    ci_mode: bool


def validate_config_file_path(config_file_str: str) -> Path:
    """
    Validate configuration file path.

    Args:
        config_file_str: String path to configuration file

    Returns:
        Resolved Path object for the configuration file

    Raises:
        PathValidationError: If the configuration file does not exist
    """
    try:
        config_file = Path(config_file_str).expanduser().resolve()
    except (OSError, ValueError) as e:
        raise PathValidationError(f"Invalid config file path: {e}") from e

    if not config_file.is_file():
        raise PathValidationError(f"Config file does not exist: {config_file}")

    return config_file


def validate_root_dir(path_str: str) -> Path:
    """
    Validate the repository root directory.

    Raises:
        PathValidationError: If the path is not an existing directory
    """
    try:
        path = Path(path_str).expanduser().resolve()
    except (OSError, ValueError) as e:
        raise PathValidationError(f"Invalid root directory: {e}") from e

    if not path.is_dir():
        raise PathValidationError(f"Root directory does not exist: {path}")

    return path


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="obs-translation-updater",
        description="Sync Crowdin translations into the OBS Studio repository and push them",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  CROWDIN_PERSONAL_TOKEN=... obs-translation-updater
    Update the repository in the current directory and push

  obs-translation-updater --root-dir ~/src/obs-studio --skip-push --verbose
    Update a checkout without committing or pushing

  obs-translation-updater --new-build --ci-mode
    Request a fresh build and log GitHub Actions annotations
""",
    )

    _ = parser.add_argument(
        "--config-file",
        type=str,
        default=None,
        help="Optional YAML file overriding the built-in settings",
        metavar="PATH",
    )

    _ = parser.add_argument(
        "--root-dir",
        type=str,
        default=None,
        help="Repository root (default: current directory)",
        metavar="PATH",
    )

    _ = parser.add_argument(
        "--new-build",
        action="store_true",
        help="Always request a new Crowdin build instead of reusing the latest finished one",
    )

    _ = parser.add_argument(
        "--skip-push",
        action="store_true",
        help="Update files but do not commit or push anything",
    )

    _ = parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    _ = parser.add_argument(
        "--ci-mode",
        action="store_true",
        help="Enable CI-friendly logging format",
    )

    _ = parser.add_argument(
        "--version", action="version", version=f"%(prog)s {get_version()}"
    )

    return parser


def parse_arguments(args: list[str] | None = None) -> ParsedArgs:
    """
    Parse command-line arguments.

    Args:
        args: List of arguments to parse (defaults to sys.argv[1:])

    Returns:
        ParsedArgs with validated paths

    Raises:
        SystemExit: If argument parsing or path validation fails
    """
    parser = create_argument_parser()
    parsed = parser.parse_args(args)

    config_file_str: str | None = getattr(parsed, "config_file", None)
    root_dir_str: str | None = getattr(parsed, "root_dir", None)

    try:
        config_file = validate_config_file_path(config_file_str) if config_file_str else None
        root_dir = validate_root_dir(root_dir_str) if root_dir_str else None
    except PathValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    return ParsedArgs(
        config_file=config_file,
        root_dir=root_dir,
        new_build=bool(getattr(parsed, "new_build", False)),
        skip_push=bool(getattr(parsed, "skip_push", False)),
        verbose=bool(getattr(parsed, "verbose", False)),
        ci_mode=bool(getattr(parsed, "ci_mode", False)),
    )
