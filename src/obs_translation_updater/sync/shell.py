"""
Synchronous process gateway used for every git invocation.

Commands are passed as argument lists and run with an explicit working
directory, so the process-wide current directory is never changed.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from ..utils.core.exceptions import CommandError

logger = logging.getLogger(__name__)


class Shell:
    """Runs external commands and returns their standard output."""

    def __init__(self, root_dir: Path) -> None:
        self.root_dir: Path = root_dir

    def execute(self, *command: str, cwd: Path | None = None) -> str:
        """
        Run a command and return its captured stdout.

        Args:
            *command: Program and arguments
            cwd: Working directory (defaults to the repository root)

        Returns:
            The command's standard output

        Raises:
            CommandError: If the command cannot be started or exits non-zero
        """
        workdir = cwd if cwd is not None else self.root_dir
        logger.debug(f"Running '{' '.join(command)}' in {workdir}")
        try:
            result = subprocess.run(
                list(command),
                cwd=workdir,
                capture_output=True,
                text=True,
                check=False,
            )
        except (FileNotFoundError, NotADirectoryError, PermissionError) as e:
            raise CommandError(command, None, str(e)) from e

        if result.returncode != 0:
            raise CommandError(command, result.returncode, result.stderr)
        return result.stdout

    def git(self, *args: str, cwd: Path | None = None) -> str:
        """Run a git subcommand."""
        return self.execute("git", *args, cwd=cwd)
