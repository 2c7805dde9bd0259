"""
Submodule-aware commit and push workflow.

The update runs in two phases. :meth:`SubmoduleSynchronizer.prepare_build`
records which plugin submodules carry commits that are not on their tracked
branch and checks that branch out so new translations land on it.
:meth:`SubmoduleSynchronizer.push_changes` later commits and pushes every
changed submodule, then the parent repository, leaving the parent's pointer
untouched for each detached submodule. A parent commit must never reference
a submodule commit that only exists on a local, unmerged branch.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from .shell import Shell

logger = logging.getLogger(__name__)


def has_staged_changes(porcelain: str) -> bool:
    """Return True if ``git status --porcelain`` output lists an index change."""
    for line in porcelain.splitlines():
        if len(line) >= 2 and line[0] not in (" ", "?", "!"):
            return True
    return False


class SubmoduleSynchronizer:
    """Prepares plugin submodules before an update and publishes the result."""

    def __init__(
        self,
        shell: Shell,
        root_dir: Path,
        submodules: Sequence[str],
        branch: str = "master",
        committer_name: str = "Translation Updater",
        committer_email: str = "<>",
        commit_message: str = "Update translations from Crowdin",
    ) -> None:
        self.shell: Shell = shell
        self.root_dir: Path = root_dir
        self.submodules: tuple[str, ...] = tuple(submodules)
        self.branch: str = branch
        self.committer_name: str = committer_name
        self.committer_email: str = committer_email
        self.commit_message: str = commit_message

    def submodule_path(self, name: str) -> Path:
        """Working tree of a plugin submodule."""
        return self.root_dir / "plugins" / name

    def prepare_build(self) -> frozenset[str]:
        """
        Check out the tracked branch in every submodule.

        Returns:
            Names of submodules whose HEAD differs from the tracked branch
        """
        detached: set[str] = set()
        for submodule in self.submodules:
            cwd = self.submodule_path(submodule)
            if self.shell.git("diff", self.branch, "HEAD", cwd=cwd):
                logger.info(f"{submodule} has commits that are not on {self.branch}")
                detached.add(submodule)
            _ = self.shell.git("checkout", self.branch, cwd=cwd)
        return frozenset(detached)

    def push_changes(self, detached: frozenset[str] = frozenset()) -> bool:
        """
        Commit and push submodules, then the parent repository.

        Args:
            detached: Submodules reported by :meth:`prepare_build`

        Returns:
            True if the parent repository was committed and pushed
        """
        _ = self.shell.git("config", "--global", "user.name", self.committer_name)
        _ = self.shell.git("config", "--global", "user.email", self.committer_email)

        for submodule in self.submodules:
            cwd = self.submodule_path(submodule)
            if not self.shell.git("status", "--porcelain", cwd=cwd):
                logger.debug(f"No changes in {submodule}")
                continue
            _ = self.shell.git("add", ".", cwd=cwd)
            _ = self.shell.git("commit", "-m", self.commit_message, cwd=cwd)
            _ = self.shell.git("push", cwd=cwd)
            logger.info(f"Pushed translation update to {submodule}")

        _ = self.shell.git("add", ".")
        for submodule in self.submodules:
            if submodule not in detached:
                continue
            _ = self.shell.git("reset", "--", f"plugins/{submodule}")
            logger.info(
                f"{submodule} has commits not pushed to the main repository. "
                + "Only pushing to submodule."
            )

        if not has_staged_changes(self.shell.git("status", "--porcelain")):
            logger.info("No changes in main repository. Skipping push.")
            return False

        _ = self.shell.git("commit", "-m", self.commit_message)
        _ = self.shell.git("push")
        logger.info("Pushed translation update to the main repository")
        return True
