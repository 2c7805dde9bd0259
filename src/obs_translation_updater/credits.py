"""
AUTHORS file generation.

The credits file lists git contributors by commit count followed by the
Crowdin translators of every language.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable, Mapping
from pathlib import Path

from .crowdin.models import REMOVED_USER, TopMembersReport

logger = logging.getLogger(__name__)

SHORTLOG_COMMAND = ("shortlog", "--all", "-sn", "--no-merges")


def parse_contributors(shortlog_output: str, excluded: str = "Translation Updater") -> list[str]:
    """
    Extract contributor names from ``git shortlog -sn`` output.

    Args:
        shortlog_output: Lines of ``<count>\\t<name>``
        excluded: Automation identity left out of the credits

    Returns:
        Names in shortlog order
    """
    contributors: list[str] = []
    for line in shortlog_output.splitlines():
        name = line[line.find("\t") + 1 :].strip()
        if not name or name == excluded:
            continue
        contributors.append(name)
    return contributors


def format_contributors(names: Iterable[str]) -> str:
    """Render the Contributors block."""
    return "Contributors:\n" + "".join(f" {name}\n" for name in names)


def collect_translators(
    reports: Iterable[TopMembersReport], blocked_ids: Collection[int]
) -> dict[str, list[str]]:
    """
    Group credited translators by language name.

    Deleted and blocked accounts are skipped, as are members without a
    single translated or approved string.
    """
    translators: dict[str, list[str]] = {}
    for report in reports:
        members = translators.setdefault(report.language_name, [])
        for entry in report.entries:
            if entry.full_name == REMOVED_USER or entry.user_id in blocked_ids:
                continue
            if entry.translated == 0 and entry.approved == 0:
                continue
            members.append(entry.full_name)
    return translators


def format_translators(translators: Mapping[str, list[str]]) -> str:
    """Render the Translators block with languages sorted by name."""
    lines = ["Translators:\n"]
    for language in sorted(translators, key=lambda name: (name.casefold(), name)):
        lines.append(f" {language}:\n")
        lines.extend(f"  {user}\n" for user in translators[language])
    return "".join(lines)


def generate_authors(path: Path, contributors: str, translators: str, heading: str) -> None:
    """Overwrite the credits file."""
    _ = path.write_text(f"{heading}{contributors}{translators}", encoding="utf-8", newline="\n")
    logger.info(f"Wrote {path.name}")
