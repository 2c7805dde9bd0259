"""
Locale directories holding synced translations.

Selecting the directories is kept separate from touching the filesystem:
:func:`candidate_locale_dirs` and :func:`select_existing` work on plain
listings, :func:`remove_previous_translations` supplies them.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Collection, Iterable
from pathlib import Path, PurePosixPath

logger = logging.getLogger(__name__)

UI_LOCALE_DIR = PurePosixPath("UI", "data", "locale")
PLUGIN_LOCALE_SUBDIRS = (
    PurePosixPath("resources", "locale"),
    PurePosixPath("data", "locale"),
)


def candidate_locale_dirs(plugin_names: Iterable[str]) -> list[PurePosixPath]:
    """
    List every directory that may hold synced translations.

    Args:
        plugin_names: Entries found under ``plugins/``

    Returns:
        Repository-relative directories, UI first, then plugins in input order
    """
    candidates = [UI_LOCALE_DIR]
    for name in plugin_names:
        for subdir in PLUGIN_LOCALE_SUBDIRS:
            candidates.append(PurePosixPath("plugins", name) / subdir)
    return candidates


def select_existing(
    candidates: Iterable[PurePosixPath], existing_dirs: Collection[PurePosixPath]
) -> list[PurePosixPath]:
    """Keep the candidates present in ``existing_dirs``, preserving order."""
    return [candidate for candidate in candidates if candidate in existing_dirs]


def _existing_dirs(root_dir: Path, candidates: Iterable[PurePosixPath]) -> set[PurePosixPath]:
    return {
        candidate
        for candidate in candidates
        if root_dir.joinpath(*candidate.parts).is_dir()
    }


def remove_previous_translations(root_dir: Path, keep: str = "en-US.ini") -> int:
    """
    Empty every locale directory except for the source-language file.

    Languages dropped on Crowdin would otherwise linger in the tree.

    Args:
        root_dir: Repository root
        keep: File name of the source-language file

    Returns:
        Number of entries removed
    """
    plugins_dir = root_dir / "plugins"
    plugin_names = (
        sorted(entry.name for entry in plugins_dir.iterdir() if entry.is_dir())
        if plugins_dir.is_dir()
        else []
    )
    candidates = candidate_locale_dirs(plugin_names)
    locale_dirs = select_existing(candidates, _existing_dirs(root_dir, candidates))

    removed = 0
    for locale_dir in locale_dirs:
        for entry in root_dir.joinpath(*locale_dir.parts).iterdir():
            if entry.name == keep:
                continue
            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink()
            removed += 1

    logger.info(f"Removed {removed} previous translation files from {len(locale_dirs)} directories")
    return removed
