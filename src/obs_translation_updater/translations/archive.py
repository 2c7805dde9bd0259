"""
Translation build extraction and staging.

A Crowdin build archive is unpacked into a staging directory, normalized
file by file, reshaped to match the repository layout and finally copied
over the project tree.
"""

from __future__ import annotations

import io
import logging
import shutil
import zipfile
from collections.abc import Sequence
from pathlib import Path, PurePosixPath

from ..utils.core.exceptions import ArchiveError
from .normalize import normalize_translation

logger = logging.getLogger(__name__)

# Top-level export groups merged into the repository.
MERGED_GROUPS = ("UI", "plugins")
# Export unrelated to the application.
IGNORED_GROUPS = ("Website",)


def _staging_target(staging_dir: Path, entry_name: str) -> Path:
    """Resolve an archive entry name inside the staging directory."""
    relative = PurePosixPath(entry_name)
    if relative.is_absolute() or ".." in relative.parts:
        raise ArchiveError(f"Refusing to extract unsafe archive entry: {entry_name}")
    return staging_dir.joinpath(*relative.parts)


def extract_archive(data: bytes, staging_dir: Path) -> list[Path]:
    """
    Unpack a translation archive into the staging directory.

    Directory entries are created as-is. File entries are normalized and
    only written when something is left.

    Args:
        data: Raw zip archive bytes
        staging_dir: Destination directory (created if missing)

    Returns:
        Paths of the files written, in archive order

    Raises:
        ArchiveError: If the data is not a readable zip archive
    """
    staging_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            for entry in archive.infolist():
                target = _staging_target(staging_dir, entry.filename)
                if entry.is_dir():
                    target.mkdir(parents=True, exist_ok=True)
                    continue

                raw = archive.read(entry).decode("utf-8", errors="replace")
                content = normalize_translation(raw)
                if content is None:
                    logger.debug(f"Discarding empty file {entry.filename}")
                    continue

                target.parent.mkdir(parents=True, exist_ok=True)
                _ = target.write_text(content, encoding="utf-8", newline="\n")
                written.append(target)
    except zipfile.BadZipFile as e:
        raise ArchiveError(f"Translation build is not a valid zip archive: {e}") from e

    logger.info(f"Extracted {len(written)} translation files")
    return written


def restructure_staging(staging_dir: Path, submodules: Sequence[str]) -> None:
    """
    Reshape the staged export to the repository layout.

    Drops the website export, if present, and moves each submodule export
    under ``plugins/<name>``.

    Raises:
        ArchiveError: If the export of a configured submodule is missing
    """
    for group in IGNORED_GROUPS:
        shutil.rmtree(staging_dir / group, ignore_errors=True)

    plugins_dir = staging_dir / "plugins"
    for submodule in submodules:
        source = staging_dir / submodule
        if not source.is_dir():
            raise ArchiveError(
                f"Translation build contains no export for submodule {submodule}",
                context=str(source),
            )
        destination = plugins_dir / submodule
        if destination.exists():
            _ = shutil.copytree(source, destination, dirs_exist_ok=True)
            shutil.rmtree(source)
        else:
            plugins_dir.mkdir(parents=True, exist_ok=True)
            _ = shutil.move(str(source), str(destination))


def merge_into_project(staging_dir: Path, root_dir: Path) -> None:
    """
    Copy the staged groups over the project tree, keeping unrelated files.

    Raises:
        ArchiveError: If a merged group is missing from the staging directory
    """
    for group in MERGED_GROUPS:
        source = staging_dir / group
        if not source.is_dir():
            raise ArchiveError(
                f"Translation build contains no {group} export", context=str(source)
            )
    for group in MERGED_GROUPS:
        source = staging_dir / group
        _ = shutil.copytree(source, root_dir / group, dirs_exist_ok=True)
        logger.debug(f"Copied {group} translations into {root_dir / group}")
