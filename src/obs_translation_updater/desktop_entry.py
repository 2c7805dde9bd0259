"""
Desktop entry localization.

Crowdin exports the translatable keys of the XDG desktop entry as one
``<language>.ini`` file per language containing ``Key="value"`` lines. They
are folded back into the desktop entry as ``Key[language]=value`` lines,
replacing whatever localized keys the file held before.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from .utils.core.exceptions import ArchiveError

logger = logging.getLogger(__name__)

LOCALIZED_KEY_PREFIXES = ("GenericName[", "Comment[")


def localized_line(line: str, language_code: str) -> str | None:
    """
    Turn a ``Key="value"`` line into ``Key[language_code]=value``.

    Returns None for lines without a key.
    """
    separator = line.find("=")
    if separator <= 0:
        return None
    key = line[:separator].strip()
    first_quote = line.find('"')
    last_quote = line.rfind('"')
    if first_quote != -1 and last_quote > first_quote:
        value = line[first_quote + 1 : last_quote]
    else:
        value = line[separator + 1 :].strip()
    return f"{key}[{language_code}]={value}"


def patch_desktop_entry(
    base_text: str, language_files: Iterable[tuple[str, str]]
) -> str:
    """
    Rebuild a desktop entry with fresh localized keys.

    Args:
        base_text: Current desktop entry content
        language_files: ``(language_code, content)`` pairs in the order the
            localized lines should appear

    Returns:
        The complete new file content
    """
    result: list[str] = []
    for line in base_text.strip().splitlines():
        if not line:
            continue
        if line.startswith(LOCALIZED_KEY_PREFIXES):
            continue
        result.append(line + "\n")
    result.append("\n")

    for language_code, content in language_files:
        content = content.strip()
        if not content:
            continue
        for line in content.splitlines():
            localized = localized_line(line, language_code)
            if localized is None:
                continue
            result.append(localized + "\n")

    return "".join(result)


def read_language_files(directory: Path) -> Iterator[tuple[str, str]]:
    """
    Yield ``(language_code, content)`` for each file in directory listing order.

    Raises:
        ArchiveError: If the translation build held no desktop entry export
    """
    if not directory.is_dir():
        raise ArchiveError(
            f"Translation build contains no {directory.name} export", context=str(directory)
        )
    for name in os.listdir(directory):
        path = directory / name
        if not path.is_file():
            continue
        yield path.stem, path.read_text(encoding="utf-8")


def update_desktop_file(desktop_path: Path, language_dir: Path) -> None:
    """Rewrite ``desktop_path`` with the translations staged in ``language_dir``."""
    base_text = desktop_path.read_text(encoding="utf-8")
    content = patch_desktop_entry(base_text, read_language_files(language_dir))
    _ = desktop_path.write_text(content, encoding="utf-8", newline="\n")
    logger.info(f"Updated {desktop_path.name}")
