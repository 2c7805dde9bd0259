"""Whitespace normalization for translation files exported by Crowdin."""

from __future__ import annotations

import re

_LINE_ENDINGS = re.compile(r"\r\n?")
_BLANK_LINES = re.compile(r"\n(?:[ \t]*\n)+")


def normalize_translation(text: str) -> str | None:
    """
    Normalize the text of an exported translation file.

    Line endings become ``\\n``, every blank line is dropped and the result
    ends with exactly one newline.

    Args:
        text: Raw file content

    Returns:
        The normalized content, or None if nothing but whitespace remains
    """
    content = _LINE_ENDINGS.sub("\n", text.strip())
    content = _BLANK_LINES.sub("\n", content)
    if not content:
        return None
    return content + "\n"
