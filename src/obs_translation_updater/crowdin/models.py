"""Typed records for the parts of the Crowdin API the updater consumes."""

from __future__ import annotations

from collections.abc import Mapping
from typing import NamedTuple, cast

from ..utils.core.exceptions import CrowdinAPIError

REMOVED_USER = "REMOVED_USER"


class ReportEntry(NamedTuple):
    """One member row of a top-members report."""

    user_id: int
    full_name: str
    translated: int
    approved: int


class TopMembersReport(NamedTuple):
    """Top-members report for one target language."""

    language_id: str
    language_name: str
    entries: list[ReportEntry]


def _as_int(value: object) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value)
    return 0


def parse_top_members_report(payload: object) -> TopMembersReport:
    """
    Parse the JSON document of a downloaded top-members report.

    Raises:
        CrowdinAPIError: If the document lacks the language or member data
    """
    if not isinstance(payload, Mapping):
        raise CrowdinAPIError("Invalid report format: expected a JSON object")
    document = cast(Mapping[str, object], payload)

    language = document.get("language")
    if not isinstance(language, Mapping):
        raise CrowdinAPIError("Invalid report format: missing language")
    language_map = cast(Mapping[str, object], language)

    rows = document.get("data") or []
    if not isinstance(rows, list):
        raise CrowdinAPIError("Invalid report format: member data is not a list")

    entries: list[ReportEntry] = []
    for row in cast(list[object], rows):
        if not isinstance(row, Mapping):
            continue
        row_map = cast(Mapping[str, object], row)
        user = row_map.get("user")
        user_map = cast(Mapping[str, object], user) if isinstance(user, Mapping) else {}
        entries.append(
            ReportEntry(
                user_id=_as_int(user_map.get("id")),
                full_name=str(user_map.get("fullName") or user_map.get("username") or ""),
                translated=_as_int(row_map.get("translated")),
                approved=_as_int(row_map.get("approved")),
            )
        )

    return TopMembersReport(
        language_id=str(language_map.get("id", "")),
        language_name=str(language_map.get("name", "")),
        entries=entries,
    )
