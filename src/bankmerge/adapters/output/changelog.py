"""Changelog maintenance for published registry releases."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from datetime import date

CHANGELOG_HEADER: Final[str] = "## Changelog\n\n"
MERGE_TOOL_LINK: Final[str] = (
    "[MergeTool](https://github.com/guibranco/BancosBrasileiros-MergeTool)"
)


def changelog_entry(report: str, day: date) -> str:
    return f"### {day.isoformat()} - {MERGE_TOOL_LINK}\n\n{report}"


def prepend_entry(changelog: str, entry: str) -> str:
    """Insert ``entry`` right below the changelog header, creating the header if needed."""

    changelog = changelog.replace("## Changelog\r\n\r\n", CHANGELOG_HEADER)
    if CHANGELOG_HEADER not in changelog:
        return f"{CHANGELOG_HEADER}{entry}\n{changelog}"
    return changelog.replace(CHANGELOG_HEADER, f"{CHANGELOG_HEADER}{entry}\n", 1)
