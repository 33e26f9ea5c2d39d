"""Write the reconciled registry and its change report to the output directory."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from bankmerge.adapters.base_registry.schema import dump_registry

from .changelog import changelog_entry, prepend_entry
from .formats import render_csv, render_markdown, render_xml
from .sql import render_sql

if TYPE_CHECKING:
    from collections.abc import Sequence

    from bankmerge.domain.model import Participant

log = getLogger(__name__)

RELEASE_NOTES_FILENAME = "release-notes.md"
CHANGELOG_FILENAME = "CHANGELOG.md"


def _today() -> date:
    return date.today()  # noqa: DTZ011


@dataclass(slots=True)
class FileRegistryWriter:
    """Emit ``bancos.{json,csv,md,sql,xml}``, release notes and the changelog."""

    output_dir: Path
    changelog_path: Path | None = None
    today: Callable[[], date] = field(default=_today)

    def emit(self, participants: Sequence[Participant], report: str) -> None:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        ordered = sorted(participants, key=lambda participant: participant.clearing_code)

        self._write_bytes("bancos.json", dump_registry(ordered))
        self._write_text("bancos.csv", render_csv(ordered))
        self._write_text("bancos.md", render_markdown(ordered))
        self._write_text("bancos.sql", render_sql(ordered))
        self._write_bytes("bancos.xml", render_xml(ordered))
        self._write_text(RELEASE_NOTES_FILENAME, report)
        self._write_text(CHANGELOG_FILENAME, self._updated_changelog(report))
        log.info("Wrote %d participant(s) to %s", len(ordered), self.output_dir)

    def _updated_changelog(self, report: str) -> str:
        existing = ""
        if self.changelog_path is not None and self.changelog_path.exists():
            existing = self.changelog_path.read_text(encoding="utf-8")
        return prepend_entry(existing, changelog_entry(report, self.today()))

    def _write_text(self, name: str, content: str) -> None:
        (self.output_dir / name).write_text(content, encoding="utf-8")

    def _write_bytes(self, name: str, content: bytes) -> None:
        (self.output_dir / name).write_bytes(content)
