"""End-of-run change classification.

Compares the reconciled registry against the pristine snapshot taken before
the first pass, splits the differences into added and updated participants,
and renders the change report used for release notes and the changelog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from bankmerge.domain.normalization import format_document

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import datetime

    from bankmerge.domain.model import Participant
    from bankmerge.domain.registry import ParticipantRegistry

log = getLogger(__name__)


class RunStatus(StrEnum):
    CHANGED = "changed"
    NO_CHANGES = "no_changes"


@dataclass(slots=True, kw_only=True)
class RegistryDiff:
    status: RunStatus
    # every surviving participant, ordered by clearing code
    participants: list[Participant] = field(default_factory=list["Participant"])
    added: list[Participant] = field(default_factory=list["Participant"])
    updated: list[Participant] = field(default_factory=list["Participant"])
    report: str = ""


def classify_changes(
    registry: ParticipantRegistry,
    pristine: Sequence[Participant],
    *,
    at: datetime,
) -> RegistryDiff:
    """Classify what the run changed relative to ``pristine``."""

    for participant in registry:
        if participant.date_registered is None:
            participant.date_registered = at
        if participant.date_updated is None:
            participant.date_updated = at

    survivors = [participant for participant in registry if participant.has_identity]
    dropped = len(registry) - len(survivors)
    if dropped:
        log.info("Filtered %d participant(s) without ISPB or reserved clearing code", dropped)

    pristine_states = {participant.comparison_key() for participant in pristine}
    pristine_ispbs = {participant.ispb for participant in pristine}
    differing = [p for p in survivors if p.comparison_key() not in pristine_states]

    added = [p for p in differing if p.ispb not in pristine_ispbs]
    updated = [p for p in differing if p.ispb in pristine_ispbs]
    ordered = sorted(survivors, key=lambda participant: participant.clearing_code)

    if not differing:
        log.info("No changes relative to the snapshot")
        return RegistryDiff(status=RunStatus.NO_CHANGES, participants=ordered)

    log.info("Added: %d | Updated: %d", len(added), len(updated))
    return RegistryDiff(
        status=RunStatus.CHANGED,
        participants=ordered,
        added=added,
        updated=updated,
        report=render_change_report(added, updated),
    )


def _render_section(
    verb: str, participants: Sequence[Participant], *, with_changes: bool
) -> Iterable[str]:
    plural = "" if len(participants) == 1 else "s"
    yield f"- {verb} {len(participants)} bank{plural}"
    for participant in participants:
        document = format_document(participant.document)
        yield f"  - {participant.clearing_code} - {participant.short_name} - {document}"
        if not with_changes:
            continue
        for field_name, change in participant.changes.items():
            yield (
                f"    - **{field_name}** ({change.source}): "
                f"{change.old_value} **->** {change.new_value}"
            )


def render_change_report(added: Sequence[Participant], updated: Sequence[Participant]) -> str:
    """Render the markdown change list used for release notes and the changelog."""

    lines: list[str] = []
    if added:
        lines.extend(_render_section("Added", added, with_changes=False))
    if updated:
        lines.extend(_render_section("Updated", updated, with_changes=True))
    return "".join(f"{line}\n" for line in lines)
