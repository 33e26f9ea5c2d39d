"""Shared reconciliation contract components.

This module holds only the value types passed between the resolver, the
merge applier, the engine and the diff classifier.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from bankmerge.domain.model import Participant, Source


class MatchStrategy(StrEnum):
    """Lookup used by the resolver to find a candidate's canonical counterpart."""

    DOCUMENT = "document"
    NAME = "name"
    ISPB_ROOT_NAME = "ispb_root_name"
    CLEARING_CODE = "clearing_code"
    ISPB = "ispb"


class MatchStatus(StrEnum):
    MATCHED = "matched"
    NOT_FOUND = "not_found"
    INCONCLUSIVE = "inconclusive"


@dataclass(slots=True, kw_only=True)
class Matched:
    """Exactly one canonical participant corresponds to the candidate."""

    target: Participant
    strategy: MatchStrategy
    status: Literal[MatchStatus.MATCHED] = MatchStatus.MATCHED


@dataclass(slots=True, kw_only=True)
class NotFound:
    """No strategy produced any canonical participant."""

    reason: str | None = None
    status: Literal[MatchStatus.NOT_FOUND] = MatchStatus.NOT_FOUND


@dataclass(slots=True, kw_only=True)
class Inconclusive:
    """At least one strategy produced several participants and none produced exactly one."""

    candidates: tuple[Participant, ...]
    strategy: MatchStrategy
    status: Literal[MatchStatus.INCONCLUSIVE] = MatchStatus.INCONCLUSIVE

    def __post_init__(self) -> None:
        if len(self.candidates) < 2:
            raise ValueError("Inconclusive match must include at least two candidates")


type MatchOutcome = Matched | NotFound | Inconclusive


class MergeOutcome(StrEnum):
    """What a merge did to a matched participant."""

    UPDATED = "updated"
    UP_TO_DATE = "up_to_date"
    SKIPPED = "skipped"


@dataclass(slots=True, kw_only=True)
class MergeReport:
    """Counters for one merge pass."""

    source: Source
    candidates: int = 0
    updated: int = 0
    up_to_date: int = 0
    unmatched: int = 0
    added: int = 0
    skipped: int = 0
    inconclusive: int = 0

    def describe(self) -> str:
        return (
            f"{self.source} | candidates: {self.candidates} | updated: {self.updated} "
            f"| up to date: {self.up_to_date} | unmatched: {self.unmatched} "
            f"| added: {self.added} | skipped: {self.skipped} "
            f"| inconclusive: {self.inconclusive}"
        )


@dataclass(slots=True, kw_only=True)
class RunSummary:
    """Per-pass reports of one engine run, in execution order."""

    reports: list[MergeReport] = field(default_factory=list[MergeReport])

    def report_for(self, source: Source) -> MergeReport | None:
        return next((report for report in self.reports if report.source == source), None)

    @property
    def updated(self) -> int:
        return sum(report.updated for report in self.reports)

    @property
    def added(self) -> int:
        return sum(report.added for report in self.reports)

    @property
    def unmatched(self) -> int:
        return sum(report.unmatched for report in self.reports)
