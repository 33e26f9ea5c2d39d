"""Orchestrator for the reconciliation subsystem.

The engine runs the document backfill and then one merge pass per source in
a fixed priority order. Passes are strictly sequential; later sources see
(and may overwrite) what earlier ones wrote.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from .apply import backfill_documents, merge_source
from .contracts import MergeReport, RunSummary
from .policy import MERGE_ORDER, POLICIES

if TYPE_CHECKING:
    from bankmerge.domain.model import Participant, Source
    from bankmerge.domain.registry import ParticipantRegistry

    from .policy import SourcePolicy

log = getLogger(__name__)

type Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(slots=True)
class ReconciliationEngine:
    """Run every merge pass against one registry."""

    policies: Mapping[Source, SourcePolicy] = field(default_factory=lambda: POLICIES)
    order: Sequence[Source] = MERGE_ORDER
    clock: Clock = utc_now

    def run(
        self,
        registry: ParticipantRegistry,
        candidates_by_source: Mapping[Source, Sequence[Participant]],
    ) -> RunSummary:
        """Merge ``candidates_by_source`` into ``registry`` in priority order."""

        registry.begin_run()
        summary = RunSummary()
        summary.reports.append(backfill_documents(registry, at=self.clock()))

        for source in self.order:
            candidates = candidates_by_source.get(source) or ()
            if not candidates:
                log.warning("%s | No candidates acquired, skipping pass", source)
                summary.reports.append(MergeReport(source=source))
                continue
            summary.reports.append(
                merge_source(registry, self.policies[source], candidates, at=self.clock())
            )

        log.info(
            "Reconciliation finished | updated: %d | added: %d | unmatched: %d",
            summary.updated,
            summary.added,
            summary.unmatched,
        )
        return summary
