"""Application orchestration entry points."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from bankmerge.adapters.base_registry import JsonRegistryStore
from bankmerge.adapters.feeds import FeedAcquirer, build_feeds
from bankmerge.adapters.output import FileRegistryWriter
from bankmerge.config import get_feed_config, get_storage_config
from bankmerge.domain.reconciliation import (
    ReconciliationEngine,
    RunStatus,
    classify_changes,
    utc_now,
)
from bankmerge.domain.registry import ParticipantRegistry

if TYPE_CHECKING:
    from collections.abc import Sequence

    from bankmerge.domain.model import Source
    from bankmerge.domain.ports import CandidateAcquirer, CanonicalStore, RegistryWriter
    from bankmerge.domain.reconciliation import Clock, RegistryDiff, RunSummary

log = getLogger(__name__)


@dataclass(slots=True, kw_only=True)
class MergeRunResult:
    status: RunStatus
    summary: RunSummary
    diff: RegistryDiff


def _default_writer() -> FileRegistryWriter:
    storage = get_storage_config()
    return FileRegistryWriter(
        output_dir=storage.ensure_output_dir(),
        changelog_path=storage.changelog_path,
    )


def run_merge(
    *,
    store: CanonicalStore | None = None,
    acquirer: CandidateAcquirer | None = None,
    writer: RegistryWriter | None = None,
    clock: Clock = utc_now,
    skip: Sequence[Source] = (),
) -> MergeRunResult:
    """Reconcile every feed into the canonical registry and emit the result.

    Raises ``CanonicalStoreUnavailableError`` before any feed is fetched when the
    registry cannot be loaded. Nothing is written when the run changed nothing.
    """

    effective_store = store or JsonRegistryStore()
    registry = ParticipantRegistry(effective_store.load())
    pristine = registry.snapshot()

    effective_acquirer = acquirer or FeedAcquirer(build_feeds(get_feed_config(), skip=skip))
    candidates_by_source = effective_acquirer()
    log.info(
        "Acquired candidates: %s",
        " | ".join(f"{source}: {len(items)}" for source, items in candidates_by_source.items()),
    )

    summary = ReconciliationEngine(clock=clock).run(registry, candidates_by_source)
    diff = classify_changes(registry, pristine, at=clock())

    by_type = Counter(participant.institution_type or "-" for participant in diff.participants)
    log.info("Type: All | Total: %d", len(diff.participants))
    for institution_type, total in sorted(by_type.items()):
        log.info("Type: %s | Total: %d", institution_type, total)

    if diff.status is RunStatus.NO_CHANGES:
        log.info("No new data or updated information")
        return MergeRunResult(status=diff.status, summary=summary, diff=diff)

    (writer or _default_writer()).emit(diff.participants, diff.report)
    log.info("Merge done. Banks: %d", len(diff.participants))
    return MergeRunResult(status=diff.status, summary=summary, diff=diff)
