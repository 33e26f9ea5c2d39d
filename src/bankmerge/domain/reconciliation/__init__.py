"""Multi-source participant reconciliation."""

from __future__ import annotations

from .apply import backfill_documents, insert_candidate, merge_into, merge_source, record_change
from .contracts import (
    Inconclusive,
    Matched,
    MatchOutcome,
    MatchStatus,
    MatchStrategy,
    MergeOutcome,
    MergeReport,
    NotFound,
    RunSummary,
)
from .diff import RegistryDiff, RunStatus, classify_changes, render_change_report
from .engine import Clock, ReconciliationEngine, utc_now
from .policy import (
    DEFAULT_STRATEGIES,
    MERGE_ORDER,
    POLICIES,
    FieldRule,
    RuleKind,
    SourcePolicy,
    UnmatchedAction,
)
from .resolve import resolve

__all__ = [
    "DEFAULT_STRATEGIES",
    "MERGE_ORDER",
    "POLICIES",
    "Clock",
    "FieldRule",
    "Inconclusive",
    "MatchOutcome",
    "MatchStatus",
    "MatchStrategy",
    "Matched",
    "MergeOutcome",
    "MergeReport",
    "NotFound",
    "ReconciliationEngine",
    "RegistryDiff",
    "RuleKind",
    "RunStatus",
    "RunSummary",
    "SourcePolicy",
    "UnmatchedAction",
    "backfill_documents",
    "classify_changes",
    "insert_candidate",
    "merge_into",
    "merge_source",
    "record_change",
    "render_change_report",
    "resolve",
    "utc_now",
]
