"""Merge application: field writes with provenance, inserts and pass counters.

Responsibilities of this stage:
- compare the fields a source owns against the matched participant
- write differences through the explicit field table, recording a ``Change``
- insert or discard candidates that did not resolve, per source policy

Resolution is delegated to :mod:`.resolve`; ordering of passes belongs to the engine.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from bankmerge.domain.model import FIELDS, RESERVED_CLEARING_CODE, FieldName, Source
from bankmerge.domain.normalization import derive_short_name, document_from_ispb, names_equal

from .contracts import Inconclusive, Matched, MergeOutcome, MergeReport
from .policy import RuleKind, UnmatchedAction
from .resolve import resolve

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from bankmerge.domain.model import Participant
    from bankmerge.domain.registry import ParticipantRegistry

    from .policy import FieldRule, SourcePolicy

log = getLogger(__name__)


def record_change(
    participant: Participant,
    field_name: FieldName,
    value: object,
    *,
    source: Source,
    at: datetime,
    force: bool = False,
) -> bool:
    """Write ``value`` into ``field_name`` and track it in the change set.

    Returns ``False`` (and records nothing) when the rendered value did not change,
    unless ``force`` is set: members of a jointly owned group are recorded together.
    """

    field = FIELDS[field_name]
    old_value = field.render(field.get(participant))
    field.set(participant, value)
    new_value = field.render(field.get(participant))
    if old_value == new_value and not force:
        return False
    participant.changes.record(
        field_name, source=source, old_value=old_value, new_value=new_value
    )
    participant.date_updated = at
    return True


def merge_into(
    participant: Participant,
    candidate: Participant,
    policy: SourcePolicy,
    *,
    at: datetime,
) -> MergeOutcome:
    """Apply the fields ``policy`` owns from ``candidate`` onto ``participant``."""

    if policy.require_same_long_name and not names_equal(
        participant.long_name, candidate.long_name
    ):
        log.info(
            "%s | Participant %03d long name differs | Registry: %s | Feed: %s",
            policy.source,
            participant.clearing_code,
            participant.long_name,
            candidate.long_name,
        )
        return MergeOutcome.SKIPPED

    written = False
    for rule in policy.rules:
        if _apply_rule(participant, candidate, rule, source=policy.source, at=at):
            written = True

    if not written:
        log.debug("%s | Up to date: %s", policy.source, participant)
        return MergeOutcome.UP_TO_DATE
    log.info("%s | Updated: %s", policy.source, participant)
    return MergeOutcome.UPDATED


def _apply_rule(
    participant: Participant,
    candidate: Participant,
    rule: FieldRule,
    *,
    source: Source,
    at: datetime,
) -> bool:
    if rule.kind is RuleKind.FILL:
        target = FIELDS[rule.fields[0]]
        origin = FIELDS[rule.value_from or rule.fields[0]]
        if not target.is_empty(participant):
            return False
        if origin.is_empty(candidate):
            log.debug("%s | No %s to fill for %s", source, target.name, participant)
            return False
        return record_change(participant, target.name, origin.get(candidate), source=source, at=at)

    if rule.kind is RuleKind.CAPABILITY:
        written = False
        for field_name in rule.fields:
            if FIELDS[field_name].get(participant) is True:
                continue
            if record_change(participant, field_name, True, source=source, at=at):
                written = True
        return written

    fields = [FIELDS[field_name] for field_name in rule.fields]
    # candidate carries none of the group's values
    if all(field.is_empty(candidate) for field in fields):
        return False
    if all(field.same(field.get(participant), field.get(candidate)) for field in fields):
        return False
    # the group is written as one unit once any member differs
    joint = len(fields) > 1
    written = False
    for field in fields:
        if record_change(
            participant, field.name, field.get(candidate), source=source, at=at, force=joint
        ):
            written = True
    return written


def insert_candidate(
    registry: ParticipantRegistry,
    candidate: Participant,
    policy: SourcePolicy,
    *,
    at: datetime,
) -> Participant | None:
    """Add ``candidate`` as a new participant unless it would break identity uniqueness."""

    if registry.contains_ispb(candidate.ispb):
        log.warning(
            "%s | Not adding %s: ISPB %08d already registered",
            policy.source,
            candidate.long_name,
            candidate.ispb,
        )
        return None
    reserved = candidate.clearing_code in {0, RESERVED_CLEARING_CODE}
    if not reserved and registry.find_by_clearing_code(candidate.clearing_code):
        log.warning(
            "%s | Not adding %s: clearing code %03d already registered",
            policy.source,
            candidate.long_name,
            candidate.clearing_code,
        )
        return None

    participant = candidate.copy()
    participant.changes.clear()
    if not participant.document and participant.ispb != 0:
        participant.document = document_from_ispb(participant.ispb)
    if not participant.short_name:
        participant.short_name = derive_short_name(participant.long_name)
    participant.date_registered = at
    participant.date_updated = at
    registry.add(participant)
    log.info("%s | Added: %s | %s", policy.source, participant, participant.long_name)
    return participant


def merge_source(
    registry: ParticipantRegistry,
    policy: SourcePolicy,
    candidates: Sequence[Participant],
    *,
    at: datetime,
) -> MergeReport:
    """Run one merge pass of ``candidates`` from ``policy.source`` into ``registry``."""

    report = MergeReport(source=policy.source, candidates=len(candidates))
    for candidate in candidates:
        if policy.skip_unassigned_clearing_code and candidate.clearing_code == 0:
            log.debug("%s | Ignoring %s: no clearing code", policy.source, candidate.long_name)
            report.skipped += 1
            continue

        outcome = resolve(candidate, policy, registry)
        if isinstance(outcome, Matched):
            merged = merge_into(outcome.target, candidate, policy, at=at)
            if merged is MergeOutcome.UPDATED:
                report.updated += 1
            elif merged is MergeOutcome.UP_TO_DATE:
                report.up_to_date += 1
            else:
                report.skipped += 1
            continue

        if isinstance(outcome, Inconclusive):
            report.inconclusive += 1

        if policy.unmatched is UnmatchedAction.INSERT:
            if insert_candidate(registry, candidate, policy, at=at) is not None:
                report.added += 1
            else:
                report.skipped += 1
            continue

        log.info(
            "%s | Not found: %s | %s",
            policy.source,
            candidate.long_name,
            candidate.document or f"{candidate.ispb:08d}",
        )
        report.unmatched += 1

    log.info(report.describe())
    return report


def backfill_documents(registry: ParticipantRegistry, *, at: datetime) -> MergeReport:
    """Derive the head-office document from the ISPB wherever a participant has none."""

    report = MergeReport(source=Source.DOCUMENT, candidates=len(registry))
    for participant in registry:
        if participant.document:
            report.up_to_date += 1
            continue
        if not participant.has_identity:
            report.skipped += 1
            continue
        record_change(
            participant,
            FieldName.DOCUMENT,
            document_from_ispb(participant.ispb),
            source=Source.DOCUMENT,
            at=at,
        )
        report.updated += 1

    log.info(report.describe())
    return report
