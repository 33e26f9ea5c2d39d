"""Candidate-to-participant resolution.

Strategies run in the order the source policy lists them:
- exactly one participant -> ``Matched`` and resolution stops
- several participants -> logged, remembered, next strategy runs
- none (or strategy skipped) -> next strategy runs

When nothing matched, the outcome is ``Inconclusive`` if some strategy was
ambiguous and ``NotFound`` otherwise. Resolution never mutates the registry.
"""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from bankmerge.domain.model import RESERVED_CLEARING_CODE
from bankmerge.domain.normalization import (
    ROOTLESS_INSTITUTION,
    ispb_root,
    name_contains,
    names_equal,
)

from .contracts import Inconclusive, Matched, MatchStrategy, NotFound

if TYPE_CHECKING:
    from collections.abc import Mapping

    from bankmerge.domain.model import Participant
    from bankmerge.domain.registry import ParticipantRegistry

    from .contracts import MatchOutcome
    from .policy import SourcePolicy

log = getLogger(__name__)

# ``None`` means the strategy does not apply to this candidate.
type StrategyLookup = Callable[[Participant, ParticipantRegistry], tuple[Participant, ...] | None]

ISPB_NULL_REASON: Final[str] = "ispb_null"
NO_MATCH_REASON: Final[str] = "no_match"


def _by_document(candidate: Participant, registry: ParticipantRegistry) -> tuple[Participant, ...]:
    return registry.find_by_document(candidate.document)


def _by_name(candidate: Participant, registry: ParticipantRegistry) -> tuple[Participant, ...]:
    return registry.find_by_name(candidate.long_name)


def _by_ispb_root_name(
    candidate: Participant, registry: ParticipantRegistry
) -> tuple[Participant, ...] | None:
    root = ispb_root(candidate.document)
    if root == 0 and not names_equal(candidate.long_name, ROOTLESS_INSTITUTION):
        log.info("ISPB null: %s | %s", candidate.long_name, candidate.document)
        return None
    return registry.find_by_ispb_and_name_fragment(root, candidate.long_name)


def _by_clearing_code(
    candidate: Participant, registry: ParticipantRegistry
) -> tuple[Participant, ...] | None:
    if candidate.clearing_code == 0:
        return None
    found = registry.find_by_clearing_code(candidate.clearing_code)
    if candidate.clearing_code == RESERVED_CLEARING_CODE and len(found) > 1:
        found = tuple(participant for participant in found if participant.ispb == candidate.ispb)
    return found


def _by_ispb(
    candidate: Participant, registry: ParticipantRegistry
) -> tuple[Participant, ...] | None:
    if candidate.ispb != 0:
        return registry.find_by_ispb(candidate.ispb)
    if not name_contains(candidate.long_name, ROOTLESS_INSTITUTION):
        log.info("ISPB null: %s", candidate.long_name)
        return None
    return registry.find_by_ispb_and_name_fragment(0, candidate.long_name)


STRATEGY_LOOKUPS: Final[Mapping[MatchStrategy, StrategyLookup]] = MappingProxyType(
    {
        MatchStrategy.DOCUMENT: _by_document,
        MatchStrategy.NAME: _by_name,
        MatchStrategy.ISPB_ROOT_NAME: _by_ispb_root_name,
        MatchStrategy.CLEARING_CODE: _by_clearing_code,
        MatchStrategy.ISPB: _by_ispb,
    }
)


def resolve(
    candidate: Participant,
    policy: SourcePolicy,
    registry: ParticipantRegistry,
) -> MatchOutcome:
    """Find the canonical participant ``candidate`` describes, per ``policy``."""

    inconclusive: Inconclusive | None = None
    reason = NO_MATCH_REASON
    for strategy in policy.strategies:
        found = STRATEGY_LOOKUPS[strategy](candidate, registry)
        if found is None:
            if strategy in {MatchStrategy.ISPB_ROOT_NAME, MatchStrategy.ISPB}:
                reason = ISPB_NULL_REASON
            continue
        if len(found) == 1:
            return Matched(target=found[0], strategy=strategy)
        if len(found) > 1:
            log.warning(
                "%s | Inconclusive %s match for %s: %d participants",
                policy.source,
                strategy,
                candidate.long_name,
                len(found),
            )
            if inconclusive is None:
                inconclusive = Inconclusive(candidates=found, strategy=strategy)

    if inconclusive is not None:
        return inconclusive
    return NotFound(reason=reason)
