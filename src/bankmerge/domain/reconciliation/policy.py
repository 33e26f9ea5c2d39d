"""Per-source merge policies.

Each feed owns a fixed subset of participant fields and resolves its
candidates with a fixed list of strategies. The table below is the single
place where that ownership is declared.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from bankmerge.domain.model import FieldName, Source

from .contracts import MatchStrategy

if TYPE_CHECKING:
    from collections.abc import Mapping


class UnmatchedAction(StrEnum):
    """What happens to a candidate no strategy matched."""

    INSERT = "insert"
    DISCARD = "discard"


class RuleKind(StrEnum):
    # overwrite whenever the values differ
    REPLACE = "replace"
    # only write into an empty participant value
    FILL = "fill"
    # presence in the feed means true; never written back to false
    CAPABILITY = "capability"


@dataclass(frozen=True, slots=True, kw_only=True)
class FieldRule:
    """Fields written together, compared as a unit."""

    fields: tuple[FieldName, ...]
    kind: RuleKind = RuleKind.REPLACE
    # read the candidate value from a different field (single-field rules only)
    value_from: FieldName | None = None

    def __post_init__(self) -> None:
        if not self.fields:
            raise ValueError("FieldRule requires at least one field")
        if self.value_from is not None and len(self.fields) != 1:
            raise ValueError("value_from is only supported for single-field rules")


@dataclass(frozen=True, slots=True, kw_only=True)
class SourcePolicy:
    source: Source
    strategies: tuple[MatchStrategy, ...]
    rules: tuple[FieldRule, ...] = ()
    unmatched: UnmatchedAction = UnmatchedAction.DISCARD
    # candidates without a clearing code carry nothing this source can merge
    skip_unassigned_clearing_code: bool = False
    # a clearing-code hit only counts when the long names agree as well
    require_same_long_name: bool = False


DEFAULT_STRATEGIES: Final[tuple[MatchStrategy, ...]] = (
    MatchStrategy.DOCUMENT,
    MatchStrategy.NAME,
    MatchStrategy.ISPB_ROOT_NAME,
)

_FILL_DOCUMENT: Final[FieldRule] = FieldRule(fields=(FieldName.DOCUMENT,), kind=RuleKind.FILL)

POLICIES: Final[Mapping[Source, SourcePolicy]] = MappingProxyType(
    {
        Source.STR: SourcePolicy(
            source=Source.STR,
            strategies=(MatchStrategy.CLEARING_CODE,),
            rules=(
                FieldRule(fields=(FieldName.LONG_NAME,)),
                FieldRule(fields=(FieldName.SHORT_NAME,)),
            ),
            unmatched=UnmatchedAction.INSERT,
            skip_unassigned_clearing_code=True,
        ),
        Source.SITRAF: SourcePolicy(
            source=Source.SITRAF,
            strategies=(MatchStrategy.CLEARING_CODE,),
            unmatched=UnmatchedAction.INSERT,
            skip_unassigned_clearing_code=True,
            require_same_long_name=True,
        ),
        Source.SLC: SourcePolicy(
            source=Source.SLC,
            strategies=DEFAULT_STRATEGIES,
            rules=(
                _FILL_DOCUMENT,
                FieldRule(
                    fields=(FieldName.SHORT_NAME,),
                    kind=RuleKind.FILL,
                    value_from=FieldName.LONG_NAME,
                ),
            ),
        ),
        Source.SPI: SourcePolicy(
            source=Source.SPI,
            strategies=(MatchStrategy.NAME, MatchStrategy.ISPB),
            rules=(FieldRule(fields=(FieldName.PIX_TYPE, FieldName.DATE_PIX_STARTED)),),
            unmatched=UnmatchedAction.INSERT,
        ),
        Source.CTC: SourcePolicy(
            source=Source.CTC,
            strategies=DEFAULT_STRATEGIES,
            rules=(_FILL_DOCUMENT, FieldRule(fields=(FieldName.PRODUCTS,))),
        ),
        Source.SILOC: SourcePolicy(
            source=Source.SILOC,
            strategies=(MatchStrategy.ISPB, MatchStrategy.NAME),
            rules=(
                _FILL_DOCUMENT,
                FieldRule(fields=(FieldName.CHARGE, FieldName.CREDIT_DOCUMENT)),
            ),
        ),
        Source.PCPS: SourcePolicy(
            source=Source.PCPS,
            strategies=DEFAULT_STRATEGIES,
            rules=(_FILL_DOCUMENT, FieldRule(fields=(FieldName.SALARY_PORTABILITY,))),
        ),
        Source.CQL: SourcePolicy(
            source=Source.CQL,
            strategies=(MatchStrategy.ISPB,),
            rules=(FieldRule(fields=(FieldName.LEGAL_CHEQUE,), kind=RuleKind.CAPABILITY),),
        ),
        Source.DETECTA_FLOW: SourcePolicy(
            source=Source.DETECTA_FLOW,
            strategies=(MatchStrategy.ISPB,),
            rules=(FieldRule(fields=(FieldName.DETECTA_FLOW,), kind=RuleKind.CAPABILITY),),
        ),
        Source.PCR: SourcePolicy(
            source=Source.PCR,
            strategies=DEFAULT_STRATEGIES,
            rules=(FieldRule(fields=(FieldName.PCR, FieldName.PCRP)),),
        ),
    }
)

MERGE_ORDER: Final[tuple[Source, ...]] = (
    Source.STR,
    Source.SITRAF,
    Source.SLC,
    Source.SPI,
    Source.CTC,
    Source.SILOC,
    Source.PCPS,
    Source.CQL,
    Source.DETECTA_FLOW,
    Source.PCR,
)
