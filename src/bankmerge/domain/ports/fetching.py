"""Ports for acquiring candidate participants from external feeds."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from bankmerge.domain.model import Participant, Source


@runtime_checkable
class CandidateAcquirer(Protocol):
    """Callable port returning every feed's candidates, keyed by source.

    A feed that could not be fetched or parsed maps to an empty sequence;
    acquisition itself does not raise for per-feed failures.
    """

    def __call__(self) -> Mapping[Source, Sequence[Participant]]: ...


__all__ = ["CandidateAcquirer"]
