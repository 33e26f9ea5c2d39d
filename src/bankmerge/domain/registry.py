"""In-memory canonical participant registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bankmerge.domain.normalization import fold, name_contains, normalize_document

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from bankmerge.domain.model import Participant


class ParticipantRegistry:
    """Mutable collection of participants for one merge run.

    Participants are only ever added or mutated in place; nothing is removed
    while passes run. Lookups scan linearly and return every hit so callers
    can tell an exact match from an ambiguous one.
    """

    def __init__(self, participants: Iterable[Participant] = ()) -> None:
        self._participants: list[Participant] = list(participants)

    def __iter__(self) -> Iterator[Participant]:
        return iter(self._participants)

    def __len__(self) -> int:
        return len(self._participants)

    @property
    def participants(self) -> list[Participant]:
        return list(self._participants)

    def add(self, participant: Participant) -> None:
        self._participants.append(participant)

    def snapshot(self) -> list[Participant]:
        """Deep copies of every participant, detached from later mutation."""

        return [participant.copy() for participant in self._participants]

    def begin_run(self) -> None:
        for participant in self._participants:
            participant.changes.clear()

    def find_by_document(self, document: str) -> tuple[Participant, ...]:
        normalized = normalize_document(document)
        if not normalized:
            return ()
        return tuple(p for p in self._participants if p.document == normalized)

    def find_by_name(self, name: str) -> tuple[Participant, ...]:
        folded = fold(name)
        if not folded:
            return ()
        return tuple(
            p
            for p in self._participants
            if fold(p.long_name) == folded or fold(p.short_name) == folded
        )

    def find_by_ispb(self, ispb: int) -> tuple[Participant, ...]:
        return tuple(p for p in self._participants if p.ispb == ispb)

    def find_by_ispb_and_name_fragment(self, ispb: int, name: str) -> tuple[Participant, ...]:
        return tuple(
            p for p in self._participants if p.ispb == ispb and name_contains(p.long_name, name)
        )

    def find_by_clearing_code(self, clearing_code: int) -> tuple[Participant, ...]:
        return tuple(p for p in self._participants if p.clearing_code == clearing_code)

    def contains_ispb(self, ispb: int) -> bool:
        return ispb != 0 and any(p.ispb == ispb for p in self._participants)
