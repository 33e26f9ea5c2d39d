"""Ports for emitting the reconciled registry."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from bankmerge.domain.model import Participant


@runtime_checkable
class RegistryWriter(Protocol):
    """Persist the final participants (ordered by clearing code) and the change report."""

    def emit(self, participants: Sequence[Participant], report: str) -> None: ...


__all__ = ["RegistryWriter"]
