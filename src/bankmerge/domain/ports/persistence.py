"""Ports for loading the canonical registry."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from bankmerge.domain.model import Participant


class CanonicalStoreUnavailableError(RuntimeError):
    """Raised when the canonical registry cannot be loaded; the run must abort."""


@runtime_checkable
class CanonicalStore(Protocol):
    """Source of the participant registry as it stood before this run."""

    def load(self) -> list[Participant]: ...


__all__ = ["CanonicalStore", "CanonicalStoreUnavailableError"]
