"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import CandidateAcquirer
from .output import RegistryWriter
from .persistence import CanonicalStore, CanonicalStoreUnavailableError

__all__ = [
    "CandidateAcquirer",
    "CanonicalStore",
    "CanonicalStoreUnavailableError",
    "RegistryWriter",
]
