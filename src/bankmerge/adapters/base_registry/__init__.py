"""Canonical registry adapter."""

from __future__ import annotations

from .schema import ParticipantRecord, dump_registry, parse_registry
from .store import JsonRegistryStore

__all__ = ["JsonRegistryStore", "ParticipantRecord", "dump_registry", "parse_registry"]
