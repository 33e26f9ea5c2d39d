"""Public domain model surface."""

from __future__ import annotations

from bankmerge.domain.model.enums import FEED_SOURCES, FieldName, Source
from bankmerge.domain.model.fields import FIELDS, FieldAccessor, accessor
from bankmerge.domain.model.participant import RESERVED_CLEARING_CODE, Participant
from bankmerge.domain.model.provenance import Change, ChangeSet

__all__ = [
    "FEED_SOURCES",
    "FIELDS",
    "RESERVED_CLEARING_CODE",
    "Change",
    "ChangeSet",
    "FieldAccessor",
    "FieldName",
    "Participant",
    "Source",
    "accessor",
]
