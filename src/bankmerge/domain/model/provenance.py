from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from bankmerge.domain.model.enums import FieldName, Source


@dataclass(frozen=True, slots=True, kw_only=True)
class Change:
    """One field rewrite: who wrote it, and the rendered values around it."""

    source: Source
    old_value: str
    new_value: str


@dataclass(slots=True)
class ChangeSet:
    """Per-run record of field rewrites; at most one entry per field.

    A later write replaces source and new value but keeps the ``old_value``
    that was present before the first write of the run.
    """

    _entries: dict[FieldName, Change] = field(default_factory=dict["FieldName", Change])

    def record(
        self, field_name: FieldName, *, source: Source, old_value: str, new_value: str
    ) -> None:
        previous = self._entries.get(field_name)
        if previous is not None:
            old_value = previous.old_value
        self._entries[field_name] = Change(source=source, old_value=old_value, new_value=new_value)

    def get(self, field_name: FieldName) -> Change | None:
        return self._entries.get(field_name)

    def items(self) -> Iterator[tuple[FieldName, Change]]:
        return iter(self._entries.items())

    def clear(self) -> None:
        self._entries.clear()

    def copy(self) -> ChangeSet:
        return ChangeSet(dict(self._entries))

    def __contains__(self, field_name: object) -> bool:
        return field_name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)
