"""Output adapters for the reconciled registry."""

from __future__ import annotations

from .changelog import changelog_entry, prepend_entry
from .files import FileRegistryWriter
from .formats import COLUMNS, render_csv, render_markdown, render_xml
from .sql import BANKS, render_sql

__all__ = [
    "BANKS",
    "COLUMNS",
    "FileRegistryWriter",
    "changelog_entry",
    "prepend_entry",
    "render_csv",
    "render_markdown",
    "render_sql",
    "render_xml",
]
