"""Feed adapters: download and parse the external participant lists."""

from __future__ import annotations

from .parsing import PDF_PARSERS, PdfFeedParser, parse_spi_csv, parse_str_csv
from .sources import (
    Feed,
    FeedAcquirer,
    FeedFetchError,
    PdfFeed,
    SpiFeed,
    StrFeed,
    build_feeds,
    fetch_safely,
)

__all__ = [
    "PDF_PARSERS",
    "Feed",
    "FeedAcquirer",
    "FeedFetchError",
    "PdfFeed",
    "PdfFeedParser",
    "SpiFeed",
    "StrFeed",
    "build_feeds",
    "fetch_safely",
    "parse_spi_csv",
    "parse_str_csv",
]
