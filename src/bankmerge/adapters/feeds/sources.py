"""HTTP fetchers for every participant feed, and concurrent acquisition."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import date, timedelta
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

import httpx

from bankmerge.adapters.http_resilience import ResilientClient
from bankmerge.config.http_resilience import ResilienceConfig, feed_resilience_config
from bankmerge.domain.model import Source

from .parsing import PDF_PARSERS, decode_text, extract_pdf_pages, parse_spi_csv, parse_str_csv

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from bankmerge.config.feeds import FeedConfig
    from bankmerge.domain.model import Participant

    from .parsing import PdfFeedParser

log = getLogger(__name__)


class FeedFetchError(RuntimeError):
    """Raised inside a feed when its content cannot be obtained."""


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def _today() -> date:
    return date.today()  # noqa: DTZ011


class Feed(Protocol):
    source: Source

    async def fetch(self, client: ResilientClient) -> list[Participant]: ...


async def _download(client: ResilientClient, url: str) -> bytes:
    response = await client.get(url)
    response.raise_for_status()
    return response.content


@dataclass(slots=True, kw_only=True)
class StrFeed:
    url: str
    source: Source = Source.STR

    async def fetch(self, client: ResilientClient) -> list[Participant]:
        return parse_str_csv(decode_text(await _download(client, self.url)))


@dataclass(slots=True, kw_only=True)
class SpiFeed:
    """The SPI list is published per day; walk back until a published file is found."""

    url_template: str
    lookback_days: int
    today: Callable[[], date] = _today
    source: Source = Source.SPI

    async def fetch(self, client: ResilientClient) -> list[Participant]:
        day = self.today()
        for _ in range(self.lookback_days + 1):
            url = self.url_template.format(date=day)
            response = await client.get(url)
            if response.status_code == httpx.codes.OK and response.content.strip():
                log.info("SPI | Using list published on %s", day.isoformat())
                return parse_spi_csv(decode_text(response.content))
            log.debug("SPI | No list for %s (HTTP %d)", day.isoformat(), response.status_code)
            day -= timedelta(days=1)
        msg = f"No SPI list published in the last {self.lookback_days} day(s)"
        raise FeedFetchError(msg)


@dataclass(slots=True, kw_only=True)
class PdfFeed:
    source: Source
    url: str
    parser: PdfFeedParser

    async def fetch(self, client: ResilientClient) -> list[Participant]:
        data = await _download(client, self.url)
        try:
            pages = extract_pdf_pages(data)
        except RuntimeError as exc:
            msg = f"{self.source} | Unreadable PDF at {self.url}"
            raise FeedFetchError(msg) from exc
        return self.parser.parse(pages)


def build_feeds(
    config: FeedConfig,
    *,
    skip: Sequence[Source] = (),
    today: Callable[[], date] = _today,
) -> list[Feed]:
    """Instantiate every configured feed except the ones in ``skip``."""

    pdf_urls = {
        Source.SLC: config.slc_url,
        Source.SILOC: config.siloc_url,
        Source.SITRAF: config.sitraf_url,
        Source.CTC: config.ctc_url,
        Source.PCPS: config.pcps_url,
        Source.CQL: config.cql_url,
        Source.DETECTA_FLOW: config.detecta_flow_url,
        Source.PCR: config.pcr_url,
    }
    feeds: list[Feed] = [
        StrFeed(url=config.str_url),
        SpiFeed(
            url_template=config.spi_url_template,
            lookback_days=config.spi_lookback_days,
            today=today,
        ),
        *(
            PdfFeed(source=source, url=url, parser=PDF_PARSERS[source])
            for source, url in pdf_urls.items()
        ),
    ]
    return [feed for feed in feeds if feed.source not in skip]


async def fetch_safely(feed: Feed, client: ResilientClient) -> list[Participant]:
    """Run one feed; any fetch or parse failure yields no candidates for it."""

    log.info("%s | Downloading", feed.source)
    try:
        return await feed.fetch(client)
    except (FeedFetchError, httpx.HTTPError, ValueError) as exc:
        log.warning("%s | Feed unavailable: %s", feed.source, exc)
        return []


@dataclass(slots=True)
class FeedAcquirer:
    """Fetch every feed concurrently over one shared client before merging starts."""

    feeds: Sequence[Feed]
    resilience: ResilienceConfig = field(default_factory=feed_resilience_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(self) -> dict[Source, list[Participant]]:
        return asyncio.run(self._acquire())

    async def _acquire(self) -> dict[Source, list[Participant]]:
        async with self.client_factory(self.resilience) as client:
            results = await asyncio.gather(*(fetch_safely(feed, client) for feed in self.feeds))
        return {feed.source: result for feed, result in zip(self.feeds, results, strict=True)}
