"""Turn raw feed content (PDF page text, CSV text) into candidate participants."""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, timezone
from logging import getLogger
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

import fitz

from bankmerge.domain.model import Participant, Source
from bankmerge.domain.normalization import normalize_document, parse_flag

from .patterns import (
    CQL_PATTERN,
    CTC_PATTERN,
    DETECTA_FLOW_PATTERN,
    PCPS_PATTERN,
    PCR_PATTERN,
    SILOC_PATTERN,
    SITRAF_PATTERN,
    SLC_PATTERN,
)

if TYPE_CHECKING:
    import re
    from collections.abc import Callable, Iterable, Iterator, Mapping

log = getLogger(__name__)

# SPI timestamps are published in UTC; the registry keeps Brasília local time.
BRASILIA: Final[timezone] = timezone(timedelta(hours=-3), "BRT")

type RecordBuilder = Callable[[re.Match[str]], Participant]


def extract_pdf_pages(data: bytes) -> list[str]:
    """Return the plain text of every page of a PDF document."""

    with fitz.open(stream=data, filetype="pdf") as document:
        return [page.get_text() for page in document]


def decode_text(data: bytes) -> str:
    """Decode feed bytes; BCB files are UTF-8 when fresh, Latin-1 when older."""

    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def _clean_name(value: str) -> str:
    return value.replace('"', "").strip()


@dataclass(slots=True)
class SequenceCheck:
    """Tracks the printed row numbers and flags rows that were skipped or merged."""

    source: Source
    expected: int = 0

    def observe(self, code: int) -> None:
        self.expected += 1
        if self.expected != code:
            log.warning("%s | Counting: %d | Code: %d", self.source, self.expected, code)
            self.expected = code


def iter_records(
    page: str,
    pattern: re.Pattern[str],
    *,
    splice: bool,
    max_spliced: int | None = None,
) -> Iterator[str]:
    """Yield candidate record strings from one page of text.

    With ``splice`` enabled, lines that do not match are glued together and
    offered as one record just before the next matching line, which recovers
    rows whose text wrapped across lines. ``max_spliced`` forces that offer
    after the given number of glued lines.
    """

    spliced: list[str] = []
    for raw_line in page.split("\n"):
        line = raw_line.rstrip("\r")
        if not splice:
            yield line
            continue
        if not pattern.match(line):
            spliced.append(line)
            if max_spliced is None or len(spliced) < max_spliced:
                continue
        joined = " ".join(spliced).strip()
        if joined:
            yield joined
        spliced.clear()
        yield line


@dataclass(frozen=True, slots=True, kw_only=True)
class PdfFeedParser:
    source: Source
    pattern: re.Pattern[str]
    build: RecordBuilder
    splice: bool = False
    max_spliced: int | None = None
    check_sequence: bool = True

    def parse(self, pages: Iterable[str]) -> list[Participant]:
        sequence = SequenceCheck(self.source) if self.check_sequence else None
        candidates: list[Participant] = []
        for page in pages:
            for record in iter_records(
                page, self.pattern, splice=self.splice, max_spliced=self.max_spliced
            ):
                match = self.pattern.match(record)
                if match is None:
                    continue
                if sequence is not None:
                    sequence.observe(int(match.group("code")))
                candidates.append(self.build(match))
        log.info("%s | Parsed %d candidate(s)", self.source, len(candidates))
        return candidates


def _build_slc(match: re.Match[str]) -> Participant:
    return Participant(document=match.group("cnpj"), long_name=_clean_name(match.group("nome")))


def _build_siloc(match: re.Match[str]) -> Participant:
    return Participant(
        clearing_code=int(match.group("compe")),
        ispb=int(match.group("ispb")),
        long_name=_clean_name(match.group("nome")),
        charge=parse_flag(match.group("cobranca")),
        credit_document=parse_flag(match.group("doc")),
    )


def _build_sitraf(match: re.Match[str]) -> Participant:
    return Participant(
        clearing_code=int(match.group("compe")),
        ispb=int(match.group("ispb")),
        long_name=_clean_name(match.group("nome")),
    )


def split_products(raw: str) -> frozenset[str]:
    """Split "A, B e C" into its product names."""

    parts = [part.strip() for part in raw.split(",")]
    *head, last = parts
    products = [*head, *(part.strip() for part in last.split(" e "))]
    return frozenset(product for product in products if product)


def _build_ctc(match: re.Match[str]) -> Participant:
    return Participant(
        document=match.group("cnpj"),
        ispb=int(match.group("ispb")),
        long_name=_clean_name(match.group("nome")),
        products=split_products(match.group("produtos")),
    )


def _build_pcps(match: re.Match[str]) -> Participant:
    return Participant(
        document=match.group("cnpj"),
        ispb=int(match.group("ispb")),
        long_name=_clean_name(match.group("nome")),
        salary_portability=match.group("adesao").strip().replace("- 1 -", "").strip(),
    )


def _build_cql(match: re.Match[str]) -> Participant:
    return Participant(
        ispb=int(match.group("ispb")),
        long_name=_clean_name(match.group("nome")),
        institution_type=match.group("tipo").strip(),
        legal_cheque=True,
    )


def _build_detecta_flow(match: re.Match[str]) -> Participant:
    return Participant(
        document=match.group("cnpj"),
        ispb=int(match.group("ispb")),
        long_name=_clean_name(match.group("nome")),
        detecta_flow=True,
    )


def _build_pcr(match: re.Match[str]) -> Participant:
    return Participant(
        document=match.group("cnpj"),
        ispb=int(match.group("ispb")),
        clearing_code=int(match.group("compe")),
        long_name=_clean_name(match.group("nome")),
        pcr=parse_flag(match.group("pcr")),
        pcrp=parse_flag(match.group("pcrp")),
    )


PDF_PARSERS: Final[Mapping[Source, PdfFeedParser]] = MappingProxyType(
    {
        Source.SLC: PdfFeedParser(
            source=Source.SLC, pattern=SLC_PATTERN, build=_build_slc, splice=True
        ),
        Source.SILOC: PdfFeedParser(
            source=Source.SILOC, pattern=SILOC_PATTERN, build=_build_siloc, check_sequence=False
        ),
        Source.SITRAF: PdfFeedParser(
            source=Source.SITRAF, pattern=SITRAF_PATTERN, build=_build_sitraf, splice=True
        ),
        Source.CTC: PdfFeedParser(
            source=Source.CTC,
            pattern=CTC_PATTERN,
            build=_build_ctc,
            splice=True,
            max_spliced=2,
        ),
        Source.PCPS: PdfFeedParser(
            source=Source.PCPS, pattern=PCPS_PATTERN, build=_build_pcps, splice=True
        ),
        Source.CQL: PdfFeedParser(source=Source.CQL, pattern=CQL_PATTERN, build=_build_cql),
        Source.DETECTA_FLOW: PdfFeedParser(
            source=Source.DETECTA_FLOW, pattern=DETECTA_FLOW_PATTERN, build=_build_detecta_flow
        ),
        Source.PCR: PdfFeedParser(
            source=Source.PCR, pattern=PCR_PATTERN, build=_build_pcr, splice=True
        ),
    }
)


def _data_rows(text: str, *, delimiter: str) -> Iterator[list[str]]:
    reader = csv.reader(io.StringIO(text), delimiter=delimiter)
    next(reader, None)
    yield from reader


def parse_str_csv(text: str) -> list[Participant]:
    """Parse ``ParticipantesSTR.csv``; rows without a numeric clearing code or ISPB are dropped."""

    candidates: list[Participant] = []
    for row in _data_rows(text, delimiter=","):
        if len(row) < 7 or not row[2].strip().isdigit():
            continue
        if not row[0].strip().isdigit():
            log.warning("STR | Skipping %s: malformed ISPB %r", row[1].strip(), row[0])
            continue
        started = row[6].strip()
        try:
            started = datetime.strptime(started, "%d/%m/%Y").strftime("%Y-%m-%d")  # noqa: DTZ007
        except ValueError:
            log.debug("STR | Unparseable start date %r for %s", started, row[0])
        candidates.append(
            Participant(
                clearing_code=int(row[2]),
                ispb=int(row[0]),
                document=normalize_document(row[0]),
                long_name=row[5].replace('"', "").replace("?", "-").strip(),
                short_name=row[1].strip(),
                network=row[4].strip(),
                date_operation_started=started,
            )
        )
    log.info("STR | Parsed %d candidate(s)", len(candidates))
    return candidates


def format_pix_timestamp(raw: str) -> str:
    """Convert an SPI timestamp (UTC) to ``YYYY-MM-DD HH:MM:SS`` Brasília time."""

    value = datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(BRASILIA).strftime("%Y-%m-%d %H:%M:%S")


def parse_spi_csv(text: str) -> list[Participant]:
    """Parse ``participantes-spi-YYYYMMDD.csv`` (semicolon separated)."""

    candidates: list[Participant] = []
    for row in _data_rows(text, delimiter=";"):
        if len(row) < 6 or not row[0].strip().isdigit():
            continue
        try:
            pix_started = format_pix_timestamp(row[5])
        except ValueError:
            log.warning("SPI | Skipping %s: unparseable start %r", row[1].strip(), row[5])
            continue
        candidates.append(
            Participant(
                ispb=int(row[0]),
                long_name=row[1].strip(),
                short_name=row[2].strip(),
                pix_type=row[4].strip(),
                date_pix_started=pix_started,
            )
        )
    log.info("SPI | Parsed %d candidate(s)", len(candidates))
    return candidates
