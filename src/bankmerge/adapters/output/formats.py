"""Text renderings of the reconciled registry (CSV, Markdown, XML)."""

from __future__ import annotations

import csv
import io
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from bankmerge.domain.normalization import format_document

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from bankmerge.domain.model import Participant

MARKDOWN_TITLE: Final[str] = "# Bancos Brasileiros"


def _yes_no(value: bool | None) -> str:
    if value is None:
        return ""
    return "Sim" if value else "Não"


def _timestamp(participant: Participant, *, registered: bool) -> str:
    value = participant.date_registered if registered else participant.date_updated
    return value.isoformat() if value is not None else ""


@dataclass(frozen=True, slots=True)
class Column:
    name: str
    display_name: str
    render: Callable[[Participant], str]


COLUMNS: Final[tuple[Column, ...]] = (
    Column("COMPE", "COMPE", lambda p: f"{p.clearing_code:03d}"),
    Column("ISPB", "ISPB", lambda p: f"{p.ispb:08d}"),
    Column("Document", "Document", lambda p: format_document(p.document)),
    Column("LongName", "Long Name", lambda p: p.long_name),
    Column("ShortName", "Short Name", lambda p: p.short_name),
    Column("Network", "Network", lambda p: p.network),
    Column("Type", "Type", lambda p: p.institution_type),
    Column("PixType", "PIX Type", lambda p: p.pix_type),
    Column("Charge", "Charge", lambda p: _yes_no(p.charge)),
    Column("CreditDocument", "Credit Document", lambda p: _yes_no(p.credit_document)),
    Column("LegalCheque", "Legal Cheque", lambda p: _yes_no(bool(p.legal_cheque))),
    Column("DetectaFlow", "Detecta Flow", lambda p: _yes_no(bool(p.detecta_flow))),
    Column("PCR", "PCR", lambda p: _yes_no(p.pcr)),
    Column("PCRP", "PCRP", lambda p: _yes_no(p.pcrp)),
    Column("SalaryPortability", "Salary Portability", lambda p: p.salary_portability),
    Column("Products", "Products", lambda p: ", ".join(sorted(p.products))),
    Column("Url", "Url", lambda p: p.url),
    Column("DateOperationStarted", "Date Operation Started", lambda p: p.date_operation_started),
    Column("DatePixStarted", "Date PIX Started", lambda p: p.date_pix_started),
    Column("DateRegistered", "Date Registered", lambda p: _timestamp(p, registered=True)),
    Column("DateUpdated", "Date Updated", lambda p: _timestamp(p, registered=False)),
)


def render_csv(participants: Sequence[Participant]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(column.name for column in COLUMNS)
    for participant in participants:
        writer.writerow(column.render(participant) for column in COLUMNS)
    return buffer.getvalue()


def render_markdown(participants: Sequence[Participant]) -> str:
    lines = [
        MARKDOWN_TITLE,
        "",
        " | ".join(column.display_name for column in COLUMNS),
        " | ".join("---" for _ in COLUMNS),
    ]
    for participant in participants:
        cells = (column.render(participant) or "-" for column in COLUMNS)
        lines.append(" | ".join(cell.replace("|", "/") for cell in cells))
    return "\n".join(lines) + "\n"


def render_xml(participants: Sequence[Participant]) -> bytes:
    root = ET.Element("Banks")
    for participant in participants:
        bank = ET.SubElement(root, "Bank")
        for column in COLUMNS:
            if column.name == "Products":
                products = ET.SubElement(bank, "Products")
                for product in sorted(participant.products):
                    ET.SubElement(products, "Product").text = product
                continue
            value = column.render(participant)
            if value:
                ET.SubElement(bank, column.name).text = value
    ET.indent(root)
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)
