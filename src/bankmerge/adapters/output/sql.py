"""SQL ``INSERT`` script for the reconciled registry, rendered with SQLAlchemy Core."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from sqlalchemy import Column, Integer, MetaData, String, Table, insert
from sqlalchemy.dialects import sqlite

from bankmerge.domain.normalization import format_document

if TYPE_CHECKING:
    from collections.abc import Sequence

    from bankmerge.domain.model import Participant

metadata = MetaData()

BANKS: Final[Table] = Table(
    "Banks",
    metadata,
    Column("COMPE", String(3), nullable=False),
    Column("ISPB", String(8), nullable=False),
    Column("Document", String(18)),
    Column("LongName", String(255), nullable=False),
    Column("ShortName", String(255)),
    Column("Network", String(64)),
    Column("Type", String(64)),
    Column("PixType", String(16)),
    Column("Charge", Integer),
    Column("CreditDocument", Integer),
    Column("LegalCheque", Integer, nullable=False),
    Column("DetectaFlow", Integer, nullable=False),
    Column("PCR", Integer),
    Column("PCRP", Integer),
    Column("SalaryPortability", String(64)),
    Column("Products", String(255)),
    Column("Url", String(255)),
    Column("DateOperationStarted", String(10)),
    Column("DatePixStarted", String(19)),
    Column("DateRegistered", String(40)),
    Column("DateUpdated", String(40)),
)


def _flag(value: bool | None) -> int | None:
    return None if value is None else int(value)


def _row(participant: Participant) -> dict[str, object]:
    return {
        "COMPE": f"{participant.clearing_code:03d}",
        "ISPB": f"{participant.ispb:08d}",
        "Document": format_document(participant.document) or None,
        "LongName": participant.long_name,
        "ShortName": participant.short_name or None,
        "Network": participant.network or None,
        "Type": participant.institution_type or None,
        "PixType": participant.pix_type or None,
        "Charge": _flag(participant.charge),
        "CreditDocument": _flag(participant.credit_document),
        "LegalCheque": int(bool(participant.legal_cheque)),
        "DetectaFlow": int(bool(participant.detecta_flow)),
        "PCR": _flag(participant.pcr),
        "PCRP": _flag(participant.pcrp),
        "SalaryPortability": participant.salary_portability or None,
        "Products": ",".join(sorted(participant.products)) or None,
        "Url": participant.url or None,
        "DateOperationStarted": participant.date_operation_started or None,
        "DatePixStarted": participant.date_pix_started or None,
        "DateRegistered": (
            participant.date_registered.isoformat() if participant.date_registered else None
        ),
        "DateUpdated": participant.date_updated.isoformat() if participant.date_updated else None,
    }


def render_sql(participants: Sequence[Participant]) -> str:
    dialect = sqlite.dialect()
    statements = [
        str(
            insert(BANKS)
            .values(_row(participant))
            .compile(dialect=dialect, compile_kwargs={"literal_binds": True})
        )
        for participant in participants
    ]
    return "".join(f"{statement};\n" for statement in statements)
