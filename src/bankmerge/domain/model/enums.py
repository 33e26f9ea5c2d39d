"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class Source(StrEnum):
    """Where a field value came from; rendered in change reports."""

    BASE = "Base"
    DOCUMENT = "Document"
    STR = "STR"
    SITRAF = "SITRAF"
    SLC = "SLC"
    SPI = "SPI"
    CTC = "CTC"
    SILOC = "SILOC"
    PCPS = "PCPS"
    CQL = "CQL"
    DETECTA_FLOW = "DetectaFlow"
    PCR = "PCR"


FEED_SOURCES: tuple[Source, ...] = tuple(
    source for source in Source if source not in {Source.BASE, Source.DOCUMENT}
)


class FieldName(StrEnum):
    """Mutable participant fields, named as they appear in reports and serialized output."""

    DOCUMENT = "Document"
    LONG_NAME = "LongName"
    SHORT_NAME = "ShortName"
    PIX_TYPE = "PixType"
    DATE_PIX_STARTED = "DatePixStarted"
    CHARGE = "Charge"
    CREDIT_DOCUMENT = "CreditDocument"
    LEGAL_CHEQUE = "LegalCheque"
    DETECTA_FLOW = "DetectaFlow"
    PCR = "PCR"
    PCRP = "PCRP"
    SALARY_PORTABILITY = "SalaryPortability"
    PRODUCTS = "Products"
