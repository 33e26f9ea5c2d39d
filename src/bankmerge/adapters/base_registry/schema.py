"""Pydantic models describing the canonical registry JSON (``bancos.json``)."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_serializer, field_validator

from bankmerge.domain.model import Participant
from bankmerge.domain.normalization import format_document, only_digits


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class RegistryBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ParticipantRecord(RegistryBaseModel):
    clearing_code: int = Field(default=0, alias="COMPE")
    ispb: int = Field(default=0, alias="ISPB")
    document: str | None = Field(default=None, alias="Document")
    long_name: str | None = Field(default=None, alias="LongName")
    short_name: str | None = Field(default=None, alias="ShortName")
    network: str | None = Field(default=None, alias="Network")
    institution_type: str | None = Field(default=None, alias="Type")
    pix_type: str | None = Field(default=None, alias="PixType")
    charge: bool | None = Field(default=None, alias="Charge")
    credit_document: bool | None = Field(default=None, alias="CreditDocument")
    legal_cheque: bool | None = Field(default=None, alias="LegalCheque")
    detecta_flow: bool | None = Field(default=None, alias="DetectaFlow")
    pcr: bool | None = Field(default=None, alias="PCR")
    pcrp: bool | None = Field(default=None, alias="PCRP")
    salary_portability: str | None = Field(default=None, alias="SalaryPortability")
    products: list[str] | None = Field(default=None, alias="Products")
    url: str | None = Field(default=None, alias="Url")
    date_operation_started: str | None = Field(default=None, alias="DateOperationStarted")
    date_pix_started: str | None = Field(default=None, alias="DatePixStarted")
    date_registered: datetime | None = Field(default=None, alias="DateRegistered")
    date_updated: datetime | None = Field(default=None, alias="DateUpdated")

    @field_validator("clearing_code", "ispb", mode="before")
    @classmethod
    def _parse_code(cls, value: object) -> object:
        if isinstance(value, str):
            digits = only_digits(value)
            return int(digits) if digits else 0
        if value is None:
            return 0
        return value

    @field_validator(
        "document",
        "long_name",
        "short_name",
        "network",
        "institution_type",
        "pix_type",
        "salary_portability",
        "url",
        "date_operation_started",
        "date_pix_started",
        mode="before",
    )
    @classmethod
    def _normalize_text(cls, value: object) -> object:
        return _blank_to_none(value)

    @field_validator("date_registered", "date_updated", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: object) -> object:
        # The published file carries .NET round-trip timestamps with 7 fractional digits.
        value = _blank_to_none(value)
        if isinstance(value, str):
            value = datetime.fromisoformat(value)
        if isinstance(value, datetime) and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @field_serializer("clearing_code")
    def _serialize_clearing_code(self, value: int) -> str:
        return f"{value:03d}"

    @field_serializer("ispb")
    def _serialize_ispb(self, value: int) -> str:
        return f"{value:08d}"

    def to_participant(self) -> Participant:
        return Participant(
            clearing_code=self.clearing_code,
            ispb=self.ispb,
            document=self.document or "",
            long_name=self.long_name or "",
            short_name=self.short_name or "",
            network=self.network or "",
            institution_type=self.institution_type or "",
            pix_type=self.pix_type or "",
            charge=self.charge,
            credit_document=self.credit_document,
            legal_cheque=self.legal_cheque,
            detecta_flow=self.detecta_flow,
            pcr=self.pcr,
            pcrp=self.pcrp,
            salary_portability=self.salary_portability or "",
            products=frozenset(self.products or ()),
            url=self.url or "",
            date_operation_started=self.date_operation_started or "",
            date_pix_started=self.date_pix_started or "",
            date_registered=self.date_registered,
            date_updated=self.date_updated,
        )

    @classmethod
    def from_participant(cls, participant: Participant) -> ParticipantRecord:
        return cls(
            clearing_code=participant.clearing_code,
            ispb=participant.ispb,
            document=format_document(participant.document) or None,
            long_name=participant.long_name or None,
            short_name=participant.short_name or None,
            network=participant.network or None,
            institution_type=participant.institution_type or None,
            pix_type=participant.pix_type or None,
            charge=participant.charge,
            credit_document=participant.credit_document,
            legal_cheque=participant.legal_cheque,
            detecta_flow=participant.detecta_flow,
            pcr=participant.pcr,
            pcrp=participant.pcrp,
            salary_portability=participant.salary_portability or None,
            products=sorted(participant.products) or None,
            url=participant.url or None,
            date_operation_started=participant.date_operation_started or None,
            date_pix_started=participant.date_pix_started or None,
            date_registered=participant.date_registered,
            date_updated=participant.date_updated,
        )


REGISTRY_ADAPTER: TypeAdapter[list[ParticipantRecord]] = TypeAdapter(list[ParticipantRecord])


def parse_registry(content: str | bytes) -> list[Participant]:
    return [record.to_participant() for record in REGISTRY_ADAPTER.validate_json(content)]


def dump_registry(participants: list[Participant]) -> bytes:
    records = [ParticipantRecord.from_participant(participant) for participant in participants]
    return REGISTRY_ADAPTER.dump_json(records, by_alias=True, indent=2)
