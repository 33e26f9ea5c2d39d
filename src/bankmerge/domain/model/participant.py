"""Financial-system participant (bank or payment institution)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from bankmerge.domain.model.provenance import ChangeSet
from bankmerge.domain.normalization import fold, normalize_document, normalize_url

if TYPE_CHECKING:
    from datetime import datetime

# Only this clearing code may be shared, and it survives the identity filter without an ISPB.
RESERVED_CLEARING_CODE = 1


@dataclass(eq=False, kw_only=True)
class Participant:
    clearing_code: int = 0
    ispb: int = 0
    document: str = ""
    long_name: str = ""
    short_name: str = ""
    network: str = ""
    institution_type: str = ""
    pix_type: str = ""
    charge: bool | None = None
    credit_document: bool | None = None
    legal_cheque: bool | None = None
    detecta_flow: bool | None = None
    pcr: bool | None = None
    pcrp: bool | None = None
    salary_portability: str = ""
    products: frozenset[str] = field(default_factory=frozenset[str])
    url: str = ""
    date_operation_started: str = ""
    date_pix_started: str = ""
    date_registered: datetime | None = None
    date_updated: datetime | None = None

    changes: ChangeSet = field(default_factory=ChangeSet, repr=False)

    def __post_init__(self) -> None:
        self.document = normalize_document(self.document)
        self.url = normalize_url(self.url)

    @property
    def has_identity(self) -> bool:
        """Whether the participant survives the end-of-run identity filter."""

        return self.ispb != 0 or self.clearing_code == RESERVED_CLEARING_CODE

    def copy(self) -> Participant:
        """Return an independent deep copy, change set included."""

        return Participant(
            clearing_code=self.clearing_code,
            ispb=self.ispb,
            document=self.document,
            long_name=self.long_name,
            short_name=self.short_name,
            network=self.network,
            institution_type=self.institution_type,
            pix_type=self.pix_type,
            charge=self.charge,
            credit_document=self.credit_document,
            legal_cheque=self.legal_cheque,
            detecta_flow=self.detecta_flow,
            pcr=self.pcr,
            pcrp=self.pcrp,
            salary_portability=self.salary_portability,
            products=self.products,
            url=self.url,
            date_operation_started=self.date_operation_started,
            date_pix_started=self.date_pix_started,
            date_registered=self.date_registered,
            date_updated=self.date_updated,
            changes=self.changes.copy(),
        )

    def comparison_key(self) -> tuple[object, ...]:
        """Hashable full-field state; text compares case- and diacritics-insensitively."""

        return (
            self.clearing_code,
            self.ispb,
            self.document,
            fold(self.long_name),
            fold(self.short_name),
            fold(self.network),
            fold(self.institution_type),
            fold(self.pix_type),
            self.charge,
            self.credit_document,
            self.legal_cheque,
            self.detecta_flow,
            self.pcr,
            self.pcrp,
            fold(self.salary_portability),
            frozenset(fold(product) for product in self.products),
            fold(self.url),
            self.date_operation_started,
            self.date_pix_started,
            self.date_registered,
            self.date_updated,
        )

    def same_as(self, other: Participant) -> bool:
        return self.comparison_key() == other.comparison_key()

    def __str__(self) -> str:
        return f"{self.clearing_code:03d} - {self.short_name} - {self.document}"
