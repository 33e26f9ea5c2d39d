"""Explicit accessor table for the mutable participant fields.

Merges write through these accessors instead of looking attributes up by
name, so every writable field has a typed getter, setter, equality and
report rendering in one place.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final

from bankmerge.domain.model.enums import FieldName
from bankmerge.domain.normalization import (
    fold,
    format_document,
    format_flag,
    names_equal,
    normalize_document,
)

if TYPE_CHECKING:
    from bankmerge.domain.model.participant import Participant


@dataclass(frozen=True, slots=True)
class FieldAccessor[T]:
    name: FieldName
    get: Callable[[Participant], T]
    set: Callable[[Participant, T], None]
    same: Callable[[T, T], bool]
    render: Callable[[T], str]

    def is_empty(self, participant: Participant) -> bool:
        return self.render(self.get(participant)) == ""


def _render_text(value: str) -> str:
    return value


def _render_products(value: frozenset[str]) -> str:
    return ", ".join(sorted(value))


def _same_value(left: object, right: object) -> bool:
    return left == right


def _same_products(left: frozenset[str], right: frozenset[str]) -> bool:
    return {fold(item) for item in left} == {fold(item) for item in right}


def _set_document(participant: Participant, value: str) -> None:
    participant.document = normalize_document(value)


def _set_long_name(participant: Participant, value: str) -> None:
    participant.long_name = value


def _set_short_name(participant: Participant, value: str) -> None:
    participant.short_name = value


def _set_pix_type(participant: Participant, value: str) -> None:
    participant.pix_type = value


def _set_date_pix_started(participant: Participant, value: str) -> None:
    participant.date_pix_started = value


def _set_charge(participant: Participant, value: bool | None) -> None:
    participant.charge = value


def _set_credit_document(participant: Participant, value: bool | None) -> None:
    participant.credit_document = value


def _set_legal_cheque(participant: Participant, value: bool | None) -> None:
    participant.legal_cheque = value


def _set_detecta_flow(participant: Participant, value: bool | None) -> None:
    participant.detecta_flow = value


def _set_pcr(participant: Participant, value: bool | None) -> None:
    participant.pcr = value


def _set_pcrp(participant: Participant, value: bool | None) -> None:
    participant.pcrp = value


def _set_salary_portability(participant: Participant, value: str) -> None:
    participant.salary_portability = value


def _set_products(participant: Participant, value: frozenset[str]) -> None:
    participant.products = value


FIELDS: Final[dict[FieldName, FieldAccessor[Any]]] = {
    FieldName.DOCUMENT: FieldAccessor(
        FieldName.DOCUMENT,
        lambda p: p.document,
        _set_document,
        lambda a, b: normalize_document(a) == normalize_document(b),
        format_document,
    ),
    FieldName.LONG_NAME: FieldAccessor(
        FieldName.LONG_NAME, lambda p: p.long_name, _set_long_name, names_equal, _render_text
    ),
    FieldName.SHORT_NAME: FieldAccessor(
        FieldName.SHORT_NAME, lambda p: p.short_name, _set_short_name, names_equal, _render_text
    ),
    FieldName.PIX_TYPE: FieldAccessor(
        FieldName.PIX_TYPE, lambda p: p.pix_type, _set_pix_type, names_equal, _render_text
    ),
    FieldName.DATE_PIX_STARTED: FieldAccessor(
        FieldName.DATE_PIX_STARTED,
        lambda p: p.date_pix_started,
        _set_date_pix_started,
        _same_value,
        _render_text,
    ),
    FieldName.CHARGE: FieldAccessor(
        FieldName.CHARGE, lambda p: p.charge, _set_charge, _same_value, format_flag
    ),
    FieldName.CREDIT_DOCUMENT: FieldAccessor(
        FieldName.CREDIT_DOCUMENT,
        lambda p: p.credit_document,
        _set_credit_document,
        _same_value,
        format_flag,
    ),
    FieldName.LEGAL_CHEQUE: FieldAccessor(
        FieldName.LEGAL_CHEQUE,
        lambda p: p.legal_cheque,
        _set_legal_cheque,
        _same_value,
        format_flag,
    ),
    FieldName.DETECTA_FLOW: FieldAccessor(
        FieldName.DETECTA_FLOW,
        lambda p: p.detecta_flow,
        _set_detecta_flow,
        _same_value,
        format_flag,
    ),
    FieldName.PCR: FieldAccessor(
        FieldName.PCR, lambda p: p.pcr, _set_pcr, _same_value, format_flag
    ),
    FieldName.PCRP: FieldAccessor(
        FieldName.PCRP, lambda p: p.pcrp, _set_pcrp, _same_value, format_flag
    ),
    FieldName.SALARY_PORTABILITY: FieldAccessor(
        FieldName.SALARY_PORTABILITY,
        lambda p: p.salary_portability,
        _set_salary_portability,
        names_equal,
        _render_text,
    ),
    FieldName.PRODUCTS: FieldAccessor(
        FieldName.PRODUCTS, lambda p: p.products, _set_products, _same_products, _render_products
    ),
}


def accessor(name: FieldName) -> FieldAccessor[Any]:
    return FIELDS[name]
