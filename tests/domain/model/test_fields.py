from __future__ import annotations

from bankmerge.domain.model import FIELDS, FieldName, accessor
from tests.helpers.participants import make_participant


def test_every_field_name_has_an_accessor() -> None:
    assert set(FIELDS) == set(FieldName)


def test_document_accessor_normalizes_and_renders_masked() -> None:
    participant = make_participant(document="")
    field = accessor(FieldName.DOCUMENT)

    assert field.is_empty(participant)
    field.set(participant, "60.701.190/0001-04")

    assert participant.document == "60701190000104"
    assert field.render(field.get(participant)) == "60.701.190/0001-04"
    assert field.same("60701190000104", "60.701.190/0001-04")


def test_flag_accessor_is_tri_state() -> None:
    participant = make_participant()
    field = accessor(FieldName.CHARGE)

    assert field.is_empty(participant)
    field.set(participant, False)

    assert not field.is_empty(participant)
    assert field.render(participant.charge) == "não"
    assert not field.same(None, False)


def test_products_compare_as_sets() -> None:
    field = accessor(FieldName.PRODUCTS)

    assert field.same(frozenset({"DOC", "Cheque"}), frozenset({"cheque", "doc"}))
    assert field.render(frozenset({"TED", "DOC"})) == "DOC, TED"
