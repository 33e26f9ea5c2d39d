from __future__ import annotations

from bankmerge.domain.model import FieldName, Participant, Source
from bankmerge.domain.registry import ParticipantRegistry
from tests.helpers.participants import banco_do_brasil, make_participant


def _registry() -> ParticipantRegistry:
    return ParticipantRegistry(
        [
            banco_do_brasil(),
            make_participant("Banco Inter S.A.", clearing_code=77, ispb=416968, short_name="Inter"),
            make_participant("Itaú Unibanco S.A.", clearing_code=341, ispb=60701190),
        ]
    )


def test_find_by_document_normalizes_the_query() -> None:
    registry = _registry()

    (found,) = registry.find_by_document("60.701.190/0001-04")

    assert found.clearing_code == 341
    assert registry.find_by_document("") == ()


def test_find_by_name_checks_long_and_short_names() -> None:
    registry = _registry()

    assert [p.clearing_code for p in registry.find_by_name("ITAU UNIBANCO S.A.")] == [341]
    assert [p.clearing_code for p in registry.find_by_name("inter")] == [77]
    assert registry.find_by_name("") == ()


def test_find_by_ispb_and_name_fragment() -> None:
    registry = _registry()

    assert registry.find_by_ispb_and_name_fragment(0, "Banco do Brasil")
    assert registry.find_by_ispb_and_name_fragment(60701190, "Bradesco") == ()


def test_find_by_clearing_code_returns_every_hit() -> None:
    registry = _registry()
    registry.add(Participant(clearing_code=1, ispb=0, long_name="Outro"))

    assert len(registry.find_by_clearing_code(1)) == 2
    assert registry.find_by_clearing_code(404) == ()


def test_contains_ispb_ignores_zero() -> None:
    registry = _registry()

    assert registry.contains_ispb(416968)
    assert not registry.contains_ispb(0)


def test_snapshot_is_detached_from_later_mutation() -> None:
    registry = _registry()
    snapshot = registry.snapshot()

    registry.participants[1].long_name = "Banco Inter"

    assert snapshot[1].long_name == "Banco Inter S.A."
    assert len(snapshot) == len(registry)


def test_begin_run_clears_change_sets() -> None:
    registry = _registry()
    first = registry.participants[0]
    first.changes.record(FieldName.PCR, source=Source.PCR, old_value="", new_value="sim")

    registry.begin_run()

    assert not first.changes
