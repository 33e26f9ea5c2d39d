from __future__ import annotations

from bankmerge.domain.model import FieldName, Participant, Source
from bankmerge.domain.reconciliation import RunStatus, classify_changes, record_change
from bankmerge.domain.registry import ParticipantRegistry
from tests.helpers.participants import FIXED_NOW, make_participant


def test_unchanged_registry_reports_no_changes() -> None:
    registry = ParticipantRegistry(
        [make_participant(clearing_code=2), make_participant(clearing_code=1, ispb=1)]
    )
    pristine = registry.snapshot()

    diff = classify_changes(registry, pristine, at=FIXED_NOW)

    assert diff.status is RunStatus.NO_CHANGES
    assert [p.clearing_code for p in diff.participants] == [1, 2]
    assert diff.report == ""


def test_added_and_updated_are_split_by_pristine_ispb() -> None:
    existing = make_participant("Banco Exemplo S.A.", clearing_code=999, ispb=12345678)
    registry = ParticipantRegistry([existing])
    pristine = registry.snapshot()
    record_change(existing, FieldName.PIX_TYPE, "DRCT", source=Source.SPI, at=FIXED_NOW)
    registry.add(
        Participant(
            clearing_code=336,
            ispb=31872495,
            document="31872495",
            long_name="Banco C6 S.A.",
            short_name="C6",
        )
    )

    diff = classify_changes(registry, pristine, at=FIXED_NOW)

    assert diff.status is RunStatus.CHANGED
    assert [p.clearing_code for p in diff.added] == [336]
    assert diff.updated == [existing]
    assert diff.added[0].date_registered == FIXED_NOW
    assert diff.report == (
        "- Added 1 bank\n"
        "  - 336 - C6 - 31.872.495/0001-72\n"
        "- Updated 1 bank\n"
        "  - 999 - Banco Exemplo - 12.345.678/0001-95\n"
        "    - **PixType** (SPI):  **->** DRCT\n"
    )


def test_participants_without_identity_are_filtered() -> None:
    registry = ParticipantRegistry([make_participant()])
    pristine = registry.snapshot()
    registry.add(Participant(clearing_code=0, ispb=0, long_name="Sem identidade"))

    diff = classify_changes(registry, pristine, at=FIXED_NOW)

    assert diff.status is RunStatus.NO_CHANGES
    assert len(diff.participants) == 1


def test_report_pluralizes_bank_count() -> None:
    registry = ParticipantRegistry([])
    pristine = registry.snapshot()
    registry.add(make_participant("Banco Um S.A.", clearing_code=10, ispb=10))
    registry.add(make_participant("Banco Dois S.A.", clearing_code=20, ispb=20))

    diff = classify_changes(registry, pristine, at=FIXED_NOW)

    assert diff.report.startswith("- Added 2 banks\n")
    assert "  - 10 - Banco Um - " in diff.report
