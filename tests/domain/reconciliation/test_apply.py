from __future__ import annotations

from bankmerge.domain.model import FieldName, Participant, Source
from bankmerge.domain.reconciliation import (
    POLICIES,
    MergeOutcome,
    backfill_documents,
    insert_candidate,
    merge_into,
    merge_source,
    record_change,
)
from bankmerge.domain.registry import ParticipantRegistry
from tests.helpers.participants import FIXED_NOW, REGISTERED_AT, banco_do_brasil, make_participant


def test_record_change_ignores_identical_rendering() -> None:
    participant = make_participant(pix_type="DRCT")

    assert not record_change(
        participant, FieldName.PIX_TYPE, "DRCT", source=Source.SPI, at=FIXED_NOW
    )
    assert not participant.changes
    assert participant.date_updated == REGISTERED_AT


def test_record_change_tracks_provenance_and_stamps_update() -> None:
    participant = make_participant()

    assert record_change(participant, FieldName.CHARGE, True, source=Source.SILOC, at=FIXED_NOW)

    change = participant.changes.get(FieldName.CHARGE)
    assert change is not None
    assert (change.source, change.old_value, change.new_value) == (Source.SILOC, "", "sim")
    assert participant.date_updated == FIXED_NOW


def test_replace_pair_writes_both_fields() -> None:
    participant = make_participant(pix_type="IDRT", date_pix_started="2020-11-03 09:00:00")
    candidate = Participant(pix_type="DRCT", date_pix_started="2020-11-03 09:00:00")

    outcome = merge_into(participant, candidate, POLICIES[Source.SPI], at=FIXED_NOW)

    assert outcome is MergeOutcome.UPDATED
    assert participant.pix_type == "DRCT"
    pix_type = participant.changes.get(FieldName.PIX_TYPE)
    started = participant.changes.get(FieldName.DATE_PIX_STARTED)
    assert pix_type is not None
    assert (pix_type.old_value, pix_type.new_value) == ("IDRT", "DRCT")
    assert started is not None
    assert started.source is Source.SPI
    assert started.old_value == started.new_value == "2020-11-03 09:00:00"


def test_replace_pair_is_not_rewritten_when_unchanged() -> None:
    participant = make_participant(pix_type="DRCT", date_pix_started="2020-11-03 09:00:00")
    candidate = Participant(pix_type="DRCT", date_pix_started="2020-11-03 09:00:00")

    outcome = merge_into(participant, candidate, POLICIES[Source.SPI], at=FIXED_NOW)

    assert outcome is MergeOutcome.UP_TO_DATE
    assert not participant.changes


def test_record_change_forced_tracks_unchanged_value() -> None:
    participant = make_participant(pix_type="DRCT")

    assert record_change(
        participant, FieldName.PIX_TYPE, "DRCT", source=Source.SPI, at=FIXED_NOW, force=True
    )
    change = participant.changes.get(FieldName.PIX_TYPE)
    assert change is not None
    assert change.old_value == change.new_value == "DRCT"
    assert participant.date_updated == FIXED_NOW


def test_equal_owned_fields_are_up_to_date() -> None:
    participant = make_participant(salary_portability="Banco Folha")
    candidate = Participant(salary_portability="BANCO FOLHA")

    outcome = merge_into(participant, candidate, POLICIES[Source.PCPS], at=FIXED_NOW)

    assert outcome is MergeOutcome.UP_TO_DATE
    assert participant.salary_portability == "Banco Folha"
    assert participant.date_updated == REGISTERED_AT


def test_replace_ignores_candidate_without_values() -> None:
    participant = make_participant(pcr=True, pcrp=False)

    outcome = merge_into(participant, Participant(), POLICIES[Source.PCR], at=FIXED_NOW)

    assert outcome is MergeOutcome.UP_TO_DATE
    assert participant.pcr is True


def test_fill_only_writes_empty_values() -> None:
    empty = make_participant(document="", short_name="")
    filled = make_participant(short_name="Exemplo")
    candidate = Participant(document="12.345.678/0001-95", long_name="Banco Exemplo Múltiplo")

    merge_into(empty, candidate, POLICIES[Source.SLC], at=FIXED_NOW)
    outcome = merge_into(filled, candidate, POLICIES[Source.SLC], at=FIXED_NOW)

    assert empty.document == "12345678000195"
    assert empty.short_name == "Banco Exemplo Múltiplo"
    assert outcome is MergeOutcome.UP_TO_DATE
    assert filled.short_name == "Exemplo"


def test_capability_is_monotonic() -> None:
    participant = make_participant(legal_cheque=False)

    policy = POLICIES[Source.CQL]

    first = merge_into(participant, Participant(legal_cheque=False), policy, at=FIXED_NOW)
    second = merge_into(participant, Participant(), policy, at=FIXED_NOW)

    assert first is MergeOutcome.UPDATED
    assert second is MergeOutcome.UP_TO_DATE
    assert participant.legal_cheque is True


def test_sitraf_skips_participant_with_other_long_name() -> None:
    participant = make_participant("Banco Exemplo S.A.")

    candidate = Participant(long_name="Outro Banco S.A.")

    outcome = merge_into(participant, candidate, POLICIES[Source.SITRAF], at=FIXED_NOW)

    assert outcome is MergeOutcome.SKIPPED


def test_insert_derives_document_and_short_name() -> None:
    registry = ParticipantRegistry([make_participant()])
    candidate = Participant(
        clearing_code=380, ispb=22896431, long_name="PicPay Bank - Banco Múltiplo S.A"
    )

    inserted = insert_candidate(registry, candidate, POLICIES[Source.SITRAF], at=FIXED_NOW)

    assert inserted is not None
    assert inserted is not candidate
    assert inserted.document.startswith("228964310001")
    assert inserted.short_name == "PicPay Bank"
    assert inserted.date_registered == FIXED_NOW
    assert len(registry) == 2


def test_insert_refuses_duplicate_ispb_or_clearing_code() -> None:
    registry = ParticipantRegistry([make_participant(clearing_code=999, ispb=12345678)])

    same_ispb = Participant(clearing_code=500, ispb=12345678, long_name="Clone")
    same_code = Participant(clearing_code=999, ispb=87654321, long_name="Clone")

    assert insert_candidate(registry, same_ispb, POLICIES[Source.STR], at=FIXED_NOW) is None
    assert insert_candidate(registry, same_code, POLICIES[Source.STR], at=FIXED_NOW) is None
    assert len(registry) == 1


def test_merge_source_counts_outcomes() -> None:
    registry = ParticipantRegistry(
        [
            make_participant("Banco Exemplo S.A.", clearing_code=999, ispb=12345678),
            make_participant("Banco Antigo S.A.", clearing_code=998, ispb=11111111),
        ]
    )
    candidates = [
        Participant(
            clearing_code=999,
            ispb=12345678,
            long_name="Banco Exemplo Novo S.A.",
            short_name="Exemplo",
        ),
        Participant(
            clearing_code=998,
            ispb=11111111,
            long_name="Banco Antigo S.A.",
            short_name="Banco Antigo",
        ),
        Participant(clearing_code=0, ispb=22222222, long_name="Sem Código"),
        Participant(
            clearing_code=450,
            ispb=33333333,
            long_name="Banco Novo S.A.",
            short_name="Novo",
        ),
    ]

    report = merge_source(registry, POLICIES[Source.STR], candidates, at=FIXED_NOW)

    assert report.candidates == 4
    assert report.updated == 1
    assert report.up_to_date == 1
    assert report.skipped == 1
    assert report.added == 1
    assert report.unmatched == 0
    assert "updated: 1 | up to date: 1" in report.describe()
    assert len(registry) == 3


def test_merge_source_discards_unmatched_for_enrichment_sources() -> None:
    registry = ParticipantRegistry([make_participant()])
    before = registry.snapshot()

    report = merge_source(
        registry,
        POLICIES[Source.DETECTA_FLOW],
        [Participant(ispb=99999999, long_name="Desconhecido", detecta_flow=True)],
        at=FIXED_NOW,
    )

    assert report.unmatched == 1
    assert len(registry) == 1
    assert registry.participants[0].same_as(before[0])


def test_backfill_documents_uses_ispb_root() -> None:
    brasil = banco_do_brasil()
    nameless = Participant(clearing_code=300, ispb=0, long_name="Sem identidade")
    registry = ParticipantRegistry([brasil, nameless, make_participant()])

    report = backfill_documents(registry, at=FIXED_NOW)

    assert brasil.document == "00000000000191"
    change = brasil.changes.get(FieldName.DOCUMENT)
    assert change is not None
    assert change.source is Source.DOCUMENT
    assert nameless.document == ""
    assert (report.updated, report.skipped, report.up_to_date) == (1, 1, 1)
