from __future__ import annotations

import fitz
import pytest

from bankmerge.adapters.feeds import PDF_PARSERS, parse_spi_csv, parse_str_csv
from bankmerge.adapters.feeds.parsing import (
    decode_text,
    extract_pdf_pages,
    format_pix_timestamp,
    iter_records,
    split_products,
)
from bankmerge.adapters.feeds.patterns import CTC_PATTERN
from bankmerge.domain.model import Source


def _pdf(*pages: str) -> bytes:
    document = fitz.open()
    for text in pages:
        page = document.new_page()
        page.insert_text((72, 72), text)
    data = document.tobytes()
    document.close()
    return data


def test_extract_pdf_pages_returns_text_per_page() -> None:
    pages = extract_pdf_pages(_pdf("1 077 00416968 BANCO INTER S.A.", "2 341 60701190 ITAU"))

    assert len(pages) == 2
    assert "BANCO INTER S.A." in pages[0]


def test_slc_splices_wrapped_rows() -> None:
    page = "\n".join(
        [
            "Participantes Homologados",
            "1 00.000.000/0001-91 BANCO DO BRASIL S.A.  X X",
            "2 60.746.948/0001-12 BANCO BRADESCO",
            "S.A.  X X",
            "3 60.701.190/0001-04 ITAÚ UNIBANCO S.A.  X",
        ]
    )

    candidates = PDF_PARSERS[Source.SLC].parse([page])

    assert [c.long_name for c in candidates] == [
        "BANCO DO BRASIL S.A.",
        "BANCO BRADESCO S.A.",
        "ITAÚ UNIBANCO S.A.",
    ]
    assert candidates[1].document == "60746948000112"


def test_sequence_gap_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level("WARNING")
    page = "\n".join(
        [
            "1 BANCO DO BRASIL S.A. 00000000 Banco Múltiplo",
            "3 BANCO INTER S.A. 00416968 Banco Múltiplo",
        ]
    )

    candidates = PDF_PARSERS[Source.CQL].parse([page])

    assert len(candidates) == 2
    assert all(c.legal_cheque is True for c in candidates)
    assert candidates[1].institution_type == "Banco Múltiplo"
    assert "Counting: 2 | Code: 3" in caplog.text


def test_siloc_reads_flags() -> None:
    page = "1 001 00000000 sim sim BANCO DO BRASIL S.A.\n2 341 60701190 não sim ITAÚ UNIBANCO S.A."

    brasil, itau = PDF_PARSERS[Source.SILOC].parse([page])

    assert (brasil.clearing_code, brasil.charge, brasil.credit_document) == (1, True, True)
    assert (itau.ispb, itau.charge, itau.credit_document) == (60701190, False, True)


def test_sitraf_reads_code_and_ispb() -> None:
    (candidate,) = PDF_PARSERS[Source.SITRAF].parse(["1 077 00416968 BANCO INTER S.A."])

    assert (candidate.clearing_code, candidate.ispb) == (77, 416968)
    assert candidate.long_name == "BANCO INTER S.A."


def test_ctc_splits_products() -> None:
    page = "1 BANCO DO BRASIL S.A. 00.000.000/0001-91 00000000 CCR, CHEQUE e DOC"

    (candidate,) = PDF_PARSERS[Source.CTC].parse([page])

    assert candidate.products == frozenset({"CCR", "CHEQUE", "DOC"})
    assert candidate.document == "00000000000191"


def test_ctc_splice_is_bounded() -> None:
    lines = ["cabeçalho", "rodapé", "1 BANCO X 00.000.000/0001-91 00000000 DOC"]

    records = list(iter_records("\n".join(lines), CTC_PATTERN, splice=True, max_spliced=2))

    assert records[0] == "cabeçalho rodapé"
    assert records[-1] == lines[-1]


def test_pcps_pcr_and_detecta_flow_lines() -> None:
    (pcps,) = PDF_PARSERS[Source.PCPS].parse(
        ["1 ITAÚ UNIBANCO S.A. 60.701.190/0001-04 60701190 Banco Folha"]
    )
    (pcr,) = PDF_PARSERS[Source.PCR].parse(
        ["1 BANCO DO BRASIL S.A. 00.000.000/0001-91 001 00000000 Sim Não"]
    )
    (flow,) = PDF_PARSERS[Source.DETECTA_FLOW].parse(
        ["1 BANCO INTER S.A. 00.416.968/0001-01 00416968 Sim"]
    )

    assert pcps.salary_portability == "Banco Folha"
    assert (pcr.clearing_code, pcr.pcr, pcr.pcrp) == (1, True, False)
    assert (flow.ispb, flow.detecta_flow) == (416968, True)


def test_split_products_handles_single_item() -> None:
    assert split_products("DOC") == frozenset({"DOC"})
    assert split_products("CCR, TED e DOC") == frozenset({"CCR", "TED", "DOC"})


def test_parse_str_csv_skips_rows_without_clearing_code() -> None:
    text = "\n".join(
        [
            "ISPB,Nome_Reduzido,Número_Código,Participa_da_Compe,"
            "Acesso_Principal,Nome_Extenso,Início_da_Operação",
            "00000000,BCO DO BRASIL S.A.,001,Sim,RSFN,Banco do Brasil S.A.,22/04/2002",
            "00038121,Selic,n/a,Não,RSFN,Banco Central do Brasil - Selic,22/04/2002",
        ]
    )

    (candidate,) = parse_str_csv(text)

    assert candidate.clearing_code == 1
    assert candidate.ispb == 0
    assert candidate.document == "00000000000191"
    assert candidate.short_name == "BCO DO BRASIL S.A."
    assert candidate.network == "RSFN"
    assert candidate.date_operation_started == "2002-04-22"


def test_parse_str_csv_skips_malformed_ispb_but_keeps_other_rows(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level("WARNING")
    text = "\n".join(
        [
            "ISPB,Nome_Reduzido,Número_Código,Participa_da_Compe,"
            "Acesso_Principal,Nome_Extenso,Início_da_Operação",
            "00416968,BCO INTER S.A.,077,Sim,RSFN,Banco Inter S.A.,04/06/2004",
            "n/a,BCO RUIM,999,Sim,RSFN,Banco Ruim S.A.,01/01/2020",
            "31872495,BCO C6 S.A.,336,Sim,RSFN,Banco C6 S.A.,10/01/2019",
        ]
    )

    candidates = parse_str_csv(text)

    assert [candidate.clearing_code for candidate in candidates] == [77, 336]
    assert [candidate.ispb for candidate in candidates] == [416968, 31872495]
    assert "malformed ISPB" in caplog.text


def test_parse_spi_csv_converts_start_to_brasilia_time() -> None:
    text = "\n".join(
        [
            "ISPB;Nome;Nome_Reduzido;Modalidade;Tipo;Inicio",
            "00416968;BANCO INTER S.A.;BCO INTER;Banco;DRCT;2020-11-03T09:30:00.000Z",
            "99999999;QUEBRADO;Q;Banco;DRCT;amanhã",
        ]
    )

    (candidate,) = parse_spi_csv(text)

    assert candidate.ispb == 416968
    assert candidate.pix_type == "DRCT"
    assert candidate.date_pix_started == "2020-11-03 06:30:00"


def test_format_pix_timestamp_assumes_utc_when_naive() -> None:
    assert format_pix_timestamp("2021-01-01 02:00:00") == "2020-12-31 23:00:00"


def test_decode_text_falls_back_to_latin_1() -> None:
    assert decode_text("Itaú".encode("latin-1")) == "Itaú"
    assert decode_text("\ufeffItaú".encode()) == "Itaú"
