"""Feed endpoint configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import env_int, optional_env

BCB_BASE_URL: Final[str] = "https://www.bcb.gov.br/content/estabilidadefinanceira"
NUCLEA_BASE_URL: Final[str] = "https://www2.nuclea.com.br"

DEFAULT_STR_URL: Final[str] = f"{BCB_BASE_URL}/str1/ParticipantesSTR.csv"
DEFAULT_SPI_URL_TEMPLATE: Final[str] = f"{BCB_BASE_URL}/spi/participantes-spi-{{date:%Y%m%d}}.csv"
DEFAULT_SLC_URL: Final[str] = f"{NUCLEA_BASE_URL}/Monitoramento/Participantes%20Homologados.pdf"
DEFAULT_SILOC_URL: Final[str] = f"{NUCLEA_BASE_URL}/Monitoramento/SILOC.pdf"
DEFAULT_SITRAF_URL: Final[str] = (
    f"{NUCLEA_BASE_URL}/Monitoramento/Rela%C3%A7%C3%A3o%20de%20Clientes%20SITRAF.pdf"
)
DEFAULT_CTC_URL: Final[str] = f"{NUCLEA_BASE_URL}/SAP/Rela%C3%A7%C3%A3o%20de%20Clientes%20CTC.pdf"
DEFAULT_PCPS_URL: Final[str] = (
    f"{NUCLEA_BASE_URL}/SAP/Rela%C3%A7%C3%A3o%20de%20Participantes%20PCPS.pdf"
)
DEFAULT_CQL_URL: Final[str] = (
    f"{NUCLEA_BASE_URL}/SAP/Rela%C3%A7%C3%A3o%20de%20Participantes%20CQL.pdf"
)
DEFAULT_DETECTA_FLOW_URL: Final[str] = (
    f"{NUCLEA_BASE_URL}/SAP/Rela%C3%A7%C3%A3o%20de%20Participantes%20-%20Detecta%20Flow.pdf"
)
DEFAULT_PCR_URL: Final[str] = f"{NUCLEA_BASE_URL}/SAP/Rela%C3%A7%C3%A3o%20de%20Clientes%20PCR.pdf"
DEFAULT_SPI_LOOKBACK_DAYS: Final[int] = 10


@dataclass(frozen=True, slots=True)
class FeedConfig:
    str_url: str = DEFAULT_STR_URL
    spi_url_template: str = DEFAULT_SPI_URL_TEMPLATE
    spi_lookback_days: int = DEFAULT_SPI_LOOKBACK_DAYS
    slc_url: str = DEFAULT_SLC_URL
    siloc_url: str = DEFAULT_SILOC_URL
    sitraf_url: str = DEFAULT_SITRAF_URL
    ctc_url: str = DEFAULT_CTC_URL
    pcps_url: str = DEFAULT_PCPS_URL
    cql_url: str = DEFAULT_CQL_URL
    detecta_flow_url: str = DEFAULT_DETECTA_FLOW_URL
    pcr_url: str = DEFAULT_PCR_URL


def get_feed_config() -> FeedConfig:
    """Build a :class:`FeedConfig`, honouring ``BANKMERGE_<FEED>_URL`` overrides."""

    return FeedConfig(
        str_url=optional_env("BANKMERGE_STR_URL") or DEFAULT_STR_URL,
        spi_url_template=optional_env("BANKMERGE_SPI_URL_TEMPLATE") or DEFAULT_SPI_URL_TEMPLATE,
        spi_lookback_days=env_int("BANKMERGE_SPI_LOOKBACK_DAYS", DEFAULT_SPI_LOOKBACK_DAYS),
        slc_url=optional_env("BANKMERGE_SLC_URL") or DEFAULT_SLC_URL,
        siloc_url=optional_env("BANKMERGE_SILOC_URL") or DEFAULT_SILOC_URL,
        sitraf_url=optional_env("BANKMERGE_SITRAF_URL") or DEFAULT_SITRAF_URL,
        ctc_url=optional_env("BANKMERGE_CTC_URL") or DEFAULT_CTC_URL,
        pcps_url=optional_env("BANKMERGE_PCPS_URL") or DEFAULT_PCPS_URL,
        cql_url=optional_env("BANKMERGE_CQL_URL") or DEFAULT_CQL_URL,
        detecta_flow_url=optional_env("BANKMERGE_DETECTAFLOW_URL") or DEFAULT_DETECTA_FLOW_URL,
        pcr_url=optional_env("BANKMERGE_PCR_URL") or DEFAULT_PCR_URL,
    )
