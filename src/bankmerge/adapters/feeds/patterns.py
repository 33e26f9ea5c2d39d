"""Line patterns for the PDF participant lists published by Nuclea.

Every pattern exposes a ``code`` group holding the row number printed in the
list, used to detect rows the text extraction lost or merged.
"""

from __future__ import annotations

import re
from typing import Final

_CNPJ: Final[str] = r"\d{1,2}\.\d{3}\.\d{3}(?:.|/)\d{4}(?:[-|·.\s]{1,2})\d{2}"
_CNPJ_WIDE: Final[str] = r"\d{1,2}\.\d{3}\.\d{3}(?:.|/)\d{4}(?:[-|·.\s]{1,3})\d{2}"

SLC_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"^(?P<code>\d{{1,3}})\s(?P<cnpj>{_CNPJ})\s(?P<nome>.+?)(?:[\s|X]){{2,7}}(?:Confidencial)?$",
    re.IGNORECASE,
)

SILOC_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?P<code>\d{1,3})\s(?P<compe>\d{3})\s(?P<ispb>\d{8})\s(?P<cobranca>sim|não)\s"
    r"(?P<doc>sim|não)\s(?P<nome>.+?)$",
    re.IGNORECASE,
)

SITRAF_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?P<code>\d{1,3})\s(?P<compe>\d{3})\s(?P<ispb>\d{8})\s(?P<nome>.+?)$",
    re.IGNORECASE,
)

CTC_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"^\s?(?P<code>\d{{1,3}})\s(?P<nome>.+?)\s(?P<cnpj>{_CNPJ})\s+(?P<ispb>\d{{8}})\s"
    r"(?P<produtos>.+?)$",
    re.IGNORECASE,
)

PCPS_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"^(?P<code>\d{{1,3}})\s(?P<nome>.+?)\s(?P<cnpj>{_CNPJ_WIDE})\s+(?P<ispb>\d{{7,8}})\s"
    r"(?P<adesao>.+?)$",
    re.IGNORECASE,
)

CQL_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?P<code>\d{1,3})\s(?P<nome>.+?)\s(?P<ispb>\d{7,8})\s(?P<tipo>.+?)$",
    re.IGNORECASE,
)

DETECTA_FLOW_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"^(?P<code>\d{{1,3}})\s(?P<nome>.+?)\s(?P<cnpj>{_CNPJ})\s+(?P<ispb>\d{{7,8}})(?:.+?)$",
    re.IGNORECASE,
)

PCR_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"^(?P<code>\d{{1,3}})\s(?P<nome>.+?)\s(?P<cnpj>{_CNPJ})\s+(?P<compe>\d{{3}})\s+"
    r"(?P<ispb>\d{7,8})\s(?P<pcr>.{3})\s(?P<pcrp>.{3})(?:.+)?$",
    re.IGNORECASE,
)
