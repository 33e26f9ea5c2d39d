"""Normalization helpers shared by matching, merging and the adapters.

Names are compared case- and diacritics-insensitively. Documents (CNPJ) are
kept as bare 14-digit strings inside the domain and only masked on output.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Final

HEAD_OFFICE_BRANCH: Final[str] = "0001"
DOCUMENT_LENGTH: Final[int] = 14
ISPB_LENGTH: Final[int] = 8

# Its ISPB root is 00000000, which the root-and-name strategy otherwise treats as unset.
ROOTLESS_INSTITUTION: Final[str] = "Banco do Brasil"

_FIRST_CHECK_WEIGHTS: Final[tuple[int, ...]] = (5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)
_SECOND_CHECK_WEIGHTS: Final[tuple[int, ...]] = (6, *_FIRST_CHECK_WEIGHTS)

_NON_DIGIT: Final[re.Pattern[str]] = re.compile(r"\D")
_SHORT_NAME_SUFFIX: Final[re.Pattern[str]] = re.compile(r"\s-\s.+$")

_TRUE_TOKENS: Final[frozenset[str]] = frozenset({"sim"})
_FALSE_TOKENS: Final[frozenset[str]] = frozenset({"nao"})


def fold(value: str | None) -> str:
    """Return ``value`` without diacritics, case-folded and whitespace-collapsed."""

    if not value:
        return ""
    decomposed = unicodedata.normalize("NFKD", value)
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return " ".join(stripped.casefold().split())


def names_equal(left: str | None, right: str | None) -> bool:
    return fold(left) == fold(right)


def name_contains(haystack: str | None, needle: str | None) -> bool:
    folded_needle = fold(needle)
    return bool(folded_needle) and folded_needle in fold(haystack)


def only_digits(value: str | None) -> str:
    if not value:
        return ""
    return _NON_DIGIT.sub("", value)


def _check_digit(digits: str, weights: tuple[int, ...]) -> str:
    remainder = sum(int(digit) * weight for digit, weight in zip(digits, weights, strict=True)) % 11
    return "0" if remainder < 2 else str(11 - remainder)


def document_from_ispb(ispb: int) -> str:
    """Derive the head-office CNPJ for an ISPB root (``00000000`` -> ``00000000000191``)."""

    base = f"{ispb:0{ISPB_LENGTH}d}{HEAD_OFFICE_BRANCH}"
    first = _check_digit(base, _FIRST_CHECK_WEIGHTS)
    second = _check_digit(base + first, _SECOND_CHECK_WEIGHTS)
    return base + first + second


def normalize_document(raw: str | None) -> str:
    """Canonicalise a CNPJ-like value to 14 digits, or ``""`` when unusable.

    An 8-digit value is an ISPB root and is expanded to its head-office CNPJ.
    Masked values that lost leading zeros are left-padded.
    """

    digits = only_digits(raw)
    if len(digits) == ISPB_LENGTH:
        return document_from_ispb(int(digits))
    if ISPB_LENGTH < len(digits) <= DOCUMENT_LENGTH:
        return digits.zfill(DOCUMENT_LENGTH)
    return ""


def ispb_root(document: str | None) -> int:
    digits = only_digits(document)
    if len(digits) < ISPB_LENGTH:
        return 0
    return int(digits.zfill(DOCUMENT_LENGTH)[:ISPB_LENGTH])


def format_document(document: str | None) -> str:
    digits = only_digits(document)
    if len(digits) != DOCUMENT_LENGTH:
        return ""
    return f"{digits[:2]}.{digits[2:5]}.{digits[5:8]}/{digits[8:12]}-{digits[12:]}"


def parse_flag(token: str | None) -> bool | None:
    """Parse a "sim"/"não" token; anything else is unset."""

    folded = fold(token)
    if folded in _TRUE_TOKENS:
        return True
    if folded in _FALSE_TOKENS:
        return False
    return None


def format_flag(value: bool | None) -> str:
    if value is None:
        return ""
    return "sim" if value else "não"


def normalize_url(raw: str | None) -> str:
    if raw is None or not raw.strip() or raw.strip().upper() == "NA":
        return ""
    lowered = raw.strip().lower()
    for scheme in ("https://", "http://"):
        lowered = lowered.removeprefix(scheme)
    return f"https://{lowered}"


def derive_short_name(long_name: str) -> str:
    """Drop a trailing ``" - suffix"`` clause from a long name."""

    return _SHORT_NAME_SUFFIX.sub("", long_name.strip(), count=1).strip()
