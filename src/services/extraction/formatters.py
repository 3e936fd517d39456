"""Format normalizers for fields that need no candidate reconciliation."""

import re
import unicodedata
from typing import Optional

_WHITESPACE = re.compile(r"\s+")
_CAPACITY_WITH_UNIT = re.compile(r"^(\d+(?:\.\d+)?)(GB|TB)", re.IGNORECASE)
_LEADING_NUMBER = re.compile(r"^(\d+(?:\.\d+)?)")
_PERCENT_RUN = re.compile(r"(?<!\d)(\d{1,3})\s*%")
_BARE_RUN = re.compile(r"(?<!\d)(\d{2,3})(?!\d)")

FULLWIDTH_OFFSET = 0xFEE0
_FULLWIDTH_TABLE = {code: code - FULLWIDTH_OFFSET for code in range(0xFF01, 0xFF5F)}
_FULLWIDTH_TABLE[0x3000] = ord(" ")


def to_halfwidth(text: str) -> str:
    return text.translate(_FULLWIDTH_TABLE)


def normalize_text(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    trimmed = text.strip()
    return trimmed or None


def normalize_capacity(text: Optional[str]) -> Optional[str]:
    """
    Normalize storage capacity to ``<number>GB`` / ``<number>TB``.

    Unrecognized text is passed through trimmed, capacity is informational
    only and never produces warnings.
    """
    trimmed = normalize_text(text)
    if trimmed is None:
        return None

    compact = _WHITESPACE.sub("", unicodedata.normalize("NFKC", trimmed))
    match = _CAPACITY_WITH_UNIT.match(compact)
    if match:
        return f"{match.group(1)}{match.group(2).upper()}"

    match = _LEADING_NUMBER.match(compact)
    if match:
        return f"{match.group(1)}GB"

    return trimmed


def normalize_battery(text: Optional[str]) -> Optional[str]:
    """Extract a battery percentage such as ``85%`` from free text."""
    if not text:
        return None
    folded = unicodedata.normalize("NFKC", text)
    match = _PERCENT_RUN.search(folded) or _BARE_RUN.search(folded)
    if not match:
        return None
    return f"{match.group(1)}%"


def normalize_model_number(text: Optional[str]) -> Optional[str]:
    """
    Half-width the model number and collapse whitespace runs to one space.

    A single space is kept so region suffixes survive (``MLJH3 J/A``).
    """
    if text is None:
        return None
    collapsed = _WHITESPACE.sub(" ", to_halfwidth(text)).strip()
    return collapsed or None


def model_prefix(model_number: Optional[str]) -> Optional[str]:
    """Leading model token used for price searches, ``MLJH3 J/A`` -> ``MLJH3``."""
    normalized = normalize_model_number(model_number)
    if not normalized:
        return None
    return normalized.split(" ", 1)[0]
