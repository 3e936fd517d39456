"""
Candidate reconciliation for IMEI and serial numbers.

Both selectors always return a best-effort value. Anything short of a
confident reading is reported through warnings, never by dropping the value.
"""

import re
from typing import Iterable, List, Optional

from services.extraction.checksum import luhn15
from services.extraction.confusion import (
    correct_digit_confusions,
    correct_serial_confusions,
    digits_only,
    has_ambiguous_z,
    same_confusion_class,
)
from services.extraction.models import FieldSelection

IMEI_LENGTH = 15
SERIAL_LENGTH = 12

CONFUSION_PENALTY = 0.5
LENGTH_PENALTY = 0.5

_NON_SERIAL_CHARS = re.compile(r"[^A-Z0-9]+")


def _readings(raw: Optional[str], candidates: Optional[Iterable[str]]) -> List[str]:
    readings = [raw] if raw else []
    readings.extend(c for c in (candidates or []) if c)
    return readings


def _dedupe(values: Iterable[str]) -> List[str]:
    seen = set()
    unique = []
    for value in values:
        if value and value not in seen:
            seen.add(value)
            unique.append(value)
    return unique


def _imei_pool(raw: Optional[str], candidates: Optional[Iterable[str]]) -> List[str]:
    return _dedupe(
        digits_only(correct_digit_confusions(reading))
        for reading in _readings(raw, candidates)
    )


def select_imei(
    raw: Optional[str] = None,
    candidates: Optional[Iterable[str]] = None,
) -> FieldSelection:
    """
    Pick the most trustworthy IMEI reading.

    Preference: 15 digits with a valid check digit, then any 15 digits, then
    the longest digit string.
    """
    pool = _imei_pool(raw, candidates)
    if not pool:
        return FieldSelection("", ["IMEI: no IMEI could be extracted"])

    full_length = [d for d in pool if len(d) == IMEI_LENGTH]
    for digits in full_length:
        if luhn15(digits):
            return FieldSelection(digits, [])
    if full_length:
        return FieldSelection(
            full_length[0],
            ["IMEI: checksum validation failed, please verify the digits"],
        )

    longest = max(pool, key=len)
    return FieldSelection(
        longest,
        [f"IMEI: found {len(longest)} digits, expected {IMEI_LENGTH}"],
    )


def normalize_serial_reading(text: Optional[str]) -> str:
    cleaned = _NON_SERIAL_CHARS.sub("", (text or "").upper())
    return correct_serial_confusions(cleaned)


def _serial_distance(candidate: str, reference: str) -> float:
    score = float(abs(len(candidate) - len(reference)))
    for a, b in zip(candidate, reference):
        if a == b:
            continue
        score += CONFUSION_PENALTY if same_confusion_class(a, b) else 1.0
    return score


def _serial_score(candidate: str, reference: str) -> float:
    length_deviation = abs(len(candidate) - SERIAL_LENGTH)
    if not reference:
        return float(length_deviation)
    return _serial_distance(candidate, reference) + LENGTH_PENALTY * length_deviation


def select_serial(
    raw: Optional[str] = None,
    candidates: Optional[Iterable[str]] = None,
) -> FieldSelection:
    """
    Pick the serial reading closest to a 12-character manufacturer serial.

    A 12-character reading wins outright. Otherwise the alternatives are
    ranked against the primary reading, and the primary reading is only
    kept when there are no alternatives.
    """
    reference = normalize_serial_reading(raw)
    alternatives = _dedupe(normalize_serial_reading(c) for c in (candidates or []) if c)
    pool = _dedupe([reference] + alternatives)
    if not pool:
        return FieldSelection("", ["Serial: no serial number could be extracted"])

    chosen = next((s for s in pool if len(s) == SERIAL_LENGTH), None)
    if chosen is None and alternatives:
        # min() keeps the earliest reading on ties
        chosen = min(alternatives, key=lambda s: _serial_score(s, reference))
    if chosen is None:
        chosen = reference

    warnings = []
    if len(chosen) != SERIAL_LENGTH:
        warnings.append(
            f"Serial: found {len(chosen)} characters, expected {SERIAL_LENGTH}"
        )
    if has_ambiguous_z(chosen):
        warnings.append(
            "Serial: contains 'Z' next to digits, please verify it is not a '2'"
        )
    return FieldSelection(chosen, warnings)
