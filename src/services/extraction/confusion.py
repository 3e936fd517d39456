"""
OCR character-confusion tables.

Letters are only ever coerced toward digits. IMEIs get the full table,
serial numbers get a narrower one because real serials contain letters.
"""

import re

DIGIT_CONFUSIONS = {
    "O": "0",
    "o": "0",
    "I": "1",
    "l": "1",
    "L": "1",
    "S": "5",
    "s": "5",
}

SERIAL_CONFUSIONS = {
    "O": "0",
    "I": "1",
}

CONFUSION_CLASSES = (
    frozenset("0O"),
    frozenset("1IL"),
    frozenset("2Z"),
    frozenset("5S"),
    frozenset("8B"),
)

_NON_DIGIT = re.compile(r"[^0-9]+")
_Z_RUN = re.compile(r"Z+")


def _translate(text: str, table: dict) -> str:
    return "".join(table.get(char, char) for char in text)


def correct_digit_confusions(text: str) -> str:
    if not text:
        return ""
    return _translate(text, DIGIT_CONFUSIONS)


def digits_only(text: str) -> str:
    return _NON_DIGIT.sub("", text or "")


def correct_serial_confusions(text: str) -> str:
    if not text:
        return ""
    return _translate(text, SERIAL_CONFUSIONS)


def same_confusion_class(a: str, b: str) -> bool:
    if a == b:
        return True
    return any(a in group and b in group for group in CONFUSION_CLASSES)


def has_ambiguous_z(text: str) -> bool:
    """True when a run of ``Z`` touches a digit, where ``Z``/``2`` is a likely misread."""
    if not text:
        return False
    for match in _Z_RUN.finditer(text):
        before = text[match.start() - 1] if match.start() > 0 else ""
        after = text[match.end()] if match.end() < len(text) else ""
        if before.isdigit() or after.isdigit():
            return True
    return False
