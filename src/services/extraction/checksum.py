"""IMEI check-digit validation (Luhn over exactly 15 digits)."""

import re

_FIFTEEN_DIGITS = re.compile(r"^[0-9]{15}$")


def _luhn_sum(digits: str) -> int:
    total = 0
    for index, char in enumerate(digits):
        n = int(char)
        if index % 2 == 1:
            n *= 2
            if n > 9:
                n -= 9
        total += n
    return total


def luhn15(digits: str) -> bool:
    """Return True if ``digits`` is 15 ASCII digits with a valid Luhn sum."""
    if not digits or not _FIFTEEN_DIGITS.match(digits):
        return False
    return _luhn_sum(digits) % 10 == 0


def luhn_check_digit(body: str) -> str:
    """Compute the 15th digit for a 14-digit IMEI body."""
    if not re.match(r"^[0-9]{14}$", body or ""):
        raise ValueError("IMEI body must be exactly 14 digits")
    partial = _luhn_sum(body + "0")
    return str((10 - partial % 10) % 10)
