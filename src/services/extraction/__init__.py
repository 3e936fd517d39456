"""
Device-identity extraction post-processing.

Turns noisy recognizer readings into validated IMEI, serial, capacity,
battery and model-number fields with a trail of human-readable warnings.
Everything here is pure and synchronous.
"""

from services.extraction.checksum import luhn15, luhn_check_digit
from services.extraction.confusion import (
    correct_digit_confusions,
    correct_serial_confusions,
    digits_only,
    has_ambiguous_z,
    same_confusion_class,
)
from services.extraction.formatters import (
    model_prefix,
    normalize_battery,
    normalize_capacity,
    normalize_model_number,
    normalize_text,
)
from services.extraction.models import (
    FieldSelection,
    NormalizationResult,
    NormalizedExtraction,
    RawExtraction,
)
from services.extraction.normalizer import normalize_extraction
from services.extraction.selectors import select_imei, select_serial

__all__ = [
    # Data models
    "RawExtraction",
    "NormalizedExtraction",
    "FieldSelection",
    "NormalizationResult",

    # Entry point
    "normalize_extraction",

    # Selectors
    "select_imei",
    "select_serial",

    # Formatters
    "normalize_capacity",
    "normalize_battery",
    "normalize_model_number",
    "normalize_text",
    "model_prefix",

    # Primitives
    "luhn15",
    "luhn_check_digit",
    "correct_digit_confusions",
    "correct_serial_confusions",
    "digits_only",
    "has_ambiguous_z",
    "same_confusion_class",
]
