"""
Aggregate entry point for normalizing one recognizer result.

Single pass, no state: IMEI first, then serial, then the plain formatters.
Warnings keep that order.
"""

import logging
from typing import Any, Dict, Union

from services.extraction.formatters import (
    normalize_battery,
    normalize_capacity,
    normalize_model_number,
    normalize_text,
)
from services.extraction.models import (
    NormalizationResult,
    NormalizedExtraction,
    RawExtraction,
)
from services.extraction.selectors import select_imei, select_serial

logger = logging.getLogger(__name__)


def _model_number(raw: RawExtraction):
    normalized = normalize_model_number(raw.model_number)
    if normalized:
        return normalized
    for candidate in raw.model_candidates:
        normalized = normalize_model_number(candidate)
        if normalized:
            return normalized
    return None


def normalize_extraction(
    raw: Union[RawExtraction, NormalizedExtraction, Dict[str, Any], None],
) -> NormalizationResult:
    """Turn an untrusted recognizer result into validated fields plus warnings."""
    if isinstance(raw, NormalizedExtraction):
        raw = RawExtraction(**raw.to_dict())
    elif not isinstance(raw, RawExtraction):
        raw = RawExtraction.from_dict(raw)

    warnings = []
    imei = serial = None

    if raw.imei or raw.imei_candidates:
        selection = select_imei(raw.imei, raw.imei_candidates)
        imei = selection.value or None
        warnings.extend(selection.warnings)

    if raw.serial or raw.serial_candidates:
        selection = select_serial(raw.serial, raw.serial_candidates)
        serial = selection.value or None
        warnings.extend(selection.warnings)

    data = NormalizedExtraction(
        model_name=normalize_text(raw.model_name),
        capacity=normalize_capacity(raw.capacity),
        color=normalize_text(raw.color),
        model_number=_model_number(raw),
        imei=imei,
        serial=serial,
        battery=normalize_battery(raw.battery),
    )

    if warnings:
        logger.debug(f"Extraction normalized with {len(warnings)} warning(s): {warnings}")
    return NormalizationResult(data=data, warnings=warnings)
