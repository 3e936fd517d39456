"""
Data models for device-identity extraction.

``RawExtraction`` is the untrusted recognizer output, ``NormalizedExtraction``
holds values that satisfy their field's format. Absent values are ``None``.
"""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Optional

_KEY_ALIASES = {
    "modelName": "model_name",
    "modelNumber": "model_number",
    "batteryPercent": "battery",
    "battery_percent": "battery",
    "imeiCandidates": "imei_candidates",
    "serialCandidates": "serial_candidates",
    "modelCandidates": "model_candidates",
}

_CANDIDATE_FIELDS = ("imei_candidates", "serial_candidates", "model_candidates")


def _coerce_scalar(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, (str, int, float)):
        return str(value)
    return None


def _coerce_candidates(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    coerced = [_coerce_scalar(item) for item in value]
    return [item for item in coerced if item]


@dataclass
class RawExtraction:
    """Untrusted recognizer output for a single screenshot."""
    model_name: Optional[str] = None
    capacity: Optional[str] = None
    color: Optional[str] = None
    model_number: Optional[str] = None
    imei: Optional[str] = None
    serial: Optional[str] = None
    battery: Optional[str] = None
    imei_candidates: List[str] = field(default_factory=list)
    serial_candidates: List[str] = field(default_factory=list)
    model_candidates: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "RawExtraction":
        """Build from loosely-typed JSON, accepting camelCase recognizer keys."""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            name = _KEY_ALIASES.get(key, key)
            if name not in known or (name in values and values[name] not in (None, [])):
                continue
            if name in _CANDIDATE_FIELDS:
                values[name] = _coerce_candidates(value)
            else:
                values[name] = _coerce_scalar(value)
        return cls(**values)


@dataclass
class NormalizedExtraction:
    """Normalized device-identity fields."""
    model_name: Optional[str] = None
    capacity: Optional[str] = None
    color: Optional[str] = None
    model_number: Optional[str] = None
    imei: Optional[str] = None
    serial: Optional[str] = None
    battery: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        """Only the fields that were determined."""
        return {key: value for key, value in asdict(self).items() if value is not None}


@dataclass
class FieldSelection:
    """Best-effort value for one field plus the caveats attached to it."""
    value: str = ""
    warnings: List[str] = field(default_factory=list)


@dataclass
class NormalizationResult:
    data: NormalizedExtraction
    warnings: List[str] = field(default_factory=list)
