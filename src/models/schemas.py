from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from services.extraction import RawExtraction


def _stringify(value: Any) -> Any:
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return value


class OcrRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image_base64: str = Field(
        ...,
        validation_alias=AliasChoices("image_base64", "imageBase64"),
        description="Screenshot as a data URL or bare base64 string",
    )
    mode: Optional[str] = None


class RawExtractionPayload(BaseModel):
    """Recognizer output as received over the wire (camelCase or snake_case)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    model_name: Optional[str] = Field(None, validation_alias=AliasChoices("model_name", "modelName"))
    capacity: Optional[str] = None
    color: Optional[str] = None
    model_number: Optional[str] = Field(None, validation_alias=AliasChoices("model_number", "modelNumber"))
    imei: Optional[str] = None
    serial: Optional[str] = None
    battery: Optional[str] = Field(
        None, validation_alias=AliasChoices("battery", "batteryPercent", "battery_percent")
    )
    imei_candidates: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("imei_candidates", "imeiCandidates")
    )
    serial_candidates: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("serial_candidates", "serialCandidates")
    )
    model_candidates: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("model_candidates", "modelCandidates")
    )

    @field_validator("model_name", "capacity", "color", "model_number", "imei", "serial", "battery", mode="before")
    @classmethod
    def _coerce_scalar(cls, value: Any) -> Any:
        return _stringify(value)

    @field_validator("imei_candidates", "serial_candidates", "model_candidates", mode="before")
    @classmethod
    def _coerce_candidates(cls, value: Any) -> Any:
        if value is None:
            return []
        if not isinstance(value, list):
            return []
        return [str(_stringify(item)) for item in value if item not in (None, "") and not isinstance(item, bool)]

    def to_raw(self) -> RawExtraction:
        return RawExtraction(**self.model_dump())


class ExtractionResponse(BaseModel):
    ok: bool = True
    fields: Dict[str, str]
    warnings: List[str]


class CustomerIn(BaseModel):
    name: Optional[str] = None
    name_kana: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    birthday: Optional[str] = None
    job: Optional[str] = None


class DeviceIn(BaseModel):
    model_name: Optional[str] = None
    model_number: Optional[str] = None
    imei: Optional[str] = None
    serial: Optional[str] = None
    color: Optional[str] = None
    capacity: Optional[str] = None
    carrier: Optional[str] = None
    sim_lock: Optional[str] = None
    battery: Optional[str] = None
    condition: Optional[str] = None
    max_price: Optional[int] = Field(None, ge=0)
    estimated_price: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None
    ocr_warnings: List[str] = Field(default_factory=list)


class AssessmentCreate(BaseModel):
    customer: CustomerIn = Field(default_factory=CustomerIn)
    device: DeviceIn = Field(default_factory=DeviceIn)
    chatwork_text: Optional[str] = None


class AssessmentSaved(BaseModel):
    ok: bool = True
    customer_id: Optional[int]
    device_id: Optional[int]
    assessment_id: int
    assessed_at: datetime


class CustomerResponse(BaseModel):
    id: int
    name: str
    name_kana: Optional[str]
    phone: Optional[str]
    address: Optional[str]
    birthday: Optional[str]
    job: Optional[str]
    created_at: datetime

    model_config = {"from_attributes": True}


class DeviceResponse(BaseModel):
    id: int
    model_name: Optional[str]
    model_number: Optional[str]
    imei: Optional[str]
    serial: Optional[str]
    color: Optional[str]
    capacity: Optional[str]
    carrier: Optional[str]
    battery: Optional[str]
    condition: Optional[str]
    ocr_warnings: Optional[List[str]]

    model_config = {"from_attributes": True}


class AssessmentResponse(BaseModel):
    id: int
    customer_id: Optional[int]
    device_id: Optional[int]
    chatwork_text: Optional[str]
    max_price: Optional[int]
    estimated_price: Optional[int]
    notes: Optional[str]
    assessed_at: datetime
    customer: Optional[CustomerResponse]
    device: Optional[DeviceResponse]

    model_config = {"from_attributes": True}


class PriceSearchRequest(BaseModel):
    model_prefix: str = Field(..., min_length=1, validation_alias=AliasChoices("model_prefix", "modelPrefix"))
    carrier: Optional[str] = None


class PriceSearchResponse(BaseModel):
    ok: bool = True
    model_prefix: str
    carrier_slug: str
    search_url: str
    first_link: Optional[str]


class MaxPriceRequest(BaseModel):
    query: str = Field(..., min_length=1)


class MaxPriceResponse(BaseModel):
    price: Optional[int]


class GeoPriceResponse(BaseModel):
    ok: bool = True
    geo_url: str
    prices: Dict[str, str]
    carrier: Optional[str]


class ChatworkMessageRequest(BaseModel):
    body: Optional[str] = None
    device: Optional[DeviceIn] = None


class ChatworkMessageResponse(BaseModel):
    ok: bool = True
    message_id: Optional[str]
