"""Persistence of intake assessments (customer, device and assessment rows)."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from models import Assessment, Customer, Device
from models.schemas import AssessmentCreate, CustomerIn, DeviceIn
from services.extraction import RawExtraction, normalize_extraction

logger = logging.getLogger(__name__)

DEFAULT_CUSTOMER_NAME = "お客様"
IDENTITY_FIELDS = ("model_name", "capacity", "color", "model_number", "imei", "serial", "battery")
VALIDATED_FIELDS = ("imei", "serial")


@dataclass
class AssessmentSaveResult:
    customer_id: Optional[int]
    device_id: Optional[int]
    assessment_id: int
    assessed_at: datetime


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


def _upsert_customer(db: Session, customer: CustomerIn) -> Customer:
    phone = _clean(customer.phone)
    if phone:
        existing = db.query(Customer).filter(Customer.phone == phone).first()
        if existing:
            for field in ("name", "name_kana", "address", "job"):
                value = getattr(customer, field)
                if value is not None:
                    setattr(existing, field, value)
            logger.info(f"Updated customer {existing.id} matched by phone")
            return existing

    record = Customer(
        name=_clean(customer.name) or DEFAULT_CUSTOMER_NAME,
        name_kana=customer.name_kana,
        address=customer.address,
        phone=phone,
        job=customer.job,
        birthday=customer.birthday,
    )
    db.add(record)
    db.flush()
    return record


def _dedupe(warnings: List[str]) -> List[str]:
    return list(dict.fromkeys(warnings))


def _build_device(device: DeviceIn, customer_id: Optional[int]) -> Device:
    raw = RawExtraction(**{field: getattr(device, field) for field in IDENTITY_FIELDS})
    result = normalize_extraction(raw)
    normalized = result.data.to_dict()

    identity = {
        field: normalized.get(field) or _clean(getattr(device, field))
        for field in IDENTITY_FIELDS
    }
    # only checked readings are stored for these
    for field in VALIDATED_FIELDS:
        identity[field] = normalized.get(field)
    warnings = _dedupe(device.ocr_warnings + result.warnings)

    return Device(
        customer_id=customer_id,
        carrier=device.carrier,
        sim_lock=device.sim_lock,
        condition=device.condition,
        max_price=device.max_price,
        estimated_price=device.estimated_price,
        notes=device.notes,
        ocr_warnings=warnings or None,
        **identity,
    )


def save_assessment(db: Session, payload: AssessmentCreate) -> AssessmentSaveResult:
    """
    Store one intake: upsert the customer, insert the device and the assessment.

    Customers are matched by phone number; without a phone a new customer
    row is always created.
    """
    try:
        customer = _upsert_customer(db, payload.customer)
        device = _build_device(payload.device, customer.id)
        db.add(device)
        db.flush()

        assessment = Assessment(
            customer_id=customer.id,
            device_id=device.id,
            chatwork_text=payload.chatwork_text,
            max_price=payload.device.max_price,
            estimated_price=payload.device.estimated_price,
            notes=payload.device.notes,
        )
        db.add(assessment)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(assessment)
    logger.info(
        f"Saved assessment {assessment.id} (customer {customer.id}, device {device.id})"
    )
    return AssessmentSaveResult(
        customer_id=customer.id,
        device_id=device.id,
        assessment_id=assessment.id,
        assessed_at=assessment.assessed_at,
    )


def get_assessment(db: Session, assessment_id: int) -> Optional[Assessment]:
    return db.query(Assessment).filter(Assessment.id == assessment_id).first()


def list_customers(db: Session, limit: int = 50) -> List[Customer]:
    return (
        db.query(Customer)
        .order_by(Customer.created_at.desc(), Customer.id.desc())
        .limit(limit)
        .all()
    )
