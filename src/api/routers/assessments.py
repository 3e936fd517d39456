"""API router for intake assessments."""

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from models import Assessment, get_db
from models.schemas import AssessmentCreate, AssessmentResponse, AssessmentSaved
from services.assessment_service import get_assessment, save_assessment
from services.delivery_note import render_delivery_note

router = APIRouter()


def _get_or_404(db: Session, assessment_id: int) -> Assessment:
    assessment = get_assessment(db, assessment_id)
    if not assessment:
        raise HTTPException(
            status_code=404,
            detail={
                "error": {
                    "code": "ASSESSMENT_NOT_FOUND",
                    "message": f"No assessment found with ID '{assessment_id}'",
                }
            },
        )
    return assessment


@router.post("", response_model=AssessmentSaved, status_code=201)
async def create_assessment(
    payload: AssessmentCreate,
    db: Session = Depends(get_db),
) -> AssessmentSaved:
    """
    Save an intake assessment.

    Args:
        payload: Customer, device and notification text from the intake form
        db: Database session

    Returns:
        Ids of the customer, device and assessment rows
    """
    saved = save_assessment(db, payload)
    return AssessmentSaved(
        customer_id=saved.customer_id,
        device_id=saved.device_id,
        assessment_id=saved.assessment_id,
        assessed_at=saved.assessed_at,
    )


@router.get("/{assessment_id}", response_model=AssessmentResponse)
async def read_assessment(
    assessment_id: int,
    db: Session = Depends(get_db),
) -> Assessment:
    return _get_or_404(db, assessment_id)


@router.get("/{assessment_id}/delivery-note")
async def download_delivery_note(
    assessment_id: int,
    db: Session = Depends(get_db),
) -> Response:
    """Render the delivery note PDF for a completed assessment."""
    assessment = _get_or_404(db, assessment_id)
    if assessment.estimated_price is None:
        raise HTTPException(
            status_code=400,
            detail={
                "error": {
                    "code": "PRICE_MISSING",
                    "message": "Assessment has no estimated price",
                }
            },
        )

    customer = assessment.customer.name if assessment.customer else ""
    model = ""
    if assessment.device:
        model = " ".join(
            part for part in (assessment.device.model_name, assessment.device.capacity) if part
        )
    pdf = render_delivery_note(customer, model, assessment.estimated_price)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="delivery-{assessment_id}.pdf"'},
    )
