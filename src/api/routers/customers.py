"""API router for recent customers."""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from models import Customer, get_db
from models.schemas import CustomerResponse
from services.assessment_service import list_customers

router = APIRouter()


@router.get("", response_model=List[CustomerResponse])
async def recent_customers(
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
) -> List[Customer]:
    """Most recently registered customers, newest first."""
    return list_customers(db, limit=limit)
