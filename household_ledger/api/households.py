"""
Household setup endpoints.
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from household_ledger.models.base import get_db
from household_ledger.schemas.ledger import (
    HouseholdCreate,
    HouseholdResponse,
    MemberCreate,
    MemberResponse,
)
from household_ledger.services.ledger_service import LedgerService

router = APIRouter(prefix="/households", tags=["Households"])


@router.post("", response_model=HouseholdResponse, status_code=201)
def create_household(
    request: HouseholdCreate,
    db: Session = Depends(get_db),
):
    """Create a household; the given user becomes its owner."""
    service = LedgerService(db)
    household = service.create_household(request)
    db.commit()
    return household


@router.post(
    "/{household_id}/members",
    response_model=MemberResponse,
    status_code=201,
)
def add_member(
    household_id: uuid.UUID,
    request: MemberCreate,
    db: Session = Depends(get_db),
):
    service = LedgerService(db)
    try:
        member = service.add_member(household_id, request.user_id, request.role)
        db.commit()
        return member
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
