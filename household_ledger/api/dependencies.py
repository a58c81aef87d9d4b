"""
Shared FastAPI dependencies.

Identity arrives in trusted headers set by the gateway in
front of this service:
    X-User-Id       the authenticated user
    X-Household-Id  the household the request acts on
    X-Request-Id    optional correlation id
"""

import uuid
from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from household_ledger.models.base import SessionLocal, get_db
from household_ledger.services.ledger_service import LedgerService
from household_ledger.services.ledger_writer import (
    LedgerWriter,
    SettingsWritePolicy,
)


@dataclass
class HouseholdContext:
    household_id: uuid.UUID
    user_id: uuid.UUID
    request_id: str


def get_request_id(
    x_request_id: str | None = Header(default=None),
) -> str:
    return x_request_id or str(uuid.uuid4())


def get_household_context(
    x_user_id: uuid.UUID = Header(),
    x_household_id: uuid.UUID = Header(),
    request_id: str = Depends(get_request_id),
    db: Session = Depends(get_db),
) -> HouseholdContext:
    """Resolve the caller and reject users outside the household."""
    if not LedgerService(db).is_member(x_household_id, x_user_id):
        raise HTTPException(
            status_code=403,
            detail="User is not a member of this household",
        )
    return HouseholdContext(
        household_id=x_household_id,
        user_id=x_user_id,
        request_id=request_id,
    )


def get_ledger_writer() -> LedgerWriter:
    """
    Build a writer over the application session factory.

    The gate is re-read from settings on every call, so an
    operator change takes effect without a restart.
    """
    return LedgerWriter(SessionLocal, SettingsWritePolicy())
