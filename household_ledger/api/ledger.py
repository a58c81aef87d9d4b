"""
Ledger API endpoints.

The API layer is thin: it handles HTTP concerns (status
codes, response shapes) and delegates business logic to the
LedgerService (reads, setup) and the LedgerWriter (posting).
"""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from household_ledger.api.dependencies import (
    HouseholdContext,
    get_household_context,
    get_ledger_writer,
)
from household_ledger.models.base import get_db
from household_ledger.schemas.kpi import BalanceRow, LedgerSummaryResponse
from household_ledger.schemas.ledger import (
    AccountCreate,
    AccountResponse,
    TransactionCreate,
    TransactionCreated,
    TransactionResponse,
)
from household_ledger.services import kpi
from household_ledger.services.exceptions import (
    PersistenceFailed,
    ValidationFailed,
    WritesDisabled,
)
from household_ledger.services.ledger_service import LedgerService
from household_ledger.services.ledger_writer import LedgerWriter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ledger", tags=["Ledger"])


@router.get("/accounts")
def list_accounts(
    owner_id: uuid.UUID | None = None,
    ctx: HouseholdContext = Depends(get_household_context),
    db: Session = Depends(get_db),
):
    """Accounts of the caller's household, optionally one owner's."""
    accounts = LedgerService(db).get_accounts(ctx.household_id, owner_id)
    return {
        "data": [AccountResponse.model_validate(a) for a in accounts],
    }


@router.post("/accounts", response_model=AccountResponse, status_code=201)
def create_account(
    request: AccountCreate,
    ctx: HouseholdContext = Depends(get_household_context),
    db: Session = Depends(get_db),
):
    if request.household_id != ctx.household_id:
        raise HTTPException(status_code=400, detail="household_mismatch")

    service = LedgerService(db)
    try:
        account = service.create_account(request)
        db.commit()
        return account
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/balances")
def list_balances(
    ctx: HouseholdContext = Depends(get_household_context),
    db: Session = Depends(get_db),
):
    """Per-account balances in minor units."""
    balances: list[BalanceRow] = LedgerService(db).get_balances(
        ctx.household_id
    )
    return {"data": balances}


@router.get("/summary", response_model=LedgerSummaryResponse)
def ledger_summary(
    ctx: HouseholdContext = Depends(get_household_context),
    db: Session = Depends(get_db),
):
    """
    Household net worth and the caller's personal net worth.

    Both are in major units, converted once from the summed
    minor-unit balances.
    """
    service = LedgerService(db)
    household_rows = service.get_balances(ctx.household_id)
    personal_rows = service.get_balances(ctx.household_id, ctx.user_id)

    return LedgerSummaryResponse(
        household_id=ctx.household_id,
        net_worth=kpi.consolidate(household_rows),
        personal_net_worth=kpi.net_worth(personal_rows),
        account_count=len(household_rows),
    )


@router.post("/transactions", status_code=201)
def create_transaction(
    request: TransactionCreate,
    ctx: HouseholdContext = Depends(get_household_context),
    writer: LedgerWriter = Depends(get_ledger_writer),
):
    """
    Post a balanced transaction.

    503 when the ledger write gate is closed, 400 for entries
    that are not positive or do not balance.
    """
    if request.household_id != ctx.household_id:
        return JSONResponse(
            status_code=400,
            content={"error": "household_mismatch", "requestId": ctx.request_id},
        )

    try:
        txn_id = writer.create_transaction(
            request,
            created_by=ctx.user_id,
            request_id=ctx.request_id,
        )
    except WritesDisabled:
        return JSONResponse(
            status_code=503,
            content={
                "error": "ledger_write_disabled",
                "message": "Writing to the ledger is currently disabled.",
                "requestId": ctx.request_id,
            },
        )
    except ValidationFailed as e:
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": str(e),
                "requestId": ctx.request_id,
            },
        )
    except PersistenceFailed:
        logger.exception("Transaction write failed (request %s)", ctx.request_id)
        return JSONResponse(
            status_code=500,
            content={"error": "internal_error", "requestId": ctx.request_id},
        )

    return {"data": TransactionCreated(id=txn_id)}


@router.get("/transactions/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: uuid.UUID,
    ctx: HouseholdContext = Depends(get_household_context),
    db: Session = Depends(get_db),
):
    service = LedgerService(db)
    try:
        return service.get_transaction(ctx.household_id, transaction_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
