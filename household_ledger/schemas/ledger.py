"""
Pydantic schemas for ledger operations.

These define the API contract: what data comes in, what
data goes out. They are separate from the database models
because the API shape and the storage shape differ.

Entry amounts are only shape-checked here (integer, upper
bound). Positivity and balance are the validator's job so
that its errors reach the caller unchanged.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, StrictInt

from household_ledger.models.enums import (
    EntryDirection,
    MemberRole,
    TransactionStatus,
)

# Largest single entry accepted over the API, in minor units.
MAX_AMOUNT_MINOR = 1_000_000_000

CURRENCY_PATTERN = r"^[A-Z]{3}$"


# --- Household Schemas ---

class HouseholdCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    owner_user_id: uuid.UUID


class HouseholdResponse(BaseModel):
    id: uuid.UUID
    name: str
    created_at: datetime

    model_config = {"from_attributes": True}


class MemberCreate(BaseModel):
    user_id: uuid.UUID
    role: MemberRole = MemberRole.MEMBER


class MemberResponse(BaseModel):
    household_id: uuid.UUID
    user_id: uuid.UUID
    role: MemberRole

    model_config = {"from_attributes": True}


# --- Account Schemas ---

class AccountCreate(BaseModel):
    """Request to create an account inside a household."""
    household_id: uuid.UUID
    name: str = Field(min_length=1, max_length=100)
    type: str = Field(min_length=1, max_length=50)
    currency: str = Field(default="MXN", pattern=CURRENCY_PATTERN)
    is_personal: bool = False
    owner_user_id: uuid.UUID | None = None


class AccountResponse(BaseModel):
    id: uuid.UUID
    household_id: uuid.UUID
    name: str
    type: str
    currency: str
    is_personal: bool
    owner_user_id: uuid.UUID | None

    model_config = {"from_attributes": True}


# --- Transaction Schemas ---

class LedgerEntryCreate(BaseModel):
    """A single debit or credit leg of a transaction."""
    account_id: uuid.UUID
    user_id: uuid.UUID | None = None
    category: str | None = Field(default=None, max_length=100)
    direction: EntryDirection
    amount_minor: StrictInt = Field(le=MAX_AMOUNT_MINOR)
    currency: str = Field(pattern=CURRENCY_PATTERN)


class TransactionCreate(BaseModel):
    """
    A complete transaction: a header plus entries that must balance.

    Two entries is the double-entry minimum. external_ref makes
    retries idempotent within a household.
    """
    household_id: uuid.UUID
    occurred_at: datetime
    description: str = Field(min_length=1, max_length=500)
    external_ref: str | None = Field(default=None, max_length=255)
    created_by: uuid.UUID | None = None
    entries: list[LedgerEntryCreate] = Field(min_length=2)


class LedgerEntryResponse(BaseModel):
    id: int
    transaction_id: uuid.UUID
    account_id: uuid.UUID
    user_id: uuid.UUID | None
    category: str | None
    direction: EntryDirection
    amount_minor: int
    currency: str

    model_config = {"from_attributes": True}


class TransactionResponse(BaseModel):
    id: uuid.UUID
    household_id: uuid.UUID
    occurred_at: datetime
    description: str
    external_ref: str | None
    created_by: uuid.UUID | None
    status: TransactionStatus
    entries: list[LedgerEntryResponse]
    created_at: datetime

    model_config = {"from_attributes": True}


class TransactionCreated(BaseModel):
    id: uuid.UUID
