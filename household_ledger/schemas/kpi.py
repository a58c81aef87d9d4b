"""
Pydantic schemas for balances, transfers and derived metrics.
"""

import uuid
from decimal import Decimal

from pydantic import BaseModel, Field


class BalanceRow(BaseModel):
    """Per-account balance in minor units, as produced by storage."""
    account_id: uuid.UUID | str
    balance_minor: int
    currency: str | None = None

    model_config = {"from_attributes": True}


class Transfer(BaseModel):
    """A signed movement between personal and shared contexts."""
    amount: Decimal


class MetricsRequest(BaseModel):
    """Period figures in major units, as shown on the dashboard."""
    income: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")
    transfers: list[Transfer] = Field(default_factory=list)


class MetricsResponse(BaseModel):
    cash_flow: Decimal
    savings_rate: float
    cash_flow_change_percent: float
    transfer_outflows: Decimal


class LedgerSummaryResponse(BaseModel):
    household_id: uuid.UUID
    net_worth: int
    personal_net_worth: int
    account_count: int
