"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from household_ledger.models.base import Base
from household_ledger.models.enums import (
    EntryDirection,
    TransactionStatus,
    MemberRole,
)
from household_ledger.models.audit_log import AuditLog
from household_ledger.models.household import Household, HouseholdMember
from household_ledger.models.account import Account
from household_ledger.models.transaction import Transaction
from household_ledger.models.ledger_entry import LedgerEntry

__all__ = [
    "Base",
    "EntryDirection",
    "TransactionStatus",
    "MemberRole",
    "AuditLog",
    "Household",
    "HouseholdMember",
    "Account",
    "Transaction",
    "LedgerEntry",
]
