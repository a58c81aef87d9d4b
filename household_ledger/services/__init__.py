"""Business logic services."""

from household_ledger.services.ledger_service import LedgerService
from household_ledger.services.ledger_writer import (
    LedgerWriter,
    SettingsWritePolicy,
    StaticWritePolicy,
)
from household_ledger.services.audit_service import AuditRecorder

__all__ = [
    "LedgerService",
    "LedgerWriter",
    "SettingsWritePolicy",
    "StaticWritePolicy",
    "AuditRecorder",
]
