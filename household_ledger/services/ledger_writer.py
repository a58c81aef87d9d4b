"""
Ledger writer: the only code path that inserts into the
transactions and ledger_entries tables.

Each create_transaction call:
1. Consults the write policy; a closed gate records an audit
   entry and raises WritesDisabled without touching the ledger
2. Validates the entries (errors propagate unchanged)
3. Returns the stored id when the external_ref was already
   posted with the same entries, and raises ExternalRefConflict
   when it was posted with different ones
4. Opens its own session and, inside one database transaction,
   inserts the header, flushes to learn its id, then inserts
   every entry referencing that id

Any storage error rolls back the header together with the
entries. Nothing is retried here; the caller decides.
"""

import logging
import uuid
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from household_ledger.config import get_settings
from household_ledger.models.enums import EntryDirection, TransactionStatus
from household_ledger.models.ledger_entry import LedgerEntry
from household_ledger.models.transaction import Transaction
from household_ledger.schemas.ledger import LedgerEntryCreate, TransactionCreate
from household_ledger.services.audit_service import AuditRecorder
from household_ledger.services.exceptions import (
    ExternalRefConflict,
    PersistenceFailed,
    WritesDisabled,
)
from household_ledger.services.validator import validate

logger = logging.getLogger(__name__)


# --- Write policies ---

class WritePolicy(Protocol):
    def writes_enabled(self) -> bool: ...


class StaticWritePolicy:
    """A fixed gate, decided when the writer is built."""

    def __init__(self, enabled: bool):
        self.enabled = enabled

    def writes_enabled(self) -> bool:
        return self.enabled


class SettingsWritePolicy:
    """Reads LEDGER_WRITE_ENABLED from the current settings on every call."""

    def writes_enabled(self) -> bool:
        return get_settings().LEDGER_WRITE_ENABLED


class LedgerWriter:

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        write_policy: WritePolicy,
        audit_recorder: AuditRecorder | None = None,
    ):
        self.session_factory = session_factory
        self.write_policy = write_policy
        self.audit_recorder = audit_recorder or AuditRecorder(session_factory)

    def create_transaction(
        self,
        request: TransactionCreate,
        *,
        created_by: uuid.UUID | None = None,
        request_id: str = "unknown",
    ) -> uuid.UUID:
        """
        Persist a balanced transaction and return its id.

        Raises WritesDisabled, a ValidationFailed subclass, or
        PersistenceFailed. A request whose external_ref was already
        posted in the same household with the same entries returns
        the existing id; different entries raise ExternalRefConflict.
        """
        if not self.write_policy.writes_enabled():
            reason = "LEDGER_WRITE_ENABLED is false"
            logger.warning(
                "Blocked ledger write for household %s (request %s)",
                request.household_id, request_id,
            )
            # The audit row names the authenticated caller, never a
            # body-supplied created_by
            self.audit_recorder.record_blocked_write(
                household_id=request.household_id,
                user_id=created_by,
                request_id=request_id,
                reason=reason,
            )
            raise WritesDisabled(reason)

        validate(request.entries)

        session = self.session_factory()
        try:
            with session.begin():
                existing_id = self._find_by_external_ref(session, request)
                if existing_id is not None:
                    return self._replayed(session, request, existing_id)

                txn = Transaction(
                    household_id=request.household_id,
                    occurred_at=request.occurred_at,
                    description=request.description,
                    external_ref=request.external_ref,
                    created_by=request.created_by or created_by,
                    status=TransactionStatus.POSTED,
                )
                session.add(txn)
                # The header id must exist before any entry references it
                session.flush()
                txn_id = txn.id

                for entry_data in request.entries:
                    session.add(self._build_entry(txn_id, entry_data))
                session.flush()
        except IntegrityError as e:
            # A concurrent request may have posted the same external_ref
            # between our lookup and our insert
            if not request.external_ref:
                logger.error(
                    "Ledger write failed for household %s (request %s): %s",
                    request.household_id, request_id, e,
                )
                raise PersistenceFailed("Could not persist transaction") from e
            return self._recover_duplicate(request, request_id, e)
        except SQLAlchemyError as e:
            logger.error(
                "Ledger write failed for household %s (request %s): %s",
                request.household_id, request_id, e,
            )
            raise PersistenceFailed("Could not persist transaction") from e
        finally:
            session.close()

        logger.info(
            "Posted transaction %s with %d entries",
            txn_id, len(request.entries),
        )
        return txn_id

    def _recover_duplicate(
        self,
        request: TransactionCreate,
        request_id: str,
        error: IntegrityError,
    ) -> uuid.UUID:
        session = self.session_factory()
        try:
            existing_id = _select_by_external_ref(
                session, request.household_id, request.external_ref
            )
            if existing_id is None:
                logger.error(
                    "Ledger write failed for household %s (request %s): %s",
                    request.household_id, request_id, error,
                )
                raise PersistenceFailed(
                    "Could not persist transaction"
                ) from error
            return self._replayed(session, request, existing_id)
        except SQLAlchemyError as e:
            logger.error(
                "Could not read back external_ref %r (request %s): %s",
                request.external_ref, request_id, e,
            )
            raise PersistenceFailed("Could not persist transaction") from e
        finally:
            session.close()

    def _replayed(
        self,
        session: Session,
        request: TransactionCreate,
        existing_id: uuid.UUID,
    ) -> uuid.UUID:
        stored = session.execute(
            select(
                LedgerEntry.account_id,
                LedgerEntry.direction,
                LedgerEntry.amount_minor,
                LedgerEntry.currency,
            ).where(LedgerEntry.transaction_id == existing_id)
        ).all()
        if _entry_keys(stored) != _entry_keys(request.entries):
            logger.warning(
                "external_ref %r already posted as %s with different entries",
                request.external_ref, existing_id,
            )
            raise ExternalRefConflict(request.external_ref, existing_id)

        logger.info(
            "external_ref %r already posted as %s",
            request.external_ref, existing_id,
        )
        return existing_id

    def _find_by_external_ref(
        self, session: Session, request: TransactionCreate
    ) -> uuid.UUID | None:
        if not request.external_ref:
            return None
        return _select_by_external_ref(
            session, request.household_id, request.external_ref
        )

    def _build_entry(
        self, transaction_id: uuid.UUID, entry_data: LedgerEntryCreate
    ) -> LedgerEntry:
        return LedgerEntry(
            transaction_id=transaction_id,
            account_id=entry_data.account_id,
            user_id=entry_data.user_id,
            category=entry_data.category,
            direction=entry_data.direction,
            amount_minor=entry_data.amount_minor,
            currency=entry_data.currency,
        )


def _select_by_external_ref(
    session: Session, household_id: uuid.UUID, external_ref: str
) -> uuid.UUID | None:
    return session.execute(
        select(Transaction.id).where(
            Transaction.household_id == household_id,
            Transaction.external_ref == external_ref,
        )
    ).scalar_one_or_none()


def _entry_keys(entries) -> list[tuple]:
    """Order-independent identity of a set of entry legs."""
    return sorted(
        (
            str(e.account_id),
            EntryDirection(e.direction).value,
            e.amount_minor,
            e.currency,
        )
        for e in entries
    )
