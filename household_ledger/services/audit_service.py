"""
Audit recorder.

Writes audit_log rows in their own short-lived session so an
audit record never shares a unit of work with ledger writes.
Recording is best-effort: a failure is logged and swallowed,
because the caller's own outcome must not be replaced by an
audit error.
"""

import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from household_ledger.models.audit_log import AuditLog

logger = logging.getLogger(__name__)

BLOCKED_WRITE = "blocked_write"


class AuditRecorder:

    def __init__(self, session_factory: sessionmaker[Session]):
        self.session_factory = session_factory

    def record_blocked_write(
        self,
        *,
        household_id,
        user_id,
        request_id: str,
        reason: str,
        path: str = "/ledger/transactions",
    ) -> bool:
        """
        Record a ledger write refused by the write gate.

        Returns True if the row was committed, False otherwise.
        """
        payload = {
            "household_id": str(household_id),
            "user_id": str(user_id) if user_id else None,
            "request_id": request_id,
            "path": path,
            "reason": reason,
        }
        try:
            with self.session_factory() as session, session.begin():
                session.add(AuditLog(
                    entity_type=BLOCKED_WRITE,
                    entity_id=str(uuid.uuid4()),
                    action="blocked",
                    payload=payload,
                    performed_by=payload["user_id"],
                ))
        except SQLAlchemyError:
            logger.exception(
                "Could not record blocked ledger write (request %s)",
                request_id,
            )
            return False
        return True
