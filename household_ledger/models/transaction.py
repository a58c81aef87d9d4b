"""
Transaction header model.

A transaction is one atomic financial event. It owns a set
of ledger entries whose signed amounts net to zero. Once
posted, a transaction is never modified; corrections are
recorded as new transactions.

external_ref is the client's reconciliation key. It is unique
per household so a retried request maps onto the row that
was already written.
"""

import uuid
from datetime import datetime

from sqlalchemy import (
    String, DateTime, ForeignKey, UniqueConstraint,
    Enum as SAEnum, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from household_ledger.models.base import Base
from household_ledger.models.enums import TransactionStatus


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        UniqueConstraint(
            "household_id", "external_ref", name="uq_transaction_external_ref"
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    household_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("households.id"), nullable=False, index=True
    )
    occurred_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    external_ref: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    created_by: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, nullable=True
    )
    status: Mapped[TransactionStatus] = mapped_column(
        SAEnum(
            TransactionStatus,
            name="transaction_status_enum",
            values_callable=lambda e: [m.value for m in e],
            create_constraint=True,
        ),
        nullable=False,
        default=TransactionStatus.POSTED,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    entries: Mapped[list["LedgerEntry"]] = relationship(
        back_populates="transaction",
        order_by="LedgerEntry.id",
    )

    def __repr__(self) -> str:
        return (
            f"<Transaction {self.id} {self.description!r} "
            f"({self.status.value})>"
        )
