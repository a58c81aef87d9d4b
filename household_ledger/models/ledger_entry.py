"""
Ledger entry model.

Each entry is one leg of a double-entry transaction. The
amount is stored in minor units (cents) as a positive integer
and the direction carries the sign. Entries are immutable.
"""

import uuid
from datetime import datetime

from sqlalchemy import (
    String, DateTime, BigInteger, ForeignKey, CheckConstraint,
    Enum as SAEnum, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from household_ledger.models.base import Base
from household_ledger.models.enums import EntryDirection


class LedgerEntry(Base):
    """
    An immutable debit or credit against one account.

    Within a transaction, debits minus credits must be zero.
    This invariant is enforced by the validator before the
    first write, not by the model.
    """

    __tablename__ = "ledger_entries"
    __table_args__ = (
        CheckConstraint("amount_minor > 0", name="ck_entry_amount_positive"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    transaction_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("transactions.id"), nullable=False, index=True
    )
    account_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("accounts.id"), nullable=False, index=True
    )
    user_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    category: Mapped[str | None] = mapped_column(
        String(100), nullable=True
    )
    direction: Mapped[EntryDirection] = mapped_column(
        SAEnum(
            EntryDirection,
            name="entry_direction_enum",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
    )
    amount_minor: Mapped[int] = mapped_column(BigInteger, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    transaction: Mapped["Transaction"] = relationship(
        back_populates="entries"
    )
    account: Mapped["Account"] = relationship(back_populates="entries")

    def __repr__(self) -> str:
        return (
            f"<LedgerEntry {self.direction.value} "
            f"{self.amount_minor} {self.currency}>"
        )
