"""
Household account model.

An account is anything money sits in or flows through:
a checking account, a credit card, a shared savings pot.
Balances are never stored here; they are derived from
ledger entries by the storage layer.
"""

import uuid
from datetime import datetime

from sqlalchemy import String, Boolean, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from household_ledger.models.base import Base


class Account(Base):
    """
    A single account owned by a household.

    Personal accounts carry the owning member's user id;
    shared accounts have owner_user_id = None.
    """

    __tablename__ = "accounts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    household_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("households.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    currency: Mapped[str] = mapped_column(
        String(3), nullable=False, default="MXN"
    )
    is_personal: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    owner_user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, nullable=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    entries: Mapped[list["LedgerEntry"]] = relationship(
        back_populates="account"
    )

    def __repr__(self) -> str:
        return f"<Account {self.name} ({self.type}, {self.currency})>"
