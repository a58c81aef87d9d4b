"""
Household and membership models.

A household is the sharing boundary: accounts, transactions
and balances all belong to exactly one household. Members are
identified by the user id issued by the identity provider;
this service does not store credentials.
"""

import uuid
from datetime import datetime

from sqlalchemy import (
    String, DateTime, ForeignKey, UniqueConstraint,
    Enum as SAEnum, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from household_ledger.models.base import Base
from household_ledger.models.enums import MemberRole


class Household(Base):
    __tablename__ = "households"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    members: Mapped[list["HouseholdMember"]] = relationship(
        back_populates="household"
    )

    def __repr__(self) -> str:
        return f"<Household {self.name}>"


class HouseholdMember(Base):
    __tablename__ = "household_members"
    __table_args__ = (
        UniqueConstraint("household_id", "user_id", name="uq_household_member"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    household_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("households.id"), nullable=False, index=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, nullable=False, index=True
    )
    role: Mapped[MemberRole] = mapped_column(
        SAEnum(
            MemberRole,
            name="member_role_enum",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=MemberRole.MEMBER,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    household: Mapped["Household"] = relationship(back_populates="members")
