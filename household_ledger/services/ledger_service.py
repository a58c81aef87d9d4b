"""
Ledger service: household setup and the read side of the ledger.

Writes to transactions and ledger_entries go through the
LedgerWriter only. This service creates households, members
and accounts, and answers the read queries the dashboard
needs: accounts, balances and posted transactions.

Like the writer's callers, the caller controls the
transaction boundary here and decides when to commit.
"""

import uuid

from sqlalchemy import select, func, case
from sqlalchemy.orm import Session, selectinload

from household_ledger.models.account import Account
from household_ledger.models.enums import EntryDirection, MemberRole
from household_ledger.models.household import Household, HouseholdMember
from household_ledger.models.ledger_entry import LedgerEntry
from household_ledger.models.transaction import Transaction
from household_ledger.schemas.kpi import BalanceRow
from household_ledger.schemas.ledger import AccountCreate, HouseholdCreate


class LedgerService:

    def __init__(self, db: Session):
        self.db = db

    # --- Households ---

    def create_household(self, request: HouseholdCreate) -> Household:
        """Create a household with its first member as owner."""
        household = Household(name=request.name)
        self.db.add(household)
        self.db.flush()

        self.add_member(household.id, request.owner_user_id, MemberRole.OWNER)
        return household

    def add_member(
        self,
        household_id: uuid.UUID,
        user_id: uuid.UUID,
        role: MemberRole = MemberRole.MEMBER,
    ) -> HouseholdMember:
        if not self.db.get(Household, household_id):
            raise ValueError(f"Household {household_id} not found")
        if self.is_member(household_id, user_id):
            raise ValueError(
                f"User {user_id} is already a member of {household_id}"
            )

        member = HouseholdMember(
            household_id=household_id,
            user_id=user_id,
            role=role,
        )
        self.db.add(member)
        self.db.flush()
        return member

    def is_member(self, household_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        member_id = self.db.execute(
            select(HouseholdMember.id).where(
                HouseholdMember.household_id == household_id,
                HouseholdMember.user_id == user_id,
            )
        ).scalar_one_or_none()
        return member_id is not None

    # --- Accounts ---

    def create_account(self, request: AccountCreate) -> Account:
        """
        Create an account in a household.

        Personal accounts must name an owner who belongs to the
        household; shared accounts must not have an owner.
        """
        if not self.db.get(Household, request.household_id):
            raise ValueError(f"Household {request.household_id} not found")

        if request.is_personal:
            if request.owner_user_id is None:
                raise ValueError("Personal accounts need an owner_user_id")
            if not self.is_member(request.household_id, request.owner_user_id):
                raise ValueError(
                    f"Owner {request.owner_user_id} is not a household member"
                )
        elif request.owner_user_id is not None:
            raise ValueError("Shared accounts cannot have an owner_user_id")

        account = Account(
            household_id=request.household_id,
            name=request.name,
            type=request.type,
            currency=request.currency,
            is_personal=request.is_personal,
            owner_user_id=request.owner_user_id,
        )
        self.db.add(account)
        self.db.flush()
        return account

    def get_accounts(
        self,
        household_id: uuid.UUID,
        owner_user_id: uuid.UUID | None = None,
    ) -> list[Account]:
        """Accounts of a household, optionally one member's, by name."""
        query = select(Account).where(Account.household_id == household_id)
        if owner_user_id is not None:
            query = query.where(Account.owner_user_id == owner_user_id)
        return list(self.db.execute(query.order_by(Account.name)).scalars())

    # --- Balances ---

    def get_balances(
        self,
        household_id: uuid.UUID,
        owner_user_id: uuid.UUID | None = None,
    ) -> list[BalanceRow]:
        """
        One BalanceRow per account: debits minus credits, in minor units.

        The sum is done by the database; accounts with no entries
        come back with a zero balance.
        """
        signed = case(
            (LedgerEntry.direction == EntryDirection.DEBIT,
             LedgerEntry.amount_minor),
            else_=-LedgerEntry.amount_minor,
        )
        query = (
            select(
                Account.id,
                func.coalesce(func.sum(signed), 0),
                Account.currency,
            )
            .outerjoin(LedgerEntry, LedgerEntry.account_id == Account.id)
            .where(Account.household_id == household_id)
            .group_by(Account.id, Account.currency, Account.name)
            .order_by(Account.name)
        )
        if owner_user_id is not None:
            query = query.where(Account.owner_user_id == owner_user_id)

        return [
            BalanceRow(
                account_id=account_id,
                balance_minor=int(balance),
                currency=currency,
            )
            for account_id, balance, currency in self.db.execute(query)
        ]

    # --- Transactions ---

    def get_transaction(
        self, household_id: uuid.UUID, transaction_id: uuid.UUID
    ) -> Transaction:
        """A posted transaction with its entries, scoped to a household."""
        txn = self.db.execute(
            select(Transaction)
            .options(selectinload(Transaction.entries))
            .where(
                Transaction.id == transaction_id,
                Transaction.household_id == household_id,
            )
        ).scalar_one_or_none()
        if not txn:
            raise ValueError(f"Transaction {transaction_id} not found")
        return txn

    def count_transactions(self, household_id: uuid.UUID) -> int:
        return self.db.execute(
            select(func.count(Transaction.id)).where(
                Transaction.household_id == household_id
            )
        ).scalar_one()
