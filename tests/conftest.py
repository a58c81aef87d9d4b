"""
Shared test fixtures.

Sets up an isolated SQLite database so tests never touch the
real one. Tables are created before each test and dropped
after it, so no test data persists.
"""

import os

# Must be set before household_ledger builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import uuid
from dataclasses import dataclass
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from household_ledger.api.dependencies import get_ledger_writer
from household_ledger.main import app
from household_ledger.models.base import Base, get_db
from household_ledger.schemas.ledger import (
    AccountCreate,
    HouseholdCreate,
    LedgerEntryCreate,
    TransactionCreate,
)
from household_ledger.services.ledger_service import LedgerService
from household_ledger.services.ledger_writer import (
    LedgerWriter,
    StaticWritePolicy,
)


TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop them after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory():
    """The factory the ledger writer opens its own sessions from."""
    return TestSessionLocal


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@dataclass
class HouseholdSetup:
    household_id: uuid.UUID
    owner_id: uuid.UUID
    partner_id: uuid.UUID
    checking_id: uuid.UUID
    shared_id: uuid.UUID
    savings_id: uuid.UUID


@pytest.fixture
def household(db_session):
    """
    A household with two members and three accounts:
    the owner's personal checking, a shared account, and the
    partner's personal savings. Committed so other sessions see it.
    """
    service = LedgerService(db_session)
    owner_id = uuid.uuid4()
    partner_id = uuid.uuid4()

    home = service.create_household(HouseholdCreate(
        name="Casa", owner_user_id=owner_id,
    ))
    service.add_member(home.id, partner_id)

    checking = service.create_account(AccountCreate(
        household_id=home.id, name="Checking", type="checking",
        is_personal=True, owner_user_id=owner_id,
    ))
    shared = service.create_account(AccountCreate(
        household_id=home.id, name="Shared", type="checking",
    ))
    savings = service.create_account(AccountCreate(
        household_id=home.id, name="Savings", type="savings",
        is_personal=True, owner_user_id=partner_id,
    ))
    db_session.commit()

    return HouseholdSetup(
        household_id=home.id,
        owner_id=owner_id,
        partner_id=partner_id,
        checking_id=checking.id,
        shared_id=shared.id,
        savings_id=savings.id,
    )


def make_transaction(
    household_id,
    legs,
    external_ref=None,
    description="Transfer to shared",
    currency="MXN",
):
    """
    Build a TransactionCreate from (account_id, direction, amount) legs.
    """
    return TransactionCreate(
        household_id=household_id,
        occurred_at=datetime(2026, 10, 1, 12, 0, 0),
        description=description,
        external_ref=external_ref,
        entries=[
            LedgerEntryCreate(
                account_id=account_id,
                direction=direction,
                amount_minor=amount,
                currency=currency,
            )
            for account_id, direction, amount in legs
        ],
    )


@pytest.fixture
def build_transaction():
    return make_transaction


@pytest.fixture
def writer(session_factory):
    return LedgerWriter(session_factory, StaticWritePolicy(True))


@pytest.fixture
def write_gate():
    """Mutable gate shared by the client's writer; open by default."""
    return StaticWritePolicy(True)


@pytest.fixture
def client(db_session, session_factory, write_gate):
    """
    Provide a test client with the test database.

    get_db yields the test session; the ledger writer opens its
    own sessions from the test session factory.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    def override_get_ledger_writer():
        return LedgerWriter(session_factory, write_gate)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_ledger_writer] = override_get_ledger_writer
    yield TestClient(app)
    app.dependency_overrides.clear()
