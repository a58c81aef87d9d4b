"""
Database engine, session management, and base model.

This module is the foundation for all database operations.
Every model inherits from Base. Every request gets a session
from get_db(); the ledger writer opens its own sessions from
SessionLocal so it owns its unit of work.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from household_ledger.config import get_settings

settings = get_settings()

# --- Engine ---
# pool_pre_ping=True tests connections before using them,
# which handles cases where the database restarted or a
# connection went stale.
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
)

# --- Session Factory ---
# autocommit=False means we explicitly control when changes
# are saved: a transaction header and its entries are written
# all together or not at all.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


# --- Dependency for FastAPI ---
def get_db():
    """
    Provide a database session for a single request.

    The try/finally pattern ensures the session is always
    closed, preventing connection leaks.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
