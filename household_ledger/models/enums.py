"""
Shared enumerations for database models.

Using Python enums mapped to database enums ensures that
only valid values can be stored.
"""

import enum


class EntryDirection(str, enum.Enum):
    """Direction of a ledger entry. The amount itself is always positive."""
    DEBIT = "debit"
    CREDIT = "credit"


class TransactionStatus(str, enum.Enum):
    POSTED = "posted"


class MemberRole(str, enum.Enum):
    OWNER = "owner"
    MEMBER = "member"
