"""Initial ledger schema

Revision ID: 0001
Revises:
Create Date: 2026-10-17
"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "households",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_table(
        "household_members",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "household_id", sa.Uuid(),
            sa.ForeignKey("households.id"), nullable=False, index=True,
        ),
        sa.Column("user_id", sa.Uuid(), nullable=False, index=True),
        sa.Column(
            "role",
            sa.Enum("owner", "member", name="member_role_enum"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("household_id", "user_id", name="uq_household_member"),
    )
    op.create_table(
        "accounts",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "household_id", sa.Uuid(),
            sa.ForeignKey("households.id"), nullable=False, index=True,
        ),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False),
        sa.Column("is_personal", sa.Boolean(), nullable=False),
        sa.Column("owner_user_id", sa.Uuid(), nullable=True, index=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_table(
        "transactions",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "household_id", sa.Uuid(),
            sa.ForeignKey("households.id"), nullable=False, index=True,
        ),
        sa.Column("occurred_at", sa.DateTime(), nullable=False),
        sa.Column("description", sa.String(500), nullable=False),
        sa.Column("external_ref", sa.String(255), nullable=True),
        sa.Column("created_by", sa.Uuid(), nullable=True),
        sa.Column(
            "status",
            sa.Enum(
                "posted", name="transaction_status_enum", create_constraint=True
            ),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint(
            "household_id", "external_ref", name="uq_transaction_external_ref"
        ),
    )
    op.create_table(
        "ledger_entries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "transaction_id", sa.Uuid(),
            sa.ForeignKey("transactions.id"), nullable=False, index=True,
        ),
        sa.Column(
            "account_id", sa.Uuid(),
            sa.ForeignKey("accounts.id"), nullable=False, index=True,
        ),
        sa.Column("user_id", sa.Uuid(), nullable=True),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column(
            "direction",
            sa.Enum("debit", "credit", name="entry_direction_enum"),
            nullable=False,
        ),
        sa.Column("amount_minor", sa.BigInteger(), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("amount_minor > 0", name="ck_entry_amount_positive"),
    )
    op.create_table(
        "audit_log",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("entity_type", sa.String(50), nullable=False),
        sa.Column("entity_id", sa.String(64), nullable=False),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("payload", sa.JSON(), nullable=False),
        sa.Column("performed_by", sa.String(64), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("audit_log")
    op.drop_table("ledger_entries")
    op.drop_table("transactions")
    op.drop_table("accounts")
    op.drop_table("household_members")
    op.drop_table("households")
    sa.Enum(name="entry_direction_enum").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="transaction_status_enum").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="member_role_enum").drop(op.get_bind(), checkfirst=True)
