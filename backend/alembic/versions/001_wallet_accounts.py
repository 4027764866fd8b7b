"""Initial schema — wallet_accounts and audit_events.

Revision ID: 001_wallet_accounts
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_wallet_accounts"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "wallet_accounts",
        sa.Column("address", sa.String(44), primary_key=True),
        sa.Column("owner", sa.String(44), nullable=False),
        sa.Column("data", sa.LargeBinary(49), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_wallet_accounts_owner", "wallet_accounts", ["owner"], unique=True,
    )

    op.create_table(
        "audit_events",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("wallet_address", sa.String(44), nullable=False),
        sa.Column("event_type", sa.String(30), nullable=False),
        sa.Column("signer", sa.String(44), nullable=True),
        sa.Column("amount", sa.String(20), nullable=True),
        sa.Column("success", sa.Boolean, nullable=False),
        sa.Column("error_code", sa.String(50), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_audit_events_wallet_address", "audit_events", ["wallet_address"],
    )


def downgrade() -> None:
    op.drop_index("ix_audit_events_wallet_address", table_name="audit_events")
    op.drop_table("audit_events")
    op.drop_index("ix_wallet_accounts_owner", table_name="wallet_accounts")
    op.drop_table("wallet_accounts")
