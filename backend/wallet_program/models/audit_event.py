"""AuditEvent ORM — append-only log of wallet initializations and transfer attempts.

Invariants:
    - Rows are only ever inserted (never updated or deleted)
    - Every transfer attempt that reaches a handler is logged, success or failure
    - wallet_address is not a foreign key: failed lookups are logged too

Design Decisions:
    - Logging table, not enforcement: no business logic reads it
    - Amount stored as string: u64 does not fit a signed BIGINT
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from wallet_program.db.base import Base


class AuditEvent(Base):
    """Audit log entry for one wallet operation."""
    __tablename__ = "audit_events"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    wallet_address: Mapped[str] = mapped_column(
        String(44), nullable=False, index=True,
    )
    event_type: Mapped[str] = mapped_column(String(30), nullable=False)
    signer: Mapped[str | None] = mapped_column(String(44), nullable=True)
    amount: Mapped[str | None] = mapped_column(String(20), nullable=True)
    success: Mapped[bool] = mapped_column(Boolean, nullable=False)
    error_code: Mapped[str | None] = mapped_column(
        String(50), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
