"""WalletAccount ORM — account storage for wallet records, keyed by derived address.

Invariants:
    - address is the primary key: the base58 program-derived address
    - owner is unique: at most one wallet per owner
    - data holds the fixed 49-byte account layout (core/wallet_layout.py);
      owner is duplicated as a column only for the uniqueness constraint and lookups

Design Decisions:
    - Raw account bytes over decoded columns: transaction_count is u64, which
      overflows a signed BIGINT; the layout also keeps records byte-compatible
      with the on-chain account
"""

from datetime import datetime, timezone

from sqlalchemy import String, LargeBinary, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from wallet_program.db.base import Base


class WalletAccount(Base):
    """Stored wallet account — one row per derived address."""
    __tablename__ = "wallet_accounts"

    address: Mapped[str] = mapped_column(String(44), primary_key=True)
    owner: Mapped[str] = mapped_column(
        String(44), nullable=False, unique=True, index=True,
    )
    data: Mapped[bytes] = mapped_column(LargeBinary(49), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
