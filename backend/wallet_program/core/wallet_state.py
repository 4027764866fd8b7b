"""Wallet State — the per-owner wallet record, as a pure value.

Invariants:
    - owner and bump are fixed at creation; no method returns a record with a different owner
    - transaction_count starts at 0 and only moves by +1 via incremented()
    - incremented() never wraps: past MAX_U64 it raises CounterOverflowError

Design Decisions:
    - Frozen dataclass: mutation produces a new value, the store decides when to persist it
"""

from dataclasses import dataclass, replace

from wallet_program.core.domain_types import MAX_U64, PublicKey
from wallet_program.core.errors import CounterOverflowError


@dataclass(frozen=True)
class WalletRecord:
    """Persistent wallet entity — owner, derivation bump, usage counter."""
    owner: PublicKey
    bump: int
    transaction_count: int = 0

    def incremented(self) -> "WalletRecord":
        """Return a copy with transaction_count + 1 (checked)."""
        if self.transaction_count >= MAX_U64:
            raise CounterOverflowError()
        return replace(self, transaction_count=self.transaction_count + 1)
