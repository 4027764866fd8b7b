"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Wallet storage and the token-transfer service accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - TokenTransferProvider is one awaitable call: it either returns a receipt or
      raises DelegatedTransferFailedError (or a subclass); no partial outcome
"""

from typing import Protocol

from wallet_program.core.domain_types import PublicKey, TransferReceipt
from wallet_program.core.wallet_state import WalletRecord


class WalletRepository(Protocol):
    """Contract for wallet record persistence — implemented by shell."""
    async def create(
        self, address: PublicKey, owner: PublicKey, bump: int,
    ) -> WalletRecord: ...
    async def read(self, address: PublicKey) -> WalletRecord: ...
    async def read_for_update(self, address: PublicKey) -> WalletRecord: ...
    async def increment_counter(self, address: PublicKey) -> WalletRecord: ...


class TokenTransferProvider(Protocol):
    """Contract for the external token-transfer service."""
    async def transfer(
        self,
        source: PublicKey,
        destination: PublicKey,
        authority: PublicKey,
        amount: int,
    ) -> TransferReceipt: ...
