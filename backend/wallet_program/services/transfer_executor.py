"""Transfer Executor — ownership check → delegated transfer → counter increment.

Invariants:
    - Order is fixed: resolve (locked) → address check → ownership check →
      overflow pre-check → token transfer → increment
    - The token service is never called unless the ownership check passed
    - The counter is never touched unless the token service reported success
    - Nothing is written before the delegated transfer succeeds, so every failure
      leaves the wallet record exactly as it was
    - Zero amounts pass through; the token service decides whether they mean anything

Design Decisions:
    - Runs inside the caller's DB transaction; the row lock taken in step 1 is held
      across the awaited token call, so readers never see a half-applied transfer
    - No retry on provider failure: retry policy belongs to the caller
"""

import logging
from dataclasses import dataclass

from wallet_program.core.derive_address import require_valid_address
from wallet_program.core.domain_types import PublicKey, TransferReceipt
from wallet_program.core.enforce_ownership import check_owner
from wallet_program.core.repository_protocols import (
    TokenTransferProvider, WalletRepository,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransferOutcome:
    transaction_count: int
    receipt: TransferReceipt


class TransferExecutor:
    """Couples the authorization check, the delegated transfer and the counter."""

    def __init__(
        self,
        store: WalletRepository,
        provider: TokenTransferProvider,
        namespace: bytes,
        program_id: PublicKey,
    ):
        self.store = store
        self.provider = provider
        self.namespace = namespace
        self.program_id = program_id

    async def transfer(
        self,
        address: PublicKey,
        claimed_signer: PublicKey,
        source: PublicKey,
        destination: PublicKey,
        amount: int,
    ) -> TransferOutcome:
        record = await self.store.read_for_update(address)
        require_valid_address(
            address, self.namespace, record.owner, record.bump, self.program_id,
        )
        check_owner(record, claimed_signer)
        # Overflow must surface before value moves; the row lock keeps the count fixed
        record.incremented()

        receipt = await self.provider.transfer(
            source, destination, claimed_signer, amount,
        )

        updated = await self.store.increment_counter(address)
        logger.info(
            "Transfer completed",
            extra={
                "wallet_address": str(address),
                "amount": amount,
                "transaction_count": updated.transaction_count,
            },
        )
        return TransferOutcome(updated.transaction_count, receipt)
