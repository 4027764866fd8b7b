"""Wallet Handlers — initialize_wallet, transfer_tokens, get_wallet_info, derive_wallet.

Invariants:
    - Address checks run first in every instruction (precondition, not business error)
    - initialize_wallet accepts only the canonical bump and only when the owner signs
    - transfer_tokens commits the counter increment before any audit row is written:
      once value has moved, an audit failure cannot undo the increment
    - Failed instructions roll back first, then record a failure audit row in a fresh transaction
    - get_wallet_info and derive_wallet never write

Design Decisions:
    - Handlers own the transaction boundary (commit/rollback); WalletStore and
      TransferExecutor only stage changes
    - Provider injected per handler: tests swap in a fake without patching modules
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from wallet_program.core.derive_address import (
    find_wallet_address, require_canonical_address, require_valid_address,
)
from wallet_program.core.domain_types import PublicKey, WalletEventType
from wallet_program.core.enforce_ownership import check_initializer
from wallet_program.core.errors import WalletProgramError
from wallet_program.core.repository_protocols import TokenTransferProvider
from wallet_program.core.wallet_query import WalletInfo, project_wallet_info
from wallet_program.services.audit_log import append_event
from wallet_program.services.transfer_executor import (
    TransferExecutor, TransferOutcome,
)
from wallet_program.services.wallet_store import WalletStore

logger = logging.getLogger(__name__)


class WalletHandlers:
    """The wallet program's instructions, wired to storage and the token service."""

    def __init__(
        self,
        db: AsyncSession,
        namespace: bytes,
        program_id: PublicKey,
        provider: TokenTransferProvider | None = None,
    ):
        self.db = db
        self.store = WalletStore(db)
        self.namespace = namespace
        self.program_id = program_id
        self.provider = provider

    async def initialize_wallet(
        self,
        owner: PublicKey,
        bump: int,
        claimed_signer: PublicKey,
        address: PublicKey | None = None,
    ) -> WalletInfo:
        """Create owner's wallet at its canonical address with transaction_count = 0."""
        address = require_canonical_address(
            self.namespace, owner, bump, self.program_id, address,
        )
        check_initializer(owner, claimed_signer)
        try:
            record = await self.store.create(address, owner, bump)
            await self.db.commit()
        except WalletProgramError:
            await self.db.rollback()
            raise
        await append_event(
            self.db, str(address), WalletEventType.INITIALIZED,
            success=True, signer=str(claimed_signer),
        )
        logger.info(
            "Wallet initialized",
            extra={"wallet_address": str(address), "owner": str(owner)},
        )
        return project_wallet_info(address, record)

    async def transfer_tokens(
        self,
        address: PublicKey,
        claimed_signer: PublicKey,
        source: PublicKey,
        destination: PublicKey,
        amount: int,
    ) -> TransferOutcome:
        """Owner-authorized delegated transfer; bumps transaction_count on success."""
        if self.provider is None:
            raise RuntimeError("WalletHandlers created without a token provider")
        executor = TransferExecutor(
            self.store, self.provider, self.namespace, self.program_id,
        )
        try:
            outcome = await executor.transfer(
                address, claimed_signer, source, destination, amount,
            )
        except WalletProgramError as e:
            await self.db.rollback()
            logger.warning(
                f"Transfer rejected: {e.message}",
                extra={
                    "wallet_address": str(address),
                    "signer": str(claimed_signer),
                    "error_code": e.code,
                },
            )
            await append_event(
                self.db, str(address), WalletEventType.TRANSFER_FAILED,
                success=False, signer=str(claimed_signer),
                amount=amount, error_code=e.code,
            )
            raise

        await self.db.commit()
        await append_event(
            self.db, str(address), WalletEventType.TRANSFER_SUCCEEDED,
            success=True, signer=str(claimed_signer), amount=amount,
        )
        return outcome

    async def get_wallet_info(self, address: PublicKey) -> WalletInfo:
        """Read-only projection; no authorization."""
        record = await self.store.read(address)
        require_valid_address(
            address, self.namespace, record.owner, record.bump, self.program_id,
        )
        return project_wallet_info(address, record)

    def derive_wallet(self, owner: PublicKey) -> tuple[PublicKey, int]:
        """Canonical (address, bump) a client should use to initialize."""
        return find_wallet_address(self.namespace, owner, self.program_id)

