"""Wallet Store — persistence for wallet records keyed by derived address.

Invariants:
    - create() fails WalletAlreadyExistsError if the address or the owner already has a row
    - read() / read_for_update() fail WalletNotFoundError if absent
    - increment_counter() is read (row-locked) → +1 (checked) → write, inside the caller's transaction
    - Never commits or rolls back: the handler owns the transaction boundary

Design Decisions:
    - SELECT ... FOR UPDATE for per-address serialization (no-op on SQLite, whose
      writers are already serialized)
    - IntegrityError at flush mapped to WalletAlreadyExistsError: covers two concurrent
      initializations racing past the existence check
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from wallet_program.core.domain_types import PublicKey
from wallet_program.core.errors import (
    ErrorContext, WalletAlreadyExistsError, WalletNotFoundError,
)
from wallet_program.core.wallet_layout import decode_wallet, encode_wallet
from wallet_program.core.wallet_state import WalletRecord
from wallet_program.models.wallet_account import WalletAccount

logger = logging.getLogger(__name__)


class WalletStore:
    """WalletRepository backed by the wallet_accounts table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self, address: PublicKey, owner: PublicKey, bump: int,
    ) -> WalletRecord:
        key = str(address)
        existing = await self.db.execute(
            select(WalletAccount.address).where(
                (WalletAccount.address == key)
                | (WalletAccount.owner == str(owner)),
            ),
        )
        if existing.first() is not None:
            raise WalletAlreadyExistsError(key, ErrorContext(wallet_address=key))

        record = WalletRecord(owner=owner, bump=bump, transaction_count=0)
        self.db.add(WalletAccount(
            address=key, owner=str(owner), data=encode_wallet(record),
        ))
        try:
            await self.db.flush()
        except IntegrityError:
            raise WalletAlreadyExistsError(key, ErrorContext(wallet_address=key))
        return record

    async def read(self, address: PublicKey) -> WalletRecord:
        account = await self._get_account(address, lock=False)
        return decode_wallet(account.data)

    async def read_for_update(self, address: PublicKey) -> WalletRecord:
        account = await self._get_account(address, lock=True)
        return decode_wallet(account.data)

    async def increment_counter(self, address: PublicKey) -> WalletRecord:
        account = await self._get_account(address, lock=True)
        updated = decode_wallet(account.data).incremented()
        account.data = encode_wallet(updated)
        await self.db.flush()
        logger.debug(
            "Wallet counter incremented",
            extra={
                "wallet_address": account.address,
                "transaction_count": updated.transaction_count,
            },
        )
        return updated

    async def _get_account(
        self, address: PublicKey, lock: bool,
    ) -> WalletAccount:
        key = str(address)
        query = select(WalletAccount).where(WalletAccount.address == key)
        if lock:
            query = query.with_for_update()
        result = await self.db.execute(query)
        account = result.scalar_one_or_none()
        if account is None:
            raise WalletNotFoundError(key, ErrorContext(wallet_address=key))
        return account
