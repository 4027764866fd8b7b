"""Transfer Executor — ordering and atomicity of guard → transfer → increment.

Tests cover:
    - Success returns old count + 1 and calls the provider once with the owner as authority
    - Wrong signer: UnauthorizedError, provider never called, count unchanged
    - Provider failure: error surfaces, count unchanged
    - Zero and maximum u64 amounts pass through
    - Missing wallet, corrupt bump, and saturated counter stop before the provider
"""

import pytest

from wallet_program.core.derive_address import find_wallet_address
from wallet_program.core.domain_types import MAX_U64
from wallet_program.core.errors import (
    AddressMismatchError,
    CounterOverflowError,
    DelegatedTransferFailedError,
    InsufficientBalanceError,
    UnauthorizedError,
    WalletNotFoundError,
)
from wallet_program.services.transfer_executor import TransferExecutor
from wallet_program.services.wallet_store import WalletStore
from tests.factories import NAMESPACE, PROGRAM_ID, new_holding, new_key


@pytest.fixture
def executor(test_db, fake_provider):
    return TransferExecutor(
        WalletStore(test_db), fake_provider, NAMESPACE, PROGRAM_ID,
    )


async def _count(test_db, address):
    await test_db.rollback()
    return (await WalletStore(test_db).read(address)).transaction_count


async def test_success_increments_by_one(executor, fake_provider, seed_wallet, test_db):
    owner = new_key()
    address, _ = await seed_wallet(owner, transaction_count=4)
    source, destination = new_holding(), new_holding()

    outcome = await executor.transfer(address, owner, source, destination, 1_000)

    assert outcome.transaction_count == 5
    assert outcome.receipt.signature == "fake-signature-1"
    assert len(fake_provider.calls) == 1
    call = fake_provider.calls[0]
    assert (call.source, call.destination, call.authority, call.amount) == (
        source, destination, owner, 1_000,
    )


async def test_unauthorized_never_reaches_provider(
    executor, fake_provider, seed_wallet, test_db,
):
    owner = new_key()
    address, _ = await seed_wallet(owner, transaction_count=2)

    with pytest.raises(UnauthorizedError):
        await executor.transfer(address, new_key(), new_holding(), new_holding(), 5)

    assert fake_provider.calls == []
    assert await _count(test_db, address) == 2


async def test_failed_delegated_transfer_keeps_count(
    executor, fake_provider, seed_wallet, test_db,
):
    owner = new_key()
    address, _ = await seed_wallet(owner, transaction_count=3)
    fake_provider.fail_with(InsufficientBalanceError("not enough", reason="insufficient_funds"))

    with pytest.raises(DelegatedTransferFailedError) as exc_info:
        await executor.transfer(address, owner, new_holding(), new_holding(), 10)

    assert exc_info.value.code == "INSUFFICIENT_BALANCE"
    assert len(fake_provider.calls) == 1
    assert await _count(test_db, address) == 3


async def test_zero_amount_still_counts(executor, fake_provider, seed_wallet):
    owner = new_key()
    address, _ = await seed_wallet(owner)

    outcome = await executor.transfer(address, owner, new_holding(), new_holding(), 0)

    assert outcome.transaction_count == 1
    assert fake_provider.calls[0].amount == 0


async def test_amount_magnitude_does_not_change_increment(executor, seed_wallet):
    owner = new_key()
    address, _ = await seed_wallet(owner)

    outcome = await executor.transfer(
        address, owner, new_holding(), new_holding(), MAX_U64,
    )

    assert outcome.transaction_count == 1


async def test_missing_wallet(executor, fake_provider):
    owner = new_key()
    address, _ = find_wallet_address(NAMESPACE, owner, PROGRAM_ID)

    with pytest.raises(WalletNotFoundError):
        await executor.transfer(address, owner, new_holding(), new_holding(), 1)
    assert fake_provider.calls == []


async def test_corrupt_bump_is_address_mismatch(executor, fake_provider, seed_wallet):
    owner = new_key()
    _, canonical_bump = find_wallet_address(NAMESPACE, owner, PROGRAM_ID)
    address, _ = await seed_wallet(owner, bump=(canonical_bump + 1) % 256)

    with pytest.raises(AddressMismatchError):
        await executor.transfer(address, owner, new_holding(), new_holding(), 1)
    assert fake_provider.calls == []


async def test_saturated_counter_stops_before_value_moves(
    executor, fake_provider, seed_wallet, test_db,
):
    owner = new_key()
    address, _ = await seed_wallet(owner, transaction_count=MAX_U64)

    with pytest.raises(CounterOverflowError):
        await executor.transfer(address, owner, new_holding(), new_holding(), 1)

    assert fake_provider.calls == []
    assert await _count(test_db, address) == MAX_U64
