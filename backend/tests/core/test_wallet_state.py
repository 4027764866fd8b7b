"""Wallet State — tests for the WalletRecord value and its checked counter."""

import pytest

from wallet_program.core.domain_types import MAX_U64
from wallet_program.core.errors import CounterOverflowError
from wallet_program.core.wallet_state import WalletRecord
from tests.factories import new_key


def test_new_record_starts_at_zero():
    assert WalletRecord(owner=new_key(), bump=255).transaction_count == 0


def test_incremented_adds_exactly_one():
    record = WalletRecord(owner=new_key(), bump=255, transaction_count=41)
    assert record.incremented().transaction_count == 42


def test_incremented_leaves_original_and_identity_untouched():
    record = WalletRecord(owner=new_key(), bump=253)
    updated = record.incremented()
    assert record.transaction_count == 0
    assert updated.owner == record.owner
    assert updated.bump == record.bump


def test_incremented_refuses_to_wrap():
    record = WalletRecord(owner=new_key(), bump=255, transaction_count=MAX_U64)
    with pytest.raises(CounterOverflowError):
        record.incremented()


def test_last_valid_increment_reaches_max():
    record = WalletRecord(owner=new_key(), bump=255, transaction_count=MAX_U64 - 1)
    assert record.incremented().transaction_count == MAX_U64
