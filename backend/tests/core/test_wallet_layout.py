"""Wallet Layout — tests for the fixed 49-byte account encoding.

Tests cover:
    - Size and discriminator
    - Field offsets (owner, bump, little-endian counter)
    - decode rejects wrong length and wrong discriminator
"""

import hashlib

import pytest

from wallet_program.core.domain_types import MAX_U64
from wallet_program.core.errors import CorruptAccountDataError
from wallet_program.core.wallet_layout import (
    ACCOUNT_DISCRIMINATOR,
    WALLET_ACCOUNT_SIZE,
    WALLET_PAYLOAD_SIZE,
    decode_wallet,
    encode_wallet,
)
from wallet_program.core.wallet_state import WalletRecord
from tests.factories import new_key


def test_sizes_match_account_space():
    assert WALLET_PAYLOAD_SIZE == 32 + 1 + 8
    assert WALLET_ACCOUNT_SIZE == 8 + 32 + 1 + 8


def test_discriminator_is_anchor_account_hash():
    assert ACCOUNT_DISCRIMINATOR == hashlib.sha256(b"account:Wallet").digest()[:8]


def test_field_offsets():
    owner = new_key()
    data = encode_wallet(WalletRecord(owner=owner, bump=254, transaction_count=513))
    assert len(data) == WALLET_ACCOUNT_SIZE
    assert data[:8] == ACCOUNT_DISCRIMINATOR
    assert data[8:40] == bytes(owner)
    assert data[40] == 254
    assert data[41:49] == (513).to_bytes(8, "little")


def test_decode_restores_max_counter():
    record = WalletRecord(owner=new_key(), bump=255, transaction_count=MAX_U64)
    assert decode_wallet(encode_wallet(record)) == record


def test_decode_rejects_wrong_length():
    data = encode_wallet(WalletRecord(owner=new_key(), bump=1))
    with pytest.raises(CorruptAccountDataError):
        decode_wallet(data[:-1])


def test_decode_rejects_wrong_discriminator():
    data = encode_wallet(WalletRecord(owner=new_key(), bump=1))
    with pytest.raises(CorruptAccountDataError):
        decode_wallet(b"\x00" * 8 + data[8:])
