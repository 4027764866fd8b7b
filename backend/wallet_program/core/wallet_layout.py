"""Wallet Layout — fixed binary encoding of a WalletRecord in account storage.

Invariants:
    - Layout: discriminator (8) | owner (32) | bump (1) | transaction_count (u64 LE, 8)
    - Encoded size is always WALLET_ACCOUNT_SIZE (49 bytes; 41-byte payload)
    - decode() rejects wrong length or wrong discriminator with CorruptAccountDataError

Design Decisions:
    - Discriminator = sha256("account:Wallet")[:8], the Anchor account convention,
      so records stay byte-compatible with the on-chain program's accounts
    - struct over a serialization library: the layout is fixed-width, no schema evolution
"""

import hashlib
import struct

from wallet_program.core.domain_types import PUBKEY_LENGTH, PublicKey
from wallet_program.core.errors import CorruptAccountDataError
from wallet_program.core.wallet_state import WalletRecord

ACCOUNT_DISCRIMINATOR = hashlib.sha256(b"account:Wallet").digest()[:8]

_PAYLOAD = struct.Struct(f"<{PUBKEY_LENGTH}sBQ")

WALLET_PAYLOAD_SIZE = _PAYLOAD.size  # 41
WALLET_ACCOUNT_SIZE = len(ACCOUNT_DISCRIMINATOR) + WALLET_PAYLOAD_SIZE  # 49


def encode_wallet(record: WalletRecord) -> bytes:
    """Serialize record to account bytes."""
    return ACCOUNT_DISCRIMINATOR + _PAYLOAD.pack(
        bytes(record.owner), record.bump, record.transaction_count,
    )


def decode_wallet(data: bytes) -> WalletRecord:
    """Deserialize account bytes to a record."""
    if len(data) != WALLET_ACCOUNT_SIZE:
        raise CorruptAccountDataError(
            f"expected {WALLET_ACCOUNT_SIZE} bytes, got {len(data)}",
        )
    if data[:8] != ACCOUNT_DISCRIMINATOR:
        raise CorruptAccountDataError("account discriminator mismatch")
    owner, bump, count = _PAYLOAD.unpack(data[8:])
    return WalletRecord(
        owner=PublicKey(owner), bump=bump, transaction_count=count,
    )
