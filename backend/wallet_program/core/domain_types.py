"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - PublicKey is exactly 32 bytes; text form is base58
    - Bump is 0–255; transaction counts and amounts are unsigned 64-bit
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - PublicKey as frozen dataclass (not NewType): needs parsing and a canonical
      text form, and must be hashable for equality checks in the guard
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType

import base58

from wallet_program.core.errors import InvalidPublicKeyError


# ─── Constants ───────────────────────────────────────────────────

PUBKEY_LENGTH = 32
MAX_BUMP = 255
MAX_U64 = 2**64 - 1

# Namespace seed scoping wallet addresses
WALLET_SEED = b"wallet"


# ─── Value Types ─────────────────────────────────────────────────

Bump = NewType("Bump", int)                 # 0–255
TokenAmount = NewType("TokenAmount", int)   # 0–MAX_U64


@dataclass(frozen=True)
class PublicKey:
    """32-byte identity: owners, signers, token holdings, derived addresses."""
    raw: bytes

    def __post_init__(self):
        if not isinstance(self.raw, bytes) or len(self.raw) != PUBKEY_LENGTH:
            raise InvalidPublicKeyError(repr(self.raw))

    @classmethod
    def from_base58(cls, value: str) -> "PublicKey":
        try:
            raw = base58.b58decode(value.strip())
        except ValueError:
            raise InvalidPublicKeyError(value)
        if len(raw) != PUBKEY_LENGTH:
            raise InvalidPublicKeyError(value)
        return cls(raw)

    def __bytes__(self) -> bytes:
        return self.raw

    def __str__(self) -> str:
        return base58.b58encode(self.raw).decode("ascii")


@dataclass(frozen=True)
class TransferReceipt:
    """Acknowledgement from the token-transfer service."""
    signature: str | None = None


# ─── Enums ───────────────────────────────────────────────────────

class WalletEventType(str, Enum):
    """Audit event kinds — maps to DB `event_type` column."""
    INITIALIZED = "wallet_initialized"
    TRANSFER_SUCCEEDED = "transfer_succeeded"
    TRANSFER_FAILED = "transfer_failed"


def is_valid_bump(value: int) -> bool:
    return 0 <= value <= MAX_BUMP


def is_valid_u64(value: int) -> bool:
    return 0 <= value <= MAX_U64
