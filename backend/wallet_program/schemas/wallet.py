"""Wallet Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - Every key field is base58 text decoding to exactly 32 bytes
    - bump is a u8 (0-255); amount is a u64 (0 to 2^64-1), zero allowed
    - Responses render keys as base58 and counters as plain integers

Design Decisions:
    - Keys kept as str in the schema, converted with PublicKey.from_base58 at the
      route: error envelopes echo what the client sent
    - field_validator strips whitespace and checks key format; no IO in validators
"""

from pydantic import BaseModel, Field, field_validator

from wallet_program.core.domain_types import MAX_BUMP, MAX_U64, PublicKey
from wallet_program.core.errors import InvalidPublicKeyError


def _check_public_key(v: str) -> str:
    v = v.strip()
    try:
        PublicKey.from_base58(v)
    except InvalidPublicKeyError:
        raise ValueError("must be a base58-encoded 32-byte public key")
    return v


class WalletCreate(BaseModel):
    """Wallet initialization — owner key and the canonical bump."""
    owner: str
    bump: int = Field(ge=0, le=MAX_BUMP)
    address: str | None = None

    @field_validator("owner")
    @classmethod
    def validate_owner(cls, v: str) -> str:
        return _check_public_key(v)

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: str | None) -> str | None:
        return None if v is None else _check_public_key(v)


class TransferCreate(BaseModel):
    """Transfer request — source/destination token holdings and amount."""
    source: str
    destination: str
    amount: int = Field(ge=0, le=MAX_U64)

    @field_validator("source", "destination")
    @classmethod
    def validate_holding(cls, v: str) -> str:
        return _check_public_key(v)


class WalletResponse(BaseModel):
    """Wallet projection — public-facing wallet data."""
    address: str
    owner: str
    bump: int
    transaction_count: int


class TransferResponse(BaseModel):
    """Result of a completed transfer."""
    address: str
    transaction_count: int
    signature: str | None = None


class DerivedAddressResponse(BaseModel):
    """Canonical wallet address for an owner."""
    owner: str
    address: str
    bump: int
