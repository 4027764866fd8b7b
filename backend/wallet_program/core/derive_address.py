"""Address Derivation — deterministic, owner-derived wallet addresses.

Invariants:
    - derive_wallet_address is PURE: same (namespace, owner, bump, program_id) → same address
    - A derived address is never a valid ed25519 point (no private key can sign for it)
    - The canonical bump is the highest bump in 255..0 whose hash is off-curve
    - Only the canonical bump is accepted at initialization — one address per owner
    - validate_wallet_address never raises; require_* raise AddressMismatchError

Design Decisions:
    - sha256(seeds ‖ program_id ‖ "ProgramDerivedAddress"), the Solana PDA scheme, so a
      wallet address computed here matches Pubkey.find_program_address for the same seeds
    - Curve test via solders Pubkey.is_on_curve: decompression only, no subgroup check
"""

import hashlib
from collections.abc import Sequence

from solders.pubkey import Pubkey

from wallet_program.core.domain_types import MAX_BUMP, PublicKey, is_valid_bump
from wallet_program.core.errors import AddressMismatchError

PDA_MARKER = b"ProgramDerivedAddress"
MAX_SEED_LENGTH = 32
MAX_SEEDS = 16


def is_on_curve(candidate: bytes) -> bool:
    """True if candidate decompresses to any ed25519 point."""
    return Pubkey(candidate).is_on_curve()


def create_program_address(
    seeds: Sequence[bytes], program_id: PublicKey,
) -> PublicKey:
    """Hash seeds under program_id. Raises if the result lands on the curve."""
    if len(seeds) > MAX_SEEDS:
        raise AddressMismatchError(f"Too many seeds ({len(seeds)} > {MAX_SEEDS})")
    hasher = hashlib.sha256()
    for seed in seeds:
        if len(seed) > MAX_SEED_LENGTH:
            raise AddressMismatchError(
                f"Seed exceeds {MAX_SEED_LENGTH} bytes ({len(seed)})",
            )
        hasher.update(seed)
    hasher.update(bytes(program_id))
    hasher.update(PDA_MARKER)
    digest = hasher.digest()
    if is_on_curve(digest):
        raise AddressMismatchError("Derived address falls on the ed25519 curve")
    return PublicKey(digest)


def wallet_seeds(namespace: bytes, owner: PublicKey, bump: int) -> list[bytes]:
    return [namespace, bytes(owner), bytes([bump])]


def derive_wallet_address(
    namespace: bytes, owner: PublicKey, bump: int, program_id: PublicKey,
) -> PublicKey:
    """Address of owner's wallet for the given bump."""
    if not is_valid_bump(bump):
        raise AddressMismatchError(f"Bump out of range: {bump}")
    return create_program_address(wallet_seeds(namespace, owner, bump), program_id)


def validate_wallet_address(
    address: PublicKey,
    namespace: bytes,
    owner: PublicKey,
    bump: int,
    program_id: PublicKey,
) -> bool:
    """Recompute and compare."""
    try:
        return derive_wallet_address(namespace, owner, bump, program_id) == address
    except AddressMismatchError:
        return False


def find_wallet_address(
    namespace: bytes, owner: PublicKey, program_id: PublicKey,
) -> tuple[PublicKey, int]:
    """Canonical (address, bump) for owner: first off-curve bump from 255 down."""
    for bump in range(MAX_BUMP, -1, -1):
        try:
            return derive_wallet_address(namespace, owner, bump, program_id), bump
        except AddressMismatchError:
            continue
    raise AddressMismatchError("No viable bump found for owner")


def require_canonical_address(
    namespace: bytes,
    owner: PublicKey,
    bump: int,
    program_id: PublicKey,
    claimed_address: PublicKey | None = None,
) -> PublicKey:
    """Initialization precondition: bump must be canonical, address must match."""
    address, canonical_bump = find_wallet_address(namespace, owner, program_id)
    if bump != canonical_bump:
        raise AddressMismatchError(
            f"Bump {bump} is not the canonical bump for this owner",
        )
    if claimed_address is not None and claimed_address != address:
        raise AddressMismatchError(
            f"Address {claimed_address} does not match derived address {address}",
        )
    return address


def require_valid_address(
    address: PublicKey,
    namespace: bytes,
    owner: PublicKey,
    bump: int,
    program_id: PublicKey,
) -> None:
    """Access precondition: stored owner/bump must reproduce the storage key."""
    if not validate_wallet_address(address, namespace, owner, bump, program_id):
        raise AddressMismatchError(
            f"Wallet at {address} does not derive from its stored owner and bump",
        )
