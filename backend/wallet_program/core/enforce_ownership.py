"""Ownership Enforcement — the single signer-vs-owner comparison.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - check_owner passes iff claimed_signer == record.owner, else UnauthorizedError
    - Runs before any delegated transfer; nothing in services bypasses it

Design Decisions:
    - Raise typed errors (not error dicts): callers are HTTP handlers, and the
      global WalletProgramError handler already renders the envelope
"""

from wallet_program.core.domain_types import PublicKey
from wallet_program.core.errors import ErrorContext, UnauthorizedError
from wallet_program.core.wallet_state import WalletRecord


def check_owner(record: WalletRecord, claimed_signer: PublicKey) -> None:
    """Only the recorded owner may move value out of the wallet's holdings."""
    if claimed_signer != record.owner:
        raise UnauthorizedError(ErrorContext(signer=str(claimed_signer)))


def check_initializer(owner: PublicKey, claimed_signer: PublicKey) -> None:
    """The owner signs its own wallet initialization."""
    if claimed_signer != owner:
        raise UnauthorizedError(ErrorContext(signer=str(claimed_signer)))
