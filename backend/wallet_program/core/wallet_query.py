"""Wallet Query — read-only projection of a wallet record.

Invariants:
    - No authorization: owner and transaction_count are not secret
    - Projection never mutates the record
"""

from dataclasses import dataclass

from wallet_program.core.domain_types import PublicKey
from wallet_program.core.wallet_state import WalletRecord


@dataclass(frozen=True)
class WalletInfo:
    address: PublicKey
    owner: PublicKey
    bump: int
    transaction_count: int

    def to_dict(self) -> dict:
        return {
            "address": str(self.address),
            "owner": str(self.owner),
            "bump": self.bump,
            "transaction_count": self.transaction_count,
        }


def project_wallet_info(address: PublicKey, record: WalletRecord) -> WalletInfo:
    return WalletInfo(
        address=address,
        owner=record.owner,
        bump=record.bump,
        transaction_count=record.transaction_count,
    )
