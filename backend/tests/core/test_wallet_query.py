"""Wallet Query — projection of a record into its public fields."""

from wallet_program.core.derive_address import find_wallet_address
from wallet_program.core.wallet_query import project_wallet_info
from wallet_program.core.wallet_state import WalletRecord
from tests.factories import NAMESPACE, PROGRAM_ID, new_key


def test_projection_reports_owner_and_count():
    owner = new_key()
    address, bump = find_wallet_address(NAMESPACE, owner, PROGRAM_ID)
    info = project_wallet_info(
        address, WalletRecord(owner=owner, bump=bump, transaction_count=3),
    )
    assert info.to_dict() == {
        "address": str(address),
        "owner": str(owner),
        "bump": bump,
        "transaction_count": 3,
    }
