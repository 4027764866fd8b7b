"""Ownership Enforcement — tests for the pure signer-vs-owner checks."""

import pytest

from wallet_program.core.enforce_ownership import check_initializer, check_owner
from wallet_program.core.errors import UnauthorizedError
from wallet_program.core.wallet_state import WalletRecord
from tests.factories import new_key


def test_owner_passes():
    owner = new_key()
    check_owner(WalletRecord(owner=owner, bump=255), owner)


def test_other_signer_rejected():
    record = WalletRecord(owner=new_key(), bump=255)
    intruder = new_key()
    with pytest.raises(UnauthorizedError) as exc_info:
        check_owner(record, intruder)
    assert exc_info.value.code == "UNAUTHORIZED"
    assert exc_info.value.http_status == 403
    assert exc_info.value.context.signer == str(intruder)


def test_check_owner_does_not_touch_record():
    record = WalletRecord(owner=new_key(), bump=255, transaction_count=7)
    with pytest.raises(UnauthorizedError):
        check_owner(record, new_key())
    assert record.transaction_count == 7


def test_initializer_must_be_owner():
    owner = new_key()
    check_initializer(owner, owner)
    with pytest.raises(UnauthorizedError):
        check_initializer(owner, new_key())
