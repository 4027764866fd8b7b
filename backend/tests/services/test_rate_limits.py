"""Rate Limits — per-client limits on wallet creation and transfers.

Tests cover:
    - The sixth wallet creation in a minute from one signer returns 429 RATE_LIMIT_EXCEEDED
    - Budgets are per signer: another signer is unaffected
    - Transfer limit read from settings; exceeding it never reaches the token service
    - Reads are not limited
"""

import pytest

from wallet_program.config import get_settings
from wallet_program.core.derive_address import find_wallet_address
from tests.factories import NAMESPACE, PROGRAM_ID, new_holding, new_key

WALLETS = "/api/v1/wallets"


def _signed(key):
    return {"X-Verified-Signer": str(key)}


async def _create(client, owner, signer=None):
    _, bump = find_wallet_address(NAMESPACE, owner, PROGRAM_ID)
    return await client.post(
        WALLETS,
        json={"owner": str(owner), "bump": bump},
        headers=_signed(signer or owner),
    )


@pytest.fixture
def tight_transfer_limit(monkeypatch):
    monkeypatch.setenv("RATE_LIMIT_TRANSFERS", "2/minute")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


async def test_wallet_creation_limited_per_signer(client):
    owner = new_key()
    statuses = [(await _create(client, owner)).status_code for _ in range(5)]
    assert statuses == [201, 409, 409, 409, 409]

    res = await _create(client, owner)

    assert res.status_code == 429
    error = res.json()["error"]
    assert error["code"] == "RATE_LIMIT_EXCEEDED"
    assert error["category"] == "rate_limit"


async def test_other_signers_keep_their_budget(client):
    busy = new_key()
    for _ in range(6):
        await _create(client, busy)

    assert (await _create(client, new_key())).status_code == 201


async def test_transfer_limit_stops_before_token_service(
    client, fake_provider, tight_transfer_limit,
):
    owner = new_key()
    address = (await _create(client, owner)).json()["address"]
    body = {
        "source": str(new_holding()),
        "destination": str(new_holding()),
        "amount": 1,
    }
    url = f"{WALLETS}/{address}/transfers"

    statuses = [
        (await client.post(url, json=body, headers=_signed(owner))).status_code
        for _ in range(3)
    ]

    assert statuses == [200, 200, 429]
    assert len(fake_provider.calls) == 2
    assert (await client.get(f"{WALLETS}/{address}")).json()["transaction_count"] == 2


async def test_reads_are_not_limited(client):
    owner = new_key()
    for _ in range(20):
        res = await client.get(f"{WALLETS}/derive", params={"owner": str(owner)})
        assert res.status_code == 200
