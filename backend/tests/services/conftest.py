"""Service test fixtures — async DB, fake token service, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - get_token_provider overridden with the same FakeTokenTransferProvider the test sees
    - seed_wallet writes account rows directly, bypassing handlers (for corrupt/edge states)

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for store and route tests
      (row locks are no-ops there; SQLite already serializes writers)
    - db_manager and token_client patched: readiness probe reads both singletons directly
    - Rate-limit counters reset per client fixture so tests never share a budget
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from wallet_program.core.derive_address import find_wallet_address
from wallet_program.core.wallet_layout import encode_wallet
from wallet_program.core.wallet_state import WalletRecord
from wallet_program.db.base import Base
from wallet_program.infrastructure.database import get_db, DatabaseSessionManager
from wallet_program.infrastructure.token_client import get_token_provider
from wallet_program.models.wallet_account import WalletAccount
from wallet_program.services.handle_wallet import WalletHandlers
import wallet_program.infrastructure.database as db_module
import wallet_program.infrastructure.token_client as token_module
from wallet_program.infrastructure.rate_limit import limiter
from wallet_program.main import app
from tests.factories import NAMESPACE, PROGRAM_ID
from tests.services.fake_token_service import FakeTokenTransferProvider


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def fake_provider():
    return FakeTokenTransferProvider()


@pytest.fixture
def handlers(test_db, fake_provider):
    return WalletHandlers(test_db, NAMESPACE, PROGRAM_ID, fake_provider)


@pytest.fixture
def seed_wallet(test_db):
    """Insert a wallet account row directly. Returns (address, record).

    bump defaults to the canonical bump; pass another to simulate a corrupt row.
    """
    async def _seed(owner, transaction_count=0, bump=None):
        address, canonical_bump = find_wallet_address(NAMESPACE, owner, PROGRAM_ID)
        record = WalletRecord(
            owner=owner,
            bump=canonical_bump if bump is None else bump,
            transaction_count=transaction_count,
        )
        test_db.add(WalletAccount(
            address=str(address), owner=str(owner), data=encode_wallet(record),
        ))
        await test_db.commit()
        return address, record

    return _seed


@pytest.fixture
async def client(test_engine, test_session_factory, fake_provider, monkeypatch):
    """FastAPI test client with DB and token provider dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_provider] = lambda: fake_provider
    monkeypatch.setattr(token_module, "token_client", fake_provider)
    limiter.reset()

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
