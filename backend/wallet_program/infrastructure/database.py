"""Database Session Manager — async engine, request sessions, and readiness checks.

Invariants:
    - A session that raises is rolled back before the error leaves this module
    - WalletProgramError passes through unchanged; SQLAlchemy errors become DatabaseError
    - Sessions never commit on their own: handlers decide the transaction boundary
    - Readiness means the database answers AND the wallet_accounts table exists

Design Decisions:
    - Singleton db_manager initialized in the FastAPI lifespan, exposed via get_db
    - expire_on_commit=False: handlers read records after commit without a reload
    - pool_pre_ping: a transfer must not fail on a connection dropped while idle
    - Duplicate wallets never reach the IntegrityError mapping here; WalletStore
      turns them into WalletAlreadyExistsError at flush time
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from wallet_program.core.errors import DatabaseError, WalletProgramError

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIErrors.
_SQLALCHEMY_ERRORS: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "Integrity constraint violated", "commit"),
    (OperationalError, "Connection or operational error", "execute"),
    (DBAPIError, "Database driver error", "query"),
    (SQLAlchemyError, "Database operation failed", "unknown"),
)


def to_database_error(exc: SQLAlchemyError) -> DatabaseError:
    """Translate a SQLAlchemy exception into the domain DatabaseError."""
    for exc_type, message, operation in _SQLALCHEMY_ERRORS:
        if isinstance(exc, exc_type):
            return DatabaseError(message, operation)
    return DatabaseError("Database operation failed", "unknown")


class DatabaseSessionManager:
    """Owns the engine and hands out sessions that roll back on failure."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except WalletProgramError:
            await session.rollback()
            raise
        except SQLAlchemyError as e:
            await session.rollback()
            error = to_database_error(e)
            logger.error(
                f"Database {error.operation} failed: {e}",
                extra={"error_code": error.code},
            )
            raise error from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """True when the database answers and the wallet schema is migrated."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
                await db.execute(text("SELECT 1 FROM wallet_accounts LIMIT 1"))
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
