"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - program_id is the process-wide program identity; frozen after startup

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - program_id validated as a base58 32-byte key at load time, not at first use
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from wallet_program.core.domain_types import PublicKey
from wallet_program.core.errors import InvalidPublicKeyError


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, frozen=True,
    )

    # Database
    database_url: str = (
        "postgresql+asyncpg://wallet:wallet@db:5432/wallet"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres provides postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Program identity
    program_id: str = "Fg6PaFpoGXkYsidMpWTK6W2BeZ7FEfcYkg476zPFsLnS"
    wallet_seed: str = "wallet"

    @field_validator("program_id")
    @classmethod
    def validate_program_id(cls, v: str) -> str:
        try:
            PublicKey.from_base58(v)
        except InvalidPublicKeyError as e:
            raise ValueError(e.message)
        return v

    # Token-transfer service
    token_service_url: str = "http://token-service:8080"
    token_service_api_key: str | None = None
    token_service_timeout_seconds: float = 30.0

    # Rate limits (slowapi / `limits` notation)
    rate_limit_enabled: bool = True
    rate_limit_storage_uri: str = "memory://"
    rate_limit_wallet_creation: str = "5/minute"
    rate_limit_transfers: str = "30/minute"

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def program_key(self) -> PublicKey:
        return PublicKey.from_base58(self.program_id)

    @property
    def wallet_namespace(self) -> bytes:
        return self.wallet_seed.encode("utf-8")


@lru_cache
def get_settings() -> Settings:
    return Settings()
