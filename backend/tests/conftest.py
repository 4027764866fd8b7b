"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database or token service
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("TOKEN_SERVICE_URL", "http://token-service.test")
