"""Wallet Program API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map WalletProgramError → structured JSON responses
    - Database and token-service client initialized on startup, closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Program identity read once from settings at startup and logged, so a
      misconfigured PROGRAM_ID fails the boot rather than the first request
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wallet_program.api.error_handlers import register_error_handlers
from wallet_program.api.routes import health, wallets
from wallet_program.config import get_settings
from wallet_program.infrastructure import database
from wallet_program.infrastructure.database import init_db
from wallet_program.infrastructure.observability import setup_logging
from wallet_program.infrastructure.rate_limit import limiter
from wallet_program.infrastructure.token_client import (
    close_token_client, init_token_client,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    init_token_client(
        settings.token_service_url,
        api_key=settings.token_service_api_key,
        timeout_seconds=settings.token_service_timeout_seconds,
    )
    logger.info(f"Wallet program API started (program {settings.program_key})")
    yield
    await close_token_client()
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Wallet program API shutting down")


app = FastAPI(
    title="Wallet Program API", version="1.0.0", lifespan=lifespan,
)
app.state.limiter = limiter

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(wallets.router)

register_error_handlers(app)
