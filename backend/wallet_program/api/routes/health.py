"""Health & Readiness Probes — liveness and readiness for the wallet API.

Invariants:
    - GET /health/ returns 200 whenever the process is up and reports the program id
    - GET /health/ready returns 503 unless the database is reachable and migrated
      and the token-service client has been initialized

Design Decisions:
    - The token service is never called from a probe: a probe must not move value,
      and its outages already surface per transfer as DelegatedTransferFailedError
    - Managers read through their modules at request time so lifespan init and
      test overrides are both visible
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from wallet_program.config import Settings, get_settings
from wallet_program.infrastructure import database, token_client

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check(settings: Settings = Depends(get_settings)):
    """Liveness probe."""
    return {
        "status": "healthy",
        "service": "wallet-program-api",
        "program_id": settings.program_id,
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe: database and token-service client."""
    manager = database.db_manager
    checks = {
        "database": (
            "healthy" if manager and await manager.health_check() else "unavailable"
        ),
        "token_service": (
            "configured" if token_client.token_client else "not_configured"
        ),
    }
    if any(value not in ("healthy", "configured") for value in checks.values()):
        logger.warning("Readiness check failed", extra={"reason": str(checks)})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": checks},
        )
    return {"status": "ready", "checks": checks}
