"""Error Handlers — map every failure to the wallet API's JSON error envelope.

Invariants:
    - Every error body has the shape {"error": {code, message, category, severity, ...}}
    - Failed delegated transfers also carry the token service's `reason`
    - Request validation failures carry per-field `details` and return 400, not 422
    - slowapi limit breaches become RateLimitExceededError (429) in the same envelope
    - Unhandled exceptions return a fixed INTERNAL_ERROR body; internals never leak

Design Decisions:
    - 4xx domain errors logged at WARNING, 5xx at ERROR: rejected signers and
      insufficient balances are routine, a corrupt account is not
    - Path parameters logged as wallet_address when the error context has none,
      so every rejected instruction can be traced to its wallet
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from slowapi.errors import RateLimitExceeded

from wallet_program.core.errors import (
    DelegatedTransferFailedError, ErrorCategory, ErrorSeverity, WalletProgramError,
)
from wallet_program.infrastructure.rate_limit import to_rate_limit_error

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Install domain, validation, and catch-all handlers on the app."""
    app.add_exception_handler(WalletProgramError, handle_wallet_error)
    app.add_exception_handler(RateLimitExceeded, handle_rate_limit)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


async def handle_wallet_error(request: Request, exc: WalletProgramError):
    wallet_address = exc.context.wallet_address or request.path_params.get("address")
    logger.log(
        logging.ERROR if exc.http_status >= 500 else logging.WARNING,
        f"{request.method} {request.url.path} rejected: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "wallet_address": wallet_address,
            "signer": exc.context.signer,
        },
    )
    body = exc.to_response()
    if isinstance(exc, DelegatedTransferFailedError):
        body["error"]["reason"] = exc.reason
    return JSONResponse(status_code=exc.http_status, content=body)


async def handle_rate_limit(request: Request, exc: RateLimitExceeded):
    return await handle_wallet_error(request, to_rate_limit_error(request, exc))


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    logger.warning(
        f"Invalid request to {request.url.path}: "
        f"{', '.join(d['field'] for d in details)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, details=details,
        ),
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
        extra={"path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )


def _envelope(
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    **fields,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **fields,
        },
    }
