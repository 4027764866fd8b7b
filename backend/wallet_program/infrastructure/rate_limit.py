"""Rate Limiting — per-client request limits on wallet writes (slowapi).

Invariants:
    - Limits are per client: the verified signer when the gateway sent one, else the peer IP
    - Wallet creation and transfers have separate limits, both read from Settings per request
    - An exceeded limit is a RateLimitExceededError (429) in the standard error envelope
    - Reads (GET) are never limited

Design Decisions:
    - Keyed by signer before IP: many wallets sit behind one gateway address
    - In-memory storage: limits are per process; a shared backend can be set via
      RATE_LIMIT_STORAGE_URI (any `limits` storage URI)
"""

from fastapi import Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from wallet_program.config import get_settings
from wallet_program.core.errors import ErrorContext, RateLimitExceededError

SIGNER_HEADER = "X-Verified-Signer"


def client_key(request: Request) -> str:
    """Bucket key for the caller of this request."""
    signer = request.headers.get(SIGNER_HEADER, "").strip()
    if signer:
        return f"signer:{signer}"
    return f"ip:{get_remote_address(request)}"


def wallet_creation_limit() -> str:
    return get_settings().rate_limit_wallet_creation


def transfer_limit() -> str:
    return get_settings().rate_limit_transfers


_settings = get_settings()
limiter = Limiter(
    key_func=client_key,
    enabled=_settings.rate_limit_enabled,
    storage_uri=_settings.rate_limit_storage_uri,
)


def to_rate_limit_error(request: Request, exc: RateLimitExceeded) -> RateLimitExceededError:
    """Convert slowapi's exception into the domain error."""
    signer = request.headers.get(SIGNER_HEADER)
    return RateLimitExceededError(
        str(exc.detail),
        ErrorContext(
            wallet_address=request.path_params.get("address"),
            signer=signer,
        ),
    )
