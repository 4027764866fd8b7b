"""Token Transfer Client — HTTP adapter for the external token-transfer service.

Invariants:
    - One POST per transfer; never retried (a retry could move value twice)
    - 2xx → TransferReceipt; anything else → DelegatedTransferFailedError or a subclass
    - Provider error codes classified: insufficient funds → InsufficientBalanceError,
      bad holding → InvalidTokenAccountError, everything else → DelegatedTransferFailedError
    - Timeouts and connection errors are failures, not unknowns: the caller sees an error

Design Decisions:
    - httpx.AsyncClient: same HTTP stack the test suite already drives the API with
    - Wrapper over raw client: isolates error mapping from the transfer executor
    - Singleton token_client initialized on startup, same lifecycle as db_manager
"""

import logging

import httpx

from wallet_program.core.domain_types import PublicKey, TransferReceipt
from wallet_program.core.errors import (
    DelegatedTransferFailedError,
    InsufficientBalanceError,
    InvalidTokenAccountError,
)
from wallet_program.core.repository_protocols import TokenTransferProvider

logger = logging.getLogger(__name__)

TRANSFERS_PATH = "/v1/transfers"

_INSUFFICIENT_BALANCE_CODES = frozenset({"insufficient_funds", "insufficient_balance"})
_INVALID_ACCOUNT_CODES = frozenset({
    "invalid_account", "account_not_found", "owner_mismatch",
    "mint_mismatch", "account_frozen",
})


def classify_failure(code: str, message: str) -> DelegatedTransferFailedError:
    """Map a provider error code to the matching error type."""
    if code in _INSUFFICIENT_BALANCE_CODES:
        return InsufficientBalanceError(message, reason=code)
    if code in _INVALID_ACCOUNT_CODES:
        return InvalidTokenAccountError(message, reason=code)
    return DelegatedTransferFailedError(message, reason=code)


class HttpTokenTransferClient:
    """Calls the token-transfer service over HTTP."""

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = {"Authorization": f"Bearer {api_key}"} if api_key else {}
        self.client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout_seconds,
            transport=transport,
        )

    async def transfer(
        self,
        source: PublicKey,
        destination: PublicKey,
        authority: PublicKey,
        amount: int,
    ) -> TransferReceipt:
        payload = {
            "source": str(source),
            "destination": str(destination),
            "authority": str(authority),
            "amount": amount,
        }
        try:
            response = await self.client.post(TRANSFERS_PATH, json=payload)
        except httpx.TimeoutException:
            raise DelegatedTransferFailedError(
                "Token service timed out", reason="timeout",
            )
        except httpx.HTTPError as e:
            raise DelegatedTransferFailedError(
                f"Token service unreachable: {e}", reason="connection_error",
            )

        if response.is_success:
            body = self._json_or_empty(response)
            logger.info(
                "Token transfer settled",
                extra={"source": payload["source"], "amount": amount},
            )
            return TransferReceipt(signature=body.get("signature"))

        raise self._failure_from_response(response)

    async def aclose(self) -> None:
        await self.client.aclose()

    def _failure_from_response(
        self, response: httpx.Response,
    ) -> DelegatedTransferFailedError:
        """Build the error for a non-2xx response."""
        body = self._json_or_empty(response)
        error = body.get("error") if isinstance(body.get("error"), dict) else body
        code = str(error.get("code") or f"http_{response.status_code}").lower()
        message = str(error.get("message") or response.reason_phrase or "rejected")
        logger.warning(
            f"Token service rejected transfer: {message}",
            extra={"reason": code},
        )
        return classify_failure(code, message)

    def _json_or_empty(self, response: httpx.Response) -> dict:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}


# Singleton (initialized on startup)
token_client: HttpTokenTransferClient | None = None


def init_token_client(base_url: str, **kwargs):
    global token_client
    token_client = HttpTokenTransferClient(base_url, **kwargs)


async def close_token_client() -> None:
    global token_client
    if token_client:
        await token_client.aclose()
        token_client = None


def get_token_provider() -> TokenTransferProvider:
    """FastAPI dependency for the token-transfer provider."""
    if not token_client:
        raise RuntimeError("Token client not initialized")
    return token_client
