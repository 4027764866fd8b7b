"""Wallet Routes — initialize, query, derive, and transfer endpoints.

Invariants:
    - The claimed signer comes only from the X-Verified-Signer header, which the
      upstream gateway sets after verifying the request signature
    - Routes parse keys and delegate; no business rule lives here
    - Read endpoints never require the token-transfer client
    - POST endpoints are rate-limited per client (infrastructure/rate_limit.py)

Design Decisions:
    - /derive declared before /{address} so the static path wins the match
    - Handlers built per request from the request-scoped DB session
"""

import logging

from fastapi import APIRouter, Depends, Header, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from wallet_program.config import Settings, get_settings
from wallet_program.core.domain_types import PublicKey
from wallet_program.core.repository_protocols import TokenTransferProvider
from wallet_program.infrastructure.database import get_db
from wallet_program.infrastructure.rate_limit import (
    limiter, transfer_limit, wallet_creation_limit,
)
from wallet_program.infrastructure.token_client import get_token_provider
from wallet_program.schemas.wallet import (
    DerivedAddressResponse,
    TransferCreate,
    TransferResponse,
    WalletCreate,
    WalletResponse,
)
from wallet_program.services.handle_wallet import WalletHandlers

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/wallets", tags=["wallets"])


def get_claimed_signer(
    x_verified_signer: str = Header(..., alias="X-Verified-Signer"),
) -> PublicKey:
    """Already-verified initiator identity, delivered by the gateway."""
    return PublicKey.from_base58(x_verified_signer)


def get_wallet_handlers(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> WalletHandlers:
    return WalletHandlers(db, settings.wallet_namespace, settings.program_key)


def get_transfer_handlers(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    provider: TokenTransferProvider = Depends(get_token_provider),
) -> WalletHandlers:
    return WalletHandlers(
        db, settings.wallet_namespace, settings.program_key, provider,
    )


@router.post(
    "", response_model=WalletResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(wallet_creation_limit)
async def initialize_wallet(
    request: Request,
    body: WalletCreate,
    signer: PublicKey = Depends(get_claimed_signer),
    handlers: WalletHandlers = Depends(get_wallet_handlers),
):
    """Create the owner's wallet at its canonical derived address."""
    info = await handlers.initialize_wallet(
        owner=PublicKey.from_base58(body.owner),
        bump=body.bump,
        claimed_signer=signer,
        address=PublicKey.from_base58(body.address) if body.address else None,
    )
    return WalletResponse(**info.to_dict())


@router.get("/derive", response_model=DerivedAddressResponse)
async def derive_wallet(
    owner: str = Query(..., min_length=32, max_length=44),
    handlers: WalletHandlers = Depends(get_wallet_handlers),
):
    """Canonical address and bump for an owner (no storage access)."""
    owner_key = PublicKey.from_base58(owner)
    address, bump = handlers.derive_wallet(owner_key)
    return DerivedAddressResponse(
        owner=str(owner_key), address=str(address), bump=bump,
    )


@router.get("/{address}", response_model=WalletResponse)
async def get_wallet_info(
    address: str,
    handlers: WalletHandlers = Depends(get_wallet_handlers),
):
    """Owner and transaction count. No authorization required."""
    info = await handlers.get_wallet_info(PublicKey.from_base58(address))
    return WalletResponse(**info.to_dict())


@router.post("/{address}/transfers", response_model=TransferResponse)
@limiter.limit(transfer_limit)
async def transfer_tokens(
    request: Request,
    address: str,
    body: TransferCreate,
    signer: PublicKey = Depends(get_claimed_signer),
    handlers: WalletHandlers = Depends(get_transfer_handlers),
):
    """Owner-authorized transfer between token holdings."""
    wallet_key = PublicKey.from_base58(address)
    outcome = await handlers.transfer_tokens(
        address=wallet_key,
        claimed_signer=signer,
        source=PublicKey.from_base58(body.source),
        destination=PublicKey.from_base58(body.destination),
        amount=body.amount,
    )
    return TransferResponse(
        address=str(wallet_key),
        transaction_count=outcome.transaction_count,
        signature=outcome.receipt.signature,
    )
