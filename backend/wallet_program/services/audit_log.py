"""Audit Log — best-effort append of AuditEvent rows.

Invariants:
    - Called only after the wallet change it describes is committed (or rolled back)
    - Each event is committed in its own transaction
    - Never raises on database failure: the error is logged, the session rolled back,
      and the wallet operation's result is returned unchanged
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wallet_program.core.domain_types import WalletEventType
from wallet_program.models.audit_event import AuditEvent

logger = logging.getLogger(__name__)


async def append_event(
    db: AsyncSession,
    wallet_address: str,
    event_type: WalletEventType,
    success: bool,
    signer: str | None = None,
    amount: int | None = None,
    error_code: str | None = None,
) -> bool:
    """Insert and commit one audit event. Returns False if it could not be stored."""
    db.add(AuditEvent(
        wallet_address=wallet_address,
        event_type=event_type.value,
        signer=signer,
        amount=None if amount is None else str(amount),
        success=success,
        error_code=error_code,
    ))
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.warning(
            f"Audit event '{event_type.value}' not stored: {e}",
            extra={"wallet_address": wallet_address, "error_code": error_code},
        )
        return False
    return True
