"""Error Hierarchy — typed, categorized exceptions for all wallet program failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error aborts the whole operation: raised before any wallet mutation,
      or rolled back with the DB session
    - Nothing here is retried internally; errors surface verbatim to the caller
    - to_response() produces the REST envelope

Design Decisions:
    - Single hierarchy with WalletProgramError base: FastAPI global handler catches all
    - InsufficientBalanceError / InvalidTokenAccountError subclass DelegatedTransferFailedError:
      callers that only care about "the token service said no" catch the parent,
      the provider's specific reason is still surfaced when it reports one
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHORIZATION = "authorization"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    RATE_LIMIT = "rate_limit"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    wallet_address: str | None = None
    signer: str | None = None
    debug_info: dict[str, Any] | None = None


class WalletProgramError(Exception):
    """Base exception for all wallet program errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "wallet_address": self.context.wallet_address,
                },
            }
        }


# ─── Precondition Errors ────────────────────────────────────────

class AddressMismatchError(WalletProgramError):
    """Derived address does not match the claimed owner/bump."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "ADDRESS_MISMATCH", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class InvalidPublicKeyError(WalletProgramError):
    """Text is not a base58-encoded 32-byte key."""
    def __init__(self, value: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid public key: {value!r}",
            "INVALID_PUBLIC_KEY", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.value = value


# ─── Domain Errors ──────────────────────────────────────────────

class WalletAlreadyExistsError(WalletProgramError):
    """A wallet record already occupies the derived address."""
    def __init__(self, address: str, context: ErrorContext | None = None):
        super().__init__(
            f"Wallet '{address}' already exists",
            "WALLET_ALREADY_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.address = address


class WalletNotFoundError(WalletProgramError):
    """No wallet record at the requested address."""
    def __init__(self, address: str, context: ErrorContext | None = None):
        super().__init__(
            f"Wallet '{address}' not found",
            "WALLET_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.address = address


class UnauthorizedError(WalletProgramError):
    """Claimed signer is not the wallet owner."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Unauthorized access",
            "UNAUTHORIZED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class CounterOverflowError(WalletProgramError):
    """transaction_count would exceed the unsigned 64-bit range."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Transaction counter overflow",
            "COUNTER_OVERFLOW", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )


class RateLimitExceededError(WalletProgramError):
    """Caller exceeded the request limit for a wallet write."""
    def __init__(self, limit: str, context: ErrorContext | None = None):
        super().__init__(
            f"Rate limit exceeded: {limit}",
            "RATE_LIMIT_EXCEEDED", ErrorCategory.RATE_LIMIT,
            ErrorSeverity.WARNING, context, 429,
        )
        self.limit = limit


# ─── Delegated Transfer Errors ──────────────────────────────────

class DelegatedTransferFailedError(WalletProgramError):
    """The external token-transfer service reported failure."""

    default_code = "DELEGATED_TRANSFER_FAILED"

    def __init__(
        self,
        message: str,
        reason: str = "unknown",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Token transfer failed ({reason}): {message}",
            self.default_code, ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 502,
        )
        self.reason = reason


class InsufficientBalanceError(DelegatedTransferFailedError):
    """Source holding cannot cover the amount."""
    default_code = "INSUFFICIENT_BALANCE"


class InvalidTokenAccountError(DelegatedTransferFailedError):
    """Source or destination holding is not usable for this transfer."""
    default_code = "INVALID_TOKEN_ACCOUNT"


# ─── Infrastructure Errors ──────────────────────────────────────

class CorruptAccountDataError(WalletProgramError):
    """Stored account bytes do not decode as a wallet record."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Corrupt wallet account data: {message}",
            "CORRUPT_ACCOUNT_DATA", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


class DatabaseError(WalletProgramError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
