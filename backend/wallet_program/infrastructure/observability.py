"""Structured Logging — JSON log lines carrying wallet and transfer fields.

Invariants:
    - Every line has timestamp, level, logger, service, and message
    - Wallet fields (wallet_address, signer, amount, ...) copied from `extra=` when present
    - setup_logging is idempotent: calling it twice never duplicates output

Design Decisions:
    - JSONFormatter on stdlib logging: log shippers parse one object per line
    - u64 amounts and PublicKey values rendered with str() so JSON never overflows or fails
    - SQLAlchemy engine and httpx loggers held at WARNING; per-query and per-request
      lines drown out transfer events
"""

import logging
import json
from datetime import datetime, timezone

SERVICE_NAME = "wallet-program"

_WALLET_FIELDS = (
    "wallet_address", "owner", "signer", "source", "destination",
    "amount", "transaction_count", "error_code", "reason", "path",
)
_NOISY_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore")


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": SERVICE_NAME,
            "message": record.getMessage(),
        }
        entry.update({
            field: getattr(record, field)
            for field in _WALLET_FIELDS
            if getattr(record, field, None) is not None
        })
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install a single stream handler on the root logger."""
    handler = logging.StreamHandler()
    handler.setFormatter(
        JSONFormatter() if fmt == "json"
        else logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"),
    )
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
