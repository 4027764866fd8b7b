"""Structured Logging — JSONFormatter surfaces wallet fields."""

import json
import logging

from wallet_program.infrastructure.observability import JSONFormatter


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord(
        "wallet_program.test", logging.INFO, __file__, 1,
        "Transfer completed", None, None,
    )
    record.wallet_address = "WalletAddr"
    record.amount = 7

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "Transfer completed"
    assert payload["level"] == "INFO"
    assert payload["service"] == "wallet-program"
    assert payload["wallet_address"] == "WalletAddr"
    assert payload["amount"] == 7
    assert "signer" not in payload


def test_setup_logging_is_idempotent():
    from wallet_program.infrastructure.observability import setup_logging

    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging("DEBUG")
        setup_logging("warning", fmt="text")
        assert len(root.handlers) == 1
        assert root.level == logging.WARNING
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
