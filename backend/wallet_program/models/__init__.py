"""ORM Models — SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - WalletAccount is the sole business entity; AuditEvent is observability only

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from wallet_program.models.wallet_account import WalletAccount  # noqa: F401
from wallet_program.models.audit_event import AuditEvent  # noqa: F401
