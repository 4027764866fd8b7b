"""Services Layer — wallet store, transfer executor, handlers, audit log.

Invariants:
    - Services stage changes; only handlers commit or roll back
    - No service talks to the token service except through TokenTransferProvider
"""
