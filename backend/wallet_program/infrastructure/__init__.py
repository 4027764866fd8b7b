"""Infrastructure Layer — database sessions, logging, and the token-service client.

Invariants:
    - Infrastructure never imports from services/ or api/
    - External failures mapped to WalletProgramError subclasses before leaving this layer

Design Decisions:
    - Module-level singletons initialized in the FastAPI lifespan, exposed as dependencies
"""
