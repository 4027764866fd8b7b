"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (key format, u8/u64 ranges)
    - Routes convert validated strings to PublicKey before calling handlers

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
