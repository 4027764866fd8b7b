"""Wallet Program Package — owner-authorized wallet records and delegated token transfers.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
