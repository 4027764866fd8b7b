"""Core Layer — key derivation, record layout, and authorization rules.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Nothing here awaits or touches storage; every function is deterministic

Design Decisions:
    - Storage and the token service sit behind protocols (repository_protocols.py)
      so the rules can be tested without a database
"""
