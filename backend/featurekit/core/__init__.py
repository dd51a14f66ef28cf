"""Core Layer — pure validation and document logic, no IO, no async, no logging.

Invariants:
    - No module in core/ imports from api/, infrastructure/, or config
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell (response adapter lives in api/)
"""
