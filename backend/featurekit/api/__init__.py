"""API Layer — response adapter and error handlers for host FastAPI applications.

Invariants:
    - No routes are defined here; hosts own routing
    - All responses are JSON encoded with Decimal precision preserved
"""
