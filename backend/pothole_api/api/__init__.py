"""API Layer: FastAPI routes, delegation guard, dependency providers and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every endpoint answers with the {success, ...} envelope (health probes excepted)

Design Decisions:
    - Thin routes: parse and validate, delegate once, wrap the result
"""
