"""Services Layer: baseline delegates behind the core/repository_protocols contracts.

Invariants:
    - Each service is constructed per request by api/dependencies.py (no module singletons)
    - Services return JSON-ready dicts and lists

Design Decisions:
    - One file per delegate for locality
"""
