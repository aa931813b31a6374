"""Infrastructure Layer: database session management and structured logging.

Invariants:
    - Infrastructure imports only core/errors from the core layer
    - Driver exceptions are mapped to DatabaseError before leaving this layer

Design Decisions:
    - Cross-cutting concerns isolated from routes and services
"""
