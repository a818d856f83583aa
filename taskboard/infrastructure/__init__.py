"""Infrastructure Layer — persistence, credentials and cross-cutting concerns.

Invariants:
    - Infrastructure depends on core/ for types and errors, never on api/ or services/
    - Library failures (SQLAlchemy, PyJWT, bcrypt) mapped to TaskboardError kinds

Design Decisions:
    - Thin wrappers over third-party clients keep services free of library details
"""
