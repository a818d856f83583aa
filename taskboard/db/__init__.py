"""Database Layer — declarative base and the shared row columns.

Invariants:
    - All ORM models share db/base.py's Base metadata
"""
