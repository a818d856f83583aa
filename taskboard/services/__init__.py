"""Services Layer — entity handlers and the integrity coordinator.

Invariants:
    - Every write runs: payload rules (core) → integrity checks → store write → commit
    - Handlers own the transaction boundary; the entity store never commits

Design Decisions:
    - One handler file per entity family for locality
"""
