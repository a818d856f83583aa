"""API Layer — FastAPI routes, dependencies, envelopes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return the {"success": ..., "data"/"message": ...} envelope

Design Decisions:
    - Thin routes delegate to services/handle_*.py
"""
