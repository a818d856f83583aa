"""Route Modules — one file per resource.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain business logic (delegate to services/handle_*.py)
    - Access level declared per router or per route via api/dependencies.py

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
