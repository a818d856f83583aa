"""Boundary Protocols — contracts between the coordinator and the entity store.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Every by-id lookup returns a single row or None (never a list-wrapped row)
    - delete_by_id reports how many rows it removed
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO
"""

from typing import Any, Protocol, TypeVar
from uuid import UUID

RowT = TypeVar("RowT")


class EntityStoreLike(Protocol[RowT]):
    """Per-entity CRUD contract — implemented by infrastructure/entity_store.py."""
    async def create(self, **values: Any) -> RowT: ...
    async def get_by_id(self, row_id: UUID) -> RowT | None: ...
    async def get_by_field(self, field: str, value: Any) -> RowT | None: ...
    async def exists(self, row_id: UUID) -> bool: ...
    async def update(self, row_id: UUID, values: dict[str, Any]) -> RowT | None: ...
    async def delete_by_id(self, row_id: UUID) -> int: ...
    async def list_all(self) -> list[RowT]: ...
    async def list_where(self, **filters: Any) -> list[RowT]: ...
