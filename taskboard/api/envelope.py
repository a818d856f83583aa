"""Response Envelopes — success bodies shared by every endpoint.

Invariants:
    - Success: {"success": true, "data": ...}; deletes omit "data"
    - ORM rows are converted through a response schema, never dumped raw
"""

from typing import Any, Iterable

from pydantic import BaseModel


def ok(data: Any = None) -> dict:
    if data is None:
        return {"success": True}
    return {"success": True, "data": data}


def ok_row(view: type[BaseModel], row: Any) -> dict:
    return ok(view.model_validate(row))


def ok_rows(view: type[BaseModel], rows: Iterable[Any]) -> dict:
    return ok([view.model_validate(row) for row in rows])
