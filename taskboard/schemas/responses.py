"""Response Schemas — public views of persisted rows.

Invariants:
    - Built from ORM rows (from_attributes); never include User.password
    - Timestamps serialize as ISO-8601 strings
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class _RowView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime
    updated_at: datetime


class OrganizationView(_RowView):
    name: str


class UserView(_RowView):
    name: str
    email: str
    role: str
    organization_id: UUID


class ProjectView(_RowView):
    name: str
    description: str | None = None
    organization_id: UUID


class MembershipView(_RowView):
    project_id: UUID
    user_id: UUID


class TodoView(_RowView):
    title: str
    description: str | None = None
    status: str
    due_date: datetime | None = None
    project_id: UUID
    assigned_user_id: UUID | None = None


class CommentView(_RowView):
    content: str
    todo_id: UUID
    user_id: UUID
