"""Request Schemas — JSON payload shapes accepted by write endpoints.

Invariants:
    - Every field defaults to None; presence and shape rules live in core
    - Wire names are camelCase (organizationId, userId, ...) except todo fields,
      which clients send as snake_case (due_date, project_id)
    - Identifiers parse as UUIDs; malformed ids fail as request-shape errors

Design Decisions:
    - populate_by_name=True: tests and internal callers may use field names
    - coerce_numbers_to_str=True: numeric names/titles reach core checks as text
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)


class OrganizationPayload(_Payload):
    """Organization create/update."""
    name: str | None = None


class UserRegister(_Payload):
    """Public registration payload."""
    name: str | None = None
    email: str | None = None
    organization_id: UUID | None = Field(None, alias="organizationId")
    password: str | None = None
    role: str | None = None


class LoginRequest(_Payload):
    email: str | None = None
    password: str | None = None


class UserUpdate(_Payload):
    name: str | None = None
    email: str | None = None
    organization_id: UUID | None = Field(None, alias="organizationId")


class ProjectPayload(_Payload):
    """Project create/update."""
    name: str | None = None
    description: str | None = None
    organization_id: UUID | None = Field(None, alias="organizationId")


class MembershipCreate(_Payload):
    """Add a user to the project named in the path."""
    user_id: UUID | None = Field(None, alias="userId")


class TodoPayload(_Payload):
    """Todo create/update."""
    title: str | None = None
    description: str | None = None
    due_date: str | None = None
    project_id: UUID | None = None


class TodoStatusPatch(_Payload):
    status: str | None = None


class TodoAssigneePatch(_Payload):
    assigned_user_id: UUID | None = Field(None, alias="assignedUserId")


class CommentCreate(_Payload):
    """Comment on a todo. Under a todo path, todoId may be omitted or must match."""
    content: str | None = None
    todo_id: UUID | None = Field(None, alias="todoId")
    user_id: UUID | None = Field(None, alias="userId")


class CommentUpdate(_Payload):
    content: str | None = None
