"""Initial schema — organizations, users, projects, project_users, todos, comments.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

Every child FK carries its ondelete rule at the database level: removing an
organization cascades to its users and projects, removing a project cascades
to its todos and memberships, and removing a user nulls todo assignees.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True),
            nullable=False, server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True),
            nullable=False, server_default=sa.func.now(),
        ),
    ]


def _fk(column: str, target: str, ondelete: str, nullable: bool = False) -> sa.Column:
    return sa.Column(
        column, UUID(as_uuid=True),
        sa.ForeignKey(target, ondelete=ondelete), nullable=nullable,
    )


def upgrade() -> None:
    op.create_table(
        "organizations",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_organizations_name", "organizations", ["name"])

    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        _fk("organization_id", "organizations.id", "CASCADE"),
        *_timestamps(),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )
    op.create_index("ix_users_organization_id", "users", ["organization_id"])

    op.create_table(
        "projects",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        _fk("organization_id", "organizations.id", "CASCADE"),
        *_timestamps(),
        sa.UniqueConstraint("name", name="uq_projects_name"),
    )
    op.create_index("ix_projects_organization_id", "projects", ["organization_id"])

    op.create_table(
        "project_users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        _fk("project_id", "projects.id", "CASCADE"),
        _fk("user_id", "users.id", "CASCADE"),
        *_timestamps(),
        sa.UniqueConstraint("project_id", "user_id", name="uq_project_users_pair"),
    )
    op.create_index("ix_project_users_project_id", "project_users", ["project_id"])
    op.create_index("ix_project_users_user_id", "project_users", ["user_id"])

    op.create_table(
        "todos",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        _fk("project_id", "projects.id", "CASCADE"),
        _fk("assigned_user_id", "users.id", "SET NULL", nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_todos_project_id", "todos", ["project_id"])
    op.create_index("ix_todos_assigned_user_id", "todos", ["assigned_user_id"])

    op.create_table(
        "comments",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("content", sa.Text, nullable=False),
        _fk("todo_id", "todos.id", "CASCADE"),
        _fk("user_id", "users.id", "CASCADE"),
        *_timestamps(),
    )
    op.create_index("ix_comments_todo_id", "comments", ["todo_id"])
    op.create_index("ix_comments_user_id", "comments", ["user_id"])


def downgrade() -> None:
    for table in (
        "comments", "todos", "project_users", "projects", "users", "organizations",
    ):
        op.drop_table(table)
