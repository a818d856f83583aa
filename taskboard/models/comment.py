"""Comment ORM — a note left by a user on a todo.

Invariants:
    - todo_id and user_id FKs ON DELETE CASCADE
"""

import uuid

from sqlalchemy import ForeignKey, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from taskboard.db.base import Base, TimestampedRow


class Comment(TimestampedRow, Base):
    """Comment entity."""
    __tablename__ = "comments"

    content: Mapped[str] = mapped_column(Text, nullable=False)
    todo_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("todos.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
