"""User ORM — an organization member who can log in.

Invariants:
    - email is globally unique (uq_users_email backs the pre-check)
    - password holds a bcrypt digest and is never serialized to clients
    - role in {admin, staff}
    - organization_id FK with ON DELETE CASCADE

Design Decisions:
    - No ORM relationships: deletes go through Core statements and the DB
      enforces cascades, so nothing stale lingers in the identity map
"""

import uuid

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from taskboard.db.base import Base, TimestampedRow


class User(TimestampedRow, Base):
    """User entity."""
    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("email", name="uq_users_email"),)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    organization_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
