"""Organization ORM — top-level tenant grouping users and projects.

Invariants:
    - name is non-nullable; not unique in schema, used as a lookup filter
    - Deleting an organization cascades to its users and projects (DB ondelete)
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from taskboard.db.base import Base, TimestampedRow


class Organization(TimestampedRow, Base):
    """Organization — owns users and projects."""
    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
