"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Organization is the root; every other row hangs off it through FKs

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
      or Alembic autogenerate runs
"""

from taskboard.models.organization import Organization  # noqa: F401
from taskboard.models.user import User  # noqa: F401
from taskboard.models.project import Project  # noqa: F401
from taskboard.models.project_user import ProjectUser  # noqa: F401
from taskboard.models.todo import Todo  # noqa: F401
from taskboard.models.comment import Comment  # noqa: F401
