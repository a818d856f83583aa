"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - All valid states encoded as Enums — no raw string matching
    - TokenClaims holds exactly the four identity facts carried by a session token

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
    - TokenClaims frozen: claims are facts about the caller, never mutated per request
"""

from dataclasses import dataclass
from enum import Enum


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """User roles. ADMIN unlocks organization routes."""
    ADMIN = "admin"
    STAFF = "staff"


class TodoStatus(str, Enum):
    """Todo lifecycle states — maps to DB `status` column."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class RouteAccess(str, Enum):
    """Access level a route demands from its caller."""
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    ADMIN = "admin"


# ─── Claims ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class TokenClaims:
    """Identity facts embedded in a session token."""
    user_id: str
    email: str
    organization_id: str
    role: Role

    def to_payload(self) -> dict:
        """Wire form used inside the signed token."""
        return {
            "userId": self.user_id,
            "email": self.email,
            "organizationId": self.organization_id,
            "role": self.role.value,
        }
