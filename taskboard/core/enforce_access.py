"""Access Control Gate — per-request authorization decision from verified claims.

Invariants:
    - All functions are PURE: no IO, no token decoding, no DB
    - PUBLIC routes never consult claims
    - Every other route requires claims; ADMIN routes also require role == admin
    - Failures raise Unauthorized with a stable message

Design Decisions:
    - Route-scoped, not resource-scoped: any authenticated caller may act on any
      project, todo or comment it can address by id (binary admin elevation only)
    - Bearer parsing lives here so the shell only hands over the raw header
"""

from taskboard.core.domain_types import Role, RouteAccess, TokenClaims
from taskboard.core.errors import unauthorized

TOKEN_REQUIRED_MESSAGE = "Authorization token required"
INVALID_TOKEN_MESSAGE = "Invalid or expired token"
ADMIN_REQUIRED_MESSAGE = "Admin access required"

_BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: str | None) -> str:
    """Return the token from an `Authorization: Bearer <token>` header."""
    if not authorization or not authorization.startswith(_BEARER_PREFIX):
        raise unauthorized(TOKEN_REQUIRED_MESSAGE)
    token = authorization[len(_BEARER_PREFIX):].strip()
    if not token:
        raise unauthorized(TOKEN_REQUIRED_MESSAGE)
    return token


def authorize(claims: TokenClaims | None, access: RouteAccess) -> None:
    """Rule: public passes, authenticated needs claims, admin needs the admin role."""
    if access == RouteAccess.PUBLIC:
        return
    if claims is None:
        raise unauthorized(TOKEN_REQUIRED_MESSAGE)
    if access == RouteAccess.ADMIN and claims.role != Role.ADMIN:
        raise unauthorized(ADMIN_REQUIRED_MESSAGE)
