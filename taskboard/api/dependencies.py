"""Route Dependencies — credential service construction and the access gate.

Invariants:
    - One CredentialService per process, built from settings (lru_cache)
    - get_current_claims: bearer header → verified claims, else 401
    - require_admin: verified claims with role admin, else 401
    - Public routes (register, login) simply do not depend on either

Design Decisions:
    - FastAPI dependencies over middleware path lists: the access level sits
      next to each route and tests can override get_credential_service
"""

from functools import lru_cache

from fastapi import Depends, Header

from taskboard.config import get_settings
from taskboard.core.domain_types import RouteAccess, TokenClaims
from taskboard.core.enforce_access import authorize, extract_bearer_token
from taskboard.infrastructure.credentials import CredentialService


@lru_cache(maxsize=1)
def get_credential_service() -> CredentialService:
    settings = get_settings()
    return CredentialService(
        secret=settings.jwt_secret,
        token_ttl=settings.token_ttl,
        bcrypt_rounds=settings.bcrypt_rounds,
    )


async def get_current_claims(
    authorization: str | None = Header(None),
    credentials: CredentialService = Depends(get_credential_service),
) -> TokenClaims:
    token = extract_bearer_token(authorization)
    claims = credentials.verify_token(token)
    authorize(claims, RouteAccess.AUTHENTICATED)
    return claims


async def require_admin(
    claims: TokenClaims = Depends(get_current_claims),
) -> TokenClaims:
    authorize(claims, RouteAccess.ADMIN)
    return claims
