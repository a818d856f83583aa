"""Credential Service — bcrypt password digests and signed session tokens.

Invariants:
    - Passwords are only ever stored as bcrypt digests (cost from settings)
    - Tokens are HS256 JWTs carrying exactly userId, email, organizationId, role
      plus iat/exp; lifetime from settings (24h default)
    - verify_token raises Unauthorized for missing, malformed, wrongly-signed,
      expired, or incomplete tokens — never returns partial claims
    - Secret and TTL are constructor arguments, not module globals

Design Decisions:
    - bcrypt over hand-rolled hashing: salted, cost-factored, constant-time check
    - PyJWT for signing: exp validation and signature checks come from the library
    - Service instance built once from settings (lru_cache in api/dependencies.py);
      tests build their own with distinct secrets
"""

import logging
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from taskboard.core.domain_types import Role, TokenClaims
from taskboard.core.enforce_access import INVALID_TOKEN_MESSAGE
from taskboard.core.errors import unauthorized

logger = logging.getLogger(__name__)

TOKEN_ALGORITHM = "HS256"
_CLAIM_KEYS = ("userId", "email", "organizationId", "role")


class CredentialService:
    """Hashes/verifies passwords and issues/verifies session tokens."""

    def __init__(
        self,
        secret: str,
        token_ttl: timedelta = timedelta(hours=24),
        bcrypt_rounds: int = 10,
    ):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self.token_ttl = token_ttl
        self.bcrypt_rounds = bcrypt_rounds

    # ─── Passwords ──────────────────────────────────────────────

    def hash_password(self, password: str) -> str:
        """One-way, salted, cost-factored digest."""
        digest = bcrypt.hashpw(
            password.encode("utf-8"), bcrypt.gensalt(rounds=self.bcrypt_rounds),
        )
        return digest.decode("utf-8")

    def verify_password(self, password: str, digest: str) -> bool:
        """Compare a candidate password with a stored digest."""
        try:
            return bcrypt.checkpw(password.encode("utf-8"), digest.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password digest is malformed")
            return False

    # ─── Tokens ─────────────────────────────────────────────────

    def issue_token(self, claims: TokenClaims, now: datetime | None = None) -> str:
        """Sign claims into an opaque token that expires after token_ttl."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            **claims.to_payload(),
            "iat": issued_at,
            "exp": issued_at + self.token_ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=TOKEN_ALGORITHM)

    def verify_token(self, token: str | None) -> TokenClaims:
        """Decode and validate a token, returning exactly its identity claims."""
        if not token:
            raise unauthorized(INVALID_TOKEN_MESSAGE)
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[TOKEN_ALGORITHM],
                options={"require": ["exp", *_CLAIM_KEYS]},
            )
        except jwt.InvalidTokenError as e:
            logger.info(f"Token rejected: {e}")
            raise unauthorized(INVALID_TOKEN_MESSAGE)
        try:
            role = Role(payload["role"])
        except ValueError:
            raise unauthorized(INVALID_TOKEN_MESSAGE)
        return TokenClaims(
            user_id=str(payload["userId"]),
            email=str(payload["email"]),
            organization_id=str(payload["organizationId"]),
            role=role,
        )
