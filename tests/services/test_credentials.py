"""Credential Service — password digests and signed session tokens.

Invariants:
    - Token round-trip yields exactly the four identity claims
    - Expired, tampered, wrongly-signed or incomplete tokens raise Unauthorized
    - Digests verify only against the original password
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from taskboard.core.domain_types import Role, TokenClaims
from taskboard.core.enforce_access import INVALID_TOKEN_MESSAGE
from taskboard.core.errors import ErrorKind, TaskboardError
from taskboard.infrastructure.credentials import CredentialService

CLAIMS = TokenClaims(
    user_id="0190b6c2-0000-7000-8000-000000000001",
    email="ada@example.com",
    organization_id="0190b6c2-0000-7000-8000-000000000002",
    role=Role.ADMIN,
)


@pytest.fixture
def service():
    return CredentialService("unit-secret", bcrypt_rounds=4)


def _assert_rejected(service, token):
    with pytest.raises(TaskboardError) as exc_info:
        service.verify_token(token)
    assert exc_info.value.kind == ErrorKind.UNAUTHORIZED
    assert exc_info.value.message == INVALID_TOKEN_MESSAGE


# ─── Passwords ───────────────────────────────────────────────────

def test_hash_is_not_the_password(service):
    digest = service.hash_password("Abcdef1!")
    assert digest != "Abcdef1!"
    assert digest.startswith("$2")


def test_verify_accepts_original_password(service):
    digest = service.hash_password("Abcdef1!")
    assert service.verify_password("Abcdef1!", digest)


def test_verify_rejects_other_password(service):
    digest = service.hash_password("Abcdef1!")
    assert not service.verify_password("Abcdef1?", digest)


def test_verify_rejects_malformed_digest(service):
    assert not service.verify_password("Abcdef1!", "not-a-bcrypt-digest")


def test_same_password_hashes_differently(service):
    assert service.hash_password("Abcdef1!") != service.hash_password("Abcdef1!")


# ─── Tokens ──────────────────────────────────────────────────────

def test_token_round_trip_yields_exact_claims(service):
    token = service.issue_token(CLAIMS)
    assert service.verify_token(token) == CLAIMS


def test_token_payload_carries_only_identity_and_timestamps(service):
    token = service.issue_token(CLAIMS)
    payload = jwt.decode(token, options={"verify_signature": False})
    assert set(payload) == {"userId", "email", "organizationId", "role", "iat", "exp"}


def test_token_expires_after_ttl(service):
    issued = datetime.now(timezone.utc) - timedelta(hours=25)
    token = service.issue_token(CLAIMS, now=issued)
    _assert_rejected(service, token)


def test_token_valid_just_inside_ttl(service):
    issued = datetime.now(timezone.utc) - timedelta(hours=23)
    token = service.issue_token(CLAIMS, now=issued)
    assert service.verify_token(token).email == CLAIMS.email


def test_token_from_other_secret_rejected(service):
    other = CredentialService("another-secret", bcrypt_rounds=4)
    _assert_rejected(service, other.issue_token(CLAIMS))


def test_tampered_token_rejected(service):
    token = service.issue_token(CLAIMS)
    _assert_rejected(service, token[:-2] + ("aa" if token[-2:] != "aa" else "bb"))


@pytest.mark.parametrize("token", [None, "", "not.a.token"])
def test_malformed_token_rejected(service, token):
    _assert_rejected(service, token)


def test_token_missing_claim_rejected(service):
    payload = {
        "userId": CLAIMS.user_id,
        "email": CLAIMS.email,
        "role": "admin",
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
    }
    _assert_rejected(service, jwt.encode(payload, "unit-secret", algorithm="HS256"))


def test_token_with_unknown_role_rejected(service):
    payload = {
        **CLAIMS.to_payload(),
        "role": "owner",
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
    }
    _assert_rejected(service, jwt.encode(payload, "unit-secret", algorithm="HS256"))


def test_empty_secret_refused():
    with pytest.raises(ValueError):
        CredentialService("")
