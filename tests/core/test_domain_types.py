"""Tests for domain types — enums and token claims."""

import dataclasses

import pytest

from taskboard.core.domain_types import Role, RouteAccess, TodoStatus, TokenClaims


def test_role_values():
    assert {r.value for r in Role} == {"admin", "staff"}


def test_todo_status_values():
    assert [s.value for s in TodoStatus] == ["pending", "in_progress", "done"]


def test_route_access_levels():
    assert RouteAccess("admin") == RouteAccess.ADMIN


def test_enums_are_strings():
    assert Role.ADMIN == "admin"
    assert TodoStatus.DONE == "done"


def test_claims_payload_has_exactly_four_keys():
    claims = TokenClaims(
        user_id="u-1", email="ada@example.com", organization_id="o-1", role=Role.STAFF,
    )
    assert claims.to_payload() == {
        "userId": "u-1",
        "email": "ada@example.com",
        "organizationId": "o-1",
        "role": "staff",
    }


def test_claims_are_frozen():
    claims = TokenClaims(
        user_id="u-1", email="ada@example.com", organization_id="o-1", role=Role.STAFF,
    )
    with pytest.raises(dataclasses.FrozenInstanceError):
        claims.role = Role.ADMIN
