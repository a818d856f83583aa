"""Payload Enforcement — field-presence and shape rules guarding every write.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - Rules run in a fixed order per operation; the first violation raises
      BadRequest and short-circuits the rest
    - Messages are part of the public contract and must stay stable
    - Passwords are rejected here, before anything reaches the hasher

Design Decisions:
    - Raise TaskboardError (not return dicts): handlers stop at the first
      failure and the boundary renders it, no result threading needed
    - Presence uses truthiness: "" and None are both "missing"
    - check_todo receives `now` so the future-date boundary is testable
    - The 72 password limit counts UTF-8 bytes, not characters: bcrypt only
      consumes 72 bytes, so a shorter password with multi-byte characters is
      rejected even though it has fewer than 72 characters
    - Email shape uses fullmatch: a trailing newline is not a valid address
"""

import re
from datetime import datetime, timezone

from taskboard.core.domain_types import Role, TodoStatus
from taskboard.core.errors import bad_request

NAME_MIN_LENGTH = 3
TODO_TEXT_MIN_LENGTH = 3
TODO_TEXT_MAX_LENGTH = 255
# bcrypt only consumes the first 72 bytes of its input
PASSWORD_MAX_BYTES = 72
PASSWORD_MIN_LENGTH = 8

PASSWORD_SYMBOLS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"

_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_SYMBOL_RE = re.compile("[" + re.escape(PASSWORD_SYMBOLS) + "]")

PASSWORD_POLICY_MESSAGE = (
    "Password must contain at least 1 uppercase letter, 1 lowercase letter, "
    "1 number, 1 special character, and must be at least 8 characters long"
)


def _missing(*values) -> bool:
    return any(not v for v in values)


# ─── Passwords & emails ─────────────────────────────────────────

def is_valid_email(email: str) -> bool:
    """Basic local@domain.tld shape."""
    return _EMAIL_RE.fullmatch(email) is not None


def satisfies_password_policy(password: str) -> bool:
    """Lower, upper, digit, symbol, no whitespace, at least 8 characters."""
    return (
        len(password) >= PASSWORD_MIN_LENGTH
        and not any(c.isspace() for c in password)
        and any("a" <= c <= "z" for c in password)
        and any("A" <= c <= "Z" for c in password)
        and any("0" <= c <= "9" for c in password)
        and _SYMBOL_RE.search(password) is not None
    )


def check_password(password: str) -> None:
    """Length limit first, then complexity."""
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise bad_request("Password must be less than 72")
    if not satisfies_password_policy(password):
        raise bad_request(PASSWORD_POLICY_MESSAGE)


def _check_person_name(name: str) -> None:
    if len(name) < NAME_MIN_LENGTH:
        raise bad_request("Name must be at least 3 characters long")


# ─── Organizations ──────────────────────────────────────────────

def check_organization(name: str | None) -> None:
    """Organization create/update."""
    if _missing(name):
        raise bad_request("Organization name is required")
    if len(name) < NAME_MIN_LENGTH:
        raise bad_request("Organization name is too short")


# ─── Users ──────────────────────────────────────────────────────

def check_user_create(
    name: str | None,
    email: str | None,
    organization_id,
    password: str | None,
    role: str | None,
) -> Role:
    """User registration. Returns the parsed role."""
    if _missing(name, email, organization_id, password, role):
        raise bad_request(
            "Name, email, password, role, and organization ID are required",
        )
    if role not in {r.value for r in Role}:
        raise bad_request("Role must be either admin or staff")
    check_password(password)
    _check_person_name(name)
    if not is_valid_email(email):
        raise bad_request("Invalid email format")
    return Role(role)


def check_login(email: str | None, password: str | None) -> None:
    if _missing(email, password):
        raise bad_request("Email and password are required")


def check_user_update(name: str | None, email: str | None, organization_id) -> None:
    """User self-service update."""
    if _missing(name, email, organization_id):
        raise bad_request("Name, email, and organization ID are required")
    _check_person_name(name)
    if not is_valid_email(email):
        raise bad_request("Invalid email format")


# ─── Projects & memberships ─────────────────────────────────────

def check_project(name: str | None, description: str | None, organization_id) -> None:
    """Project create/update."""
    if _missing(name, description, organization_id):
        raise bad_request("Name, description, and organization ID are required")
    if len(name) < NAME_MIN_LENGTH:
        raise bad_request("Project name must be at least 3 characters long")


def check_membership(user_id) -> None:
    if _missing(user_id):
        raise bad_request("User ID is required")


# ─── Todos ──────────────────────────────────────────────────────

def parse_due_date(value: str) -> datetime | None:
    """Parse an ISO-8601 date or datetime. Naive values are taken as UTC."""
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _check_todo_text(value: str, label: str) -> None:
    if len(value) < TODO_TEXT_MIN_LENGTH:
        raise bad_request(f"{label} must be at least 3 characters")
    if len(value) > TODO_TEXT_MAX_LENGTH:
        raise bad_request(f"{label} must be less than 255 characters")


def check_todo(
    title: str | None,
    description: str | None,
    due_date: str | None,
    project_id,
    now: datetime | None = None,
) -> datetime:
    """Todo create/update. Returns the parsed, timezone-aware due date."""
    if _missing(title, description, due_date, project_id):
        raise bad_request(
            "Title, description, due_date, and project_id are required",
        )
    _check_todo_text(title, "Title")
    _check_todo_text(description, "Description")
    parsed = parse_due_date(due_date)
    if parsed is None:
        raise bad_request("Invalid due date")
    now = now or datetime.now(timezone.utc)
    if parsed <= now:
        raise bad_request("Due date must be in the future")
    return parsed


def check_todo_status(status: str | None) -> TodoStatus:
    if _missing(status):
        raise bad_request("Status is required")
    if status not in {s.value for s in TodoStatus}:
        raise bad_request("Invalid status")
    return TodoStatus(status)


def check_todo_assignee(assigned_user_id) -> None:
    if _missing(assigned_user_id):
        raise bad_request("assigned_user_id is required")


# ─── Comments ───────────────────────────────────────────────────

def check_comment_create(content: str | None, todo_id, user_id) -> None:
    if _missing(content, todo_id, user_id):
        raise bad_request("Content, todo ID, and user ID are required")


def check_comment_update(content: str | None) -> None:
    if _missing(content):
        raise bad_request("Content is required")
