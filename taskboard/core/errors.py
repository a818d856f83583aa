"""Error Kinds — one tagged exception for every classified Taskboard failure.

Invariants:
    - Every error carries a kind (ErrorKind) and a human-readable message
    - ErrorKind fixes the HTTP status: 400, 401, 404, 500
    - to_response() produces the REST envelope {"success": false, "message"}
    - INTERNAL messages never carry internal details

Design Decisions:
    - Tagged kind over subclass tree: the boundary dispatches on kind alone,
      so no inheritance hierarchy is needed
    - Factory helpers (bad_request, not_found, ...) keep raise sites short
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Classified error kinds and their HTTP status codes."""
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]


_HTTP_STATUS = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}

INTERNAL_ERROR_MESSAGE = "Internal server error"


class TaskboardError(Exception):
    """Classified failure raised by validation, access control, or integrity checks."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def http_status(self) -> int:
        return self.kind.http_status

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return {"success": False, "message": self.message}

    def __repr__(self) -> str:
        return f"TaskboardError({self.kind.value!r}, {self.message!r})"


# ─── Factories ──────────────────────────────────────────────────

def bad_request(message: str = "Invalid request") -> TaskboardError:
    return TaskboardError(ErrorKind.BAD_REQUEST, message)


def unauthorized(message: str = "Unauthorized") -> TaskboardError:
    return TaskboardError(ErrorKind.UNAUTHORIZED, message)


def not_found(message: str = "Resource not found") -> TaskboardError:
    return TaskboardError(ErrorKind.NOT_FOUND, message)


def internal_error() -> TaskboardError:
    return TaskboardError(ErrorKind.INTERNAL, INTERNAL_ERROR_MESSAGE)
