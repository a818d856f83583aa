"""Root conftest — shared test configuration."""

import os

# Ensure tests never sign tokens with a real secret or touch a real database
os.environ.setdefault("JWT_SECRET", "test-signing-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
