"""Root conftest — shared test configuration."""

import os

# Settings are cached on first use; pin test values before any app import
os.environ.setdefault(
    "SESSION_SECRET", "test-session-secret-0123456789abcdef0123456789",
)
os.environ.setdefault("STORAGE_BUCKET", "")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
