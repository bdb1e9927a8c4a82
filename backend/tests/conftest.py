"""Root conftest — shared test configuration."""

import os

# Settings are read once at import of app.main; never point tests at a real DB
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("AUTH_SECRET", "test-secret-not-for-production")
os.environ.setdefault("LOG_FORMAT", "text")
