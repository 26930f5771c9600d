"""Root conftest — shared test configuration."""

import os

# Tests never touch the desktop database file
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
