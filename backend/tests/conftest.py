"""Root conftest — shared test configuration."""

import os

# Settings are read at import time of condo.main; never point tests at a real server
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")
