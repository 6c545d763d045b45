# ruff: noqa: INP001
"""Pytest configuration shared across backend tests."""

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Settings and the id codec are built at import time; pin deterministic values
# regardless of shell env so tests never touch a real Postgres.
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DB_AUTO_MIGRATE"] = "false"
os.environ["HASHIDS_SALT"] = "test-salt"
os.environ["HASHIDS_MIN_LENGTH"] = "8"
