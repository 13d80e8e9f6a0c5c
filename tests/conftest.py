# tests/conftest.py
import random
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "app", "database" and "todayku" import in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from todayku.grid import CANONICAL_SOLUTION, copy_grid  # noqa: E402

WIKI_PUZZLE = (
    "53..7...."
    "6..195..."
    ".98....6."
    "8...6...3"
    "4..8.3..1"
    "7...2...6"
    ".6....28."
    "...419..5"
    "....8..79"
)

WIKI_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)


@pytest.fixture
def canonical():
    return copy_grid(CANONICAL_SOLUTION)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def db(tmp_path, monkeypatch):
    """Fresh SQLite database for each test."""
    monkeypatch.setenv("DB_PATH", str(tmp_path / "todayku-test.db"))
    monkeypatch.delenv("DATABASE_URL", raising=False)
    import database
    monkeypatch.setattr(database.Config, "DATABASE_URL", "")
    database.init_db()
    return database


@pytest.fixture
def client(db):
    from app import app
    app.config.update(
        TESTING=True,
        DAILY_DIFFICULTY="easy",
        GENERATION_RETRIES=2,
        GENERATION_TIME_LIMIT=None,
    )
    with app.test_client() as c:
        yield c
