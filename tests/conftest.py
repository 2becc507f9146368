"""
Shared pytest fixtures for the StellArb procedural core tests.

Provides:
  - In-memory SQLite DB with migrations applied
  - File-backed DB factory for multi-connection tests
  - Helper functions for inserting hand-built systems and structures
"""

import json
import os
import sqlite3
import sys
import tempfile
import time
from pathlib import Path
from typing import Any, Dict, Generator, Optional

import pytest

# ---------------------------------------------------------------------------
# Ensure the project root is on sys.path so we can import app modules
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Keep any default DB the modules resolve out of the working tree.
_TEST_DB_DIR = tempfile.mkdtemp(prefix="stellarb_test_")
os.environ["DB_DIR"] = _TEST_DB_DIR
os.environ.setdefault("GALAXY_SEED", "stellarb")


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def db_conn() -> Generator[sqlite3.Connection, None, None]:
    """Yield an in-memory SQLite connection with all migrations applied."""
    from db_migrations import apply_migrations

    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys=ON;")

    apply_migrations(conn)

    yield conn
    conn.close()


@pytest.fixture()
def db_path(tmp_path: Path) -> Path:
    """Path to a migrated, file-backed database (for tests that open several connections)."""
    from db import connect_db
    from db_migrations import apply_migrations

    path = tmp_path / "galaxy.db"
    conn = connect_db(path)
    apply_migrations(conn)
    conn.close()
    return path


# ---------------------------------------------------------------------------
# Test data helpers
# ---------------------------------------------------------------------------

class TestHelpers:
    """Stateless helper methods for common test-data operations."""

    @staticmethod
    def insert_system(
        conn: sqlite3.Connection,
        *,
        coords: tuple = (3, 3, 3),
        base_prices: Optional[Dict[str, int]] = None,
        distribution: Optional[Dict[str, Dict[str, Any]]] = None,
        name: str = "Test System",
    ) -> int:
        """Insert a hand-built system snapshot. Returns the system id."""
        x, y, z = coords
        properties = {
            "coordinates": {"x": x, "y": y, "z": z},
            "seed": "test",
            "name": name,
            "star_type": "yellow_dwarf",
            "hazard_level": 10,
            "planet_count": len(distribution or {}),
            "planets": [],
            "mineral_distribution": distribution or {},
            "base_prices": base_prices if base_prices is not None else {"iron": 100},
            "special_properties": {},
        }
        cur = conn.execute(
            """
            INSERT INTO systems (x, y, z, name, seed, properties_json, discovered_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (x, y, z, name, "test", json.dumps(properties), time.time()),
        )
        conn.commit()
        return int(cur.lastrowid)

    @staticmethod
    def insert_structure(
        conn: sqlite3.Connection,
        system_id: int,
        *,
        function: str,
        tier: int = 1,
        specialization: Optional[str] = None,
        status: str = "active",
        disabled: bool = False,
        name: str = "Test Structure",
        race: str = "vex",
        created_at: Optional[float] = None,
    ) -> int:
        """Insert a structure row directly, bypassing placement rules. Returns its id."""
        cur = conn.execute(
            """
            INSERT INTO structures
              (system_id, name, race, function, tier, specialization, status, disabled_at, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                system_id,
                name,
                race,
                function,
                tier,
                specialization,
                status,
                time.time() if disabled else None,
                created_at if created_at is not None else time.time(),
            ),
        )
        conn.commit()
        return int(cur.lastrowid)


@pytest.fixture()
def helpers() -> TestHelpers:
    return TestHelpers()
