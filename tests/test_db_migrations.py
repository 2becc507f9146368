"""
Database migration tests: verify that migrations apply cleanly and
produce the expected schema.

Catches:
  - SQL syntax errors in migration functions
  - Idempotency failures (running migrations twice)
  - Missing tables or columns after migration
  - Uniqueness constraints the discovery and ledger code rely on
"""

import sqlite3
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


# ── Migration application ─────────────────────────────────────────────────

class TestMigrationsApply:
    def test_all_migrations_apply_to_fresh_db(self):
        """All migrations should apply without error to an empty database."""
        from db_migrations import apply_migrations

        conn = sqlite3.connect(":memory:")
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys=ON;")
        apply_migrations(conn)

        rows = conn.execute("SELECT migration_id FROM schema_migrations ORDER BY migration_id").fetchall()
        ids = [r["migration_id"] for r in rows]
        assert len(ids) >= 1
        assert ids[0] == "0001_initial"
        conn.close()

    def test_migrations_are_idempotent(self):
        """Running apply_migrations twice should not raise or re-record."""
        from db_migrations import _migrations, apply_migrations

        conn = sqlite3.connect(":memory:")
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys=ON;")
        apply_migrations(conn)
        apply_migrations(conn)
        count = conn.execute("SELECT COUNT(*) FROM schema_migrations").fetchone()[0]
        assert count == len(_migrations())
        conn.close()

    def test_migration_ids_are_sequential(self):
        from db_migrations import _migrations

        ids = [m.migration_id for m in _migrations()]
        assert ids == sorted(ids), f"Migration IDs are not sorted: {ids}"

    def test_no_duplicate_migration_ids(self):
        from db_migrations import _migrations

        ids = [m.migration_id for m in _migrations()]
        assert len(ids) == len(set(ids)), f"Duplicate migration IDs: {[x for x in ids if ids.count(x) > 1]}"


# ── Schema expectations ───────────────────────────────────────────────────

EXPECTED_TABLES = [
    "systems",
    "structures",
    "price_deltas",
    "schema_migrations",
]


class TestSchemaAfterMigrations:
    def test_expected_tables_exist(self, db_conn: sqlite3.Connection):
        tables = {
            r[0]
            for r in db_conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table'"
            ).fetchall()
        }
        for t in EXPECTED_TABLES:
            assert t in tables, f"Expected table '{t}' not found. Tables: {tables}"

    def test_structures_table_has_core_columns(self, db_conn: sqlite3.Connection):
        cols = {r["name"] for r in db_conn.execute("PRAGMA table_info(structures)").fetchall()}
        for c in ("id", "system_id", "function", "tier", "specialization", "status", "disabled_at", "created_at"):
            assert c in cols, f"structures table missing column: {c}"

    def test_system_coordinates_are_unique(self, db_conn: sqlite3.Connection):
        insert = "INSERT INTO systems (x, y, z, name, seed, discovered_at) VALUES (3, 0, 0, 'A', 's', 0)"
        db_conn.execute(insert)
        with pytest.raises(sqlite3.IntegrityError):
            db_conn.execute(insert)

    def test_price_delta_key_is_system_and_commodity(self, db_conn: sqlite3.Connection):
        db_conn.execute("INSERT INTO systems (x, y, z, name, seed, discovered_at) VALUES (3, 0, 0, 'A', 's', 0)")
        insert = "INSERT INTO price_deltas (system_id, commodity, delta_cents, updated_at) VALUES (1, 'iron', 5, 0)"
        db_conn.execute(insert)
        with pytest.raises(sqlite3.IntegrityError):
            db_conn.execute(insert)

    def test_foreign_keys_enabled(self, db_conn: sqlite3.Connection):
        fk = db_conn.execute("PRAGMA foreign_keys;").fetchone()
        assert fk[0] == 1

    def test_get_db_yields_migrated_file_connection(self, db_path):
        from db import get_db

        gen = get_db(db_path)
        conn = next(gen)
        assert conn.execute("SELECT COUNT(*) FROM systems").fetchone()[0] == 0
        gen.close()
        with pytest.raises(sqlite3.ProgrammingError):
            conn.execute("SELECT 1")


class TestDatabasePath:
    def test_explicit_path_wins(self, tmp_path, monkeypatch):
        from db import resolve_db_path

        monkeypatch.setenv("DB_PATH", str(tmp_path / "env.db"))
        assert resolve_db_path(tmp_path / "mine.db") == tmp_path / "mine.db"

    def test_db_path_env_over_db_dir(self, tmp_path, monkeypatch):
        from db import resolve_db_path

        monkeypatch.setenv("DB_DIR", str(tmp_path / "dir"))
        monkeypatch.delenv("DB_PATH", raising=False)
        assert resolve_db_path() == tmp_path / "dir" / "galaxy.db"
        monkeypatch.setenv("DB_PATH", str(tmp_path / "env.db"))
        assert resolve_db_path() == tmp_path / "env.db"

    def test_init_db_creates_schema_in_new_directory(self, tmp_path):
        from db import init_db

        conn = init_db(tmp_path / "nested" / "galaxy.db")
        try:
            applied = {r[0] for r in conn.execute("SELECT migration_id FROM schema_migrations")}
            assert len(applied) == 3
        finally:
            conn.close()
