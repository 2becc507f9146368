import sqlite3
import time
from dataclasses import dataclass
from typing import Callable, List


@dataclass(frozen=True)
class Migration:
    migration_id: str
    description: str
    apply: Callable[[sqlite3.Connection], None]


def _table_columns(conn: sqlite3.Connection, table: str) -> set[str]:
    rows = conn.execute(f"PRAGMA table_info({table});").fetchall()
    return {str(r["name"]) for r in rows}


def _safe_add_column(conn: sqlite3.Connection, table: str, name: str, coltype: str) -> None:
    if name in _table_columns(conn, table):
        return
    conn.execute(f"ALTER TABLE {table} ADD COLUMN {name} {coltype};")


def _migration_0001_initial(conn: sqlite3.Connection) -> None:
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS systems (
          id INTEGER PRIMARY KEY AUTOINCREMENT,
          x INTEGER NOT NULL,
          y INTEGER NOT NULL,
          z INTEGER NOT NULL,
          name TEXT NOT NULL,
          seed TEXT NOT NULL,
          properties_json TEXT NOT NULL DEFAULT '{}',
          discovered_at REAL NOT NULL
        );
        CREATE UNIQUE INDEX IF NOT EXISTS idx_systems_coords ON systems(x, y, z);

        CREATE TABLE IF NOT EXISTS price_deltas (
          system_id INTEGER NOT NULL REFERENCES systems(id) ON DELETE CASCADE,
          commodity TEXT NOT NULL,
          delta_cents INTEGER NOT NULL DEFAULT 0,
          updated_at REAL NOT NULL,
          PRIMARY KEY (system_id, commodity)
        );
        """
    )


def _migration_0002_structures(conn: sqlite3.Connection) -> None:
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS structures (
          id INTEGER PRIMARY KEY AUTOINCREMENT,
          system_id INTEGER NOT NULL REFERENCES systems(id) ON DELETE CASCADE,
          name TEXT NOT NULL,
          race TEXT NOT NULL,
          function TEXT NOT NULL,
          tier INTEGER NOT NULL DEFAULT 1,
          specialization TEXT,
          status TEXT NOT NULL DEFAULT 'active',
          created_at REAL NOT NULL
        );
        CREATE INDEX IF NOT EXISTS idx_structures_system ON structures(system_id);
        """
    )


def _migration_0003_structure_disable(conn: sqlite3.Connection) -> None:
    _safe_add_column(conn, "structures", "disabled_at", "REAL")


def _migrations() -> List[Migration]:
    return [
        Migration("0001_initial", "Systems snapshot and price delta ledger", _migration_0001_initial),
        Migration("0002_structures", "Structures placed in systems", _migration_0002_structures),
        Migration("0003_structure_disable", "Disable marker for structures", _migration_0003_structure_disable),
    ]


def apply_migrations(conn: sqlite3.Connection) -> None:
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS schema_migrations (
          migration_id TEXT PRIMARY KEY,
          description TEXT NOT NULL,
          applied_at REAL NOT NULL
        );
        """
    )

    applied = {
        str(r["migration_id"])
        for r in conn.execute("SELECT migration_id FROM schema_migrations").fetchall()
    }

    for migration in _migrations():
        if migration.migration_id in applied:
            continue
        migration.apply(conn)
        conn.execute(
            "INSERT INTO schema_migrations (migration_id,description,applied_at) VALUES (?,?,?)",
            (migration.migration_id, migration.description, time.time()),
        )
    conn.commit()
