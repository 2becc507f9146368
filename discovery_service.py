"""
Discovery service: turns coordinates into persisted star systems.

Handles:
  - Peeking at the system a coordinate would generate, without persisting anything
  - Materializing a system snapshot exactly once per coordinate (safe under concurrent callers)
  - Loading snapshots back by id or by coordinate

A materialized snapshot is the system of record; it is never regenerated.
"""

import json
import logging
import sqlite3
import time
from typing import Any, Dict, Optional

from world_generator import GALAXY_SEED, SystemGenerator, validate_coordinates


def _json_dumps(obj: Any) -> str:
    return json.dumps(obj, separators=(",", ":"), sort_keys=True)


def peek(x: Any, y: Any, z: Any, seed: Optional[str] = None) -> Dict[str, Any]:
    return SystemGenerator.call(seed if seed is not None else GALAXY_SEED, x, y, z)


def find_system_id(conn: sqlite3.Connection, x: Any, y: Any, z: Any) -> Optional[int]:
    coords = validate_coordinates(x, y, z)
    row = conn.execute(
        "SELECT id FROM systems WHERE x = ? AND y = ? AND z = ?",
        (coords.x, coords.y, coords.z),
    ).fetchone()
    return int(row["id"]) if row else None


def materialize(conn: sqlite3.Connection, x: Any, y: Any, z: Any, seed: Optional[str] = None) -> int:
    """Return the system id for the coordinate, persisting a snapshot on first call."""
    coords = validate_coordinates(x, y, z)
    existing = find_system_id(conn, coords.x, coords.y, coords.z)
    if existing is not None:
        return existing

    record = peek(coords.x, coords.y, coords.z, seed)
    cur = conn.execute(
        """
        INSERT OR IGNORE INTO systems (x, y, z, name, seed, properties_json, discovered_at)
        VALUES (?, ?, ?, ?, ?, ?, ?)
        """,
        (coords.x, coords.y, coords.z, record["name"], record["seed"], _json_dumps(record), time.time()),
    )
    conn.commit()
    if cur.rowcount:
        logging.info("Materialized system %s at (%s, %s, %s)", record["name"], coords.x, coords.y, coords.z)

    system_id = find_system_id(conn, coords.x, coords.y, coords.z)
    if system_id is None:
        raise RuntimeError(f"System at ({coords.x}, {coords.y}, {coords.z}) missing after insert")
    return system_id


def load_system(conn: sqlite3.Connection, system_id: int) -> Optional[Dict[str, Any]]:
    row = conn.execute(
        "SELECT properties_json FROM systems WHERE id = ?",
        (int(system_id),),
    ).fetchone()
    if not row:
        return None
    return json.loads(row["properties_json"] or "{}")
