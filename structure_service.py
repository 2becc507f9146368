"""
Structure service: buildings placed in a materialized system.

Handles:
  - Building structures with per-function placement rules
  - Lifecycle changes: finish construction, disable/enable, destroy, upgrade
  - Listing the operational structures that feed the pricing pipeline, in build order
"""

import logging
import sqlite3
import time
from typing import Any, Dict, List, Optional

import commodity_catalog
from archetype_generator import ArchetypeError, BuildingGenerator
from constants import SINGLETON_FUNCTIONS, STRUCTURE_STATUSES
from discovery_service import load_system


class StructureError(ValueError):
    pass


def _row_to_structure(row: sqlite3.Row) -> Dict[str, Any]:
    return {
        "id": int(row["id"]),
        "system_id": int(row["system_id"]),
        "name": str(row["name"]),
        "race": str(row["race"]),
        "function": str(row["function"]),
        "tier": int(row["tier"]),
        "specialization": row["specialization"],
        "status": str(row["status"]),
        "disabled_at": row["disabled_at"],
        "created_at": float(row["created_at"]),
    }


def get_structure(conn: sqlite3.Connection, structure_id: int) -> Dict[str, Any]:
    row = conn.execute("SELECT * FROM structures WHERE id = ?", (int(structure_id),)).fetchone()
    if not row:
        raise StructureError(f"Structure {structure_id} not found")
    return _row_to_structure(row)


def list_structures(conn: sqlite3.Connection, system_id: int) -> List[Dict[str, Any]]:
    rows = conn.execute(
        "SELECT * FROM structures WHERE system_id = ? ORDER BY created_at, id",
        (int(system_id),),
    ).fetchall()
    return [_row_to_structure(r) for r in rows]


def list_price_structures(conn: sqlite3.Connection, system_id: int) -> List[Dict[str, Any]]:
    """Active, non-disabled structures in build order."""
    rows = conn.execute(
        """
        SELECT * FROM structures
        WHERE system_id = ? AND status = 'active' AND disabled_at IS NULL
        ORDER BY created_at, id
        """,
        (int(system_id),),
    ).fetchall()
    return [_row_to_structure(r) for r in rows]


def is_operational(structure: Dict[str, Any]) -> bool:
    return structure["status"] == "active" and structure["disabled_at"] is None


# ── Placement rules ────────────────────────────────────────────────────────────


def _system_minerals(system: Dict[str, Any]) -> set[str]:
    return {
        str(mineral)
        for slot in (system.get("mineral_distribution") or {}).values()
        for mineral in slot.get("minerals") or []
    }


def _validate_placement(
    existing: List[Dict[str, Any]],
    system: Dict[str, Any],
    function: str,
    specialization: Optional[str],
) -> None:
    standing = [s for s in existing if s["status"] != "destroyed"]

    if function == "extraction":
        if not specialization:
            raise StructureError("Extraction structures need a mineral specialization")
        if specialization not in _system_minerals(system):
            raise StructureError(f"Mineral '{specialization}' is not available in this system")
        if any(s["function"] == "extraction" and s["specialization"] == specialization for s in standing):
            raise StructureError(f"A mine for '{specialization}' already exists in this system")
        return

    if function == "refining":
        if specialization not in commodity_catalog.FACTORY_SPECIALIZATIONS:
            raise StructureError(f"Unknown factory specialization '{specialization}'")
        if any(s["function"] == "refining" and s["specialization"] == specialization for s in standing):
            raise StructureError(f"A '{specialization}' factory already exists in this system")
        if not any(s["function"] == "civic" and is_operational(s) for s in existing):
            raise StructureError("Factories need an operational marketplace in the system")
        return

    if specialization:
        raise StructureError(f"{function} structures take no specialization")
    if function in SINGLETON_FUNCTIONS and any(s["function"] == function for s in standing):
        raise StructureError(f"Only one {function} structure is allowed per system")


# ── Lifecycle ──────────────────────────────────────────────────────────────────


def build_structure(
    conn: sqlite3.Connection,
    system_id: int,
    *,
    race: str,
    function: str,
    tier: int = 1,
    specialization: Optional[str] = None,
    name: Optional[str] = None,
    status: str = "active",
) -> Dict[str, Any]:
    system = load_system(conn, system_id)
    if system is None:
        raise StructureError(f"System {system_id} not found")
    if status not in STRUCTURE_STATUSES or status == "destroyed":
        raise StructureError(f"Cannot build a structure with status '{status}'")

    try:
        archetype = BuildingGenerator.call(race, function, tier)
    except ArchetypeError as exc:
        raise StructureError(str(exc)) from exc

    specialization_id = commodity_catalog.normalize_commodity(specialization) or None
    _validate_placement(list_structures(conn, system_id), system, archetype["category"], specialization_id)

    cur = conn.execute(
        """
        INSERT INTO structures (system_id, name, race, function, tier, specialization, status, created_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            int(system_id),
            str(name or archetype["name"]),
            archetype["race"],
            archetype["category"],
            archetype["tier"],
            specialization_id,
            status,
            time.time(),
        ),
    )
    conn.commit()
    structure = get_structure(conn, int(cur.lastrowid))
    logging.info("Built %s (%s T%s) in system %s", structure["name"], structure["function"], structure["tier"], system_id)
    return structure


def _set_status(conn: sqlite3.Connection, structure_id: int, status: str) -> Dict[str, Any]:
    conn.execute("UPDATE structures SET status = ? WHERE id = ?", (status, int(structure_id)))
    conn.commit()
    return get_structure(conn, structure_id)


def complete_construction(conn: sqlite3.Connection, structure_id: int) -> Dict[str, Any]:
    structure = get_structure(conn, structure_id)
    if structure["status"] != "under_construction":
        raise StructureError(f"Structure {structure_id} is not under construction")
    return _set_status(conn, structure_id, "active")


def destroy_structure(conn: sqlite3.Connection, structure_id: int) -> Dict[str, Any]:
    structure = get_structure(conn, structure_id)
    if structure["status"] == "destroyed":
        raise StructureError(f"Structure {structure_id} is already destroyed")
    logging.info("Destroyed structure %s in system %s", structure_id, structure["system_id"])
    return _set_status(conn, structure_id, "destroyed")


def disable_structure(conn: sqlite3.Connection, structure_id: int) -> Dict[str, Any]:
    structure = get_structure(conn, structure_id)
    if structure["disabled_at"] is not None:
        return structure
    conn.execute("UPDATE structures SET disabled_at = ? WHERE id = ?", (time.time(), int(structure_id)))
    conn.commit()
    logging.info("Disabled structure %s in system %s", structure_id, structure["system_id"])
    return get_structure(conn, structure_id)


def enable_structure(conn: sqlite3.Connection, structure_id: int) -> Dict[str, Any]:
    structure = get_structure(conn, structure_id)
    if structure["status"] == "destroyed":
        raise StructureError(f"Structure {structure_id} is destroyed")
    conn.execute("UPDATE structures SET disabled_at = NULL WHERE id = ?", (int(structure_id),))
    conn.commit()
    return get_structure(conn, structure_id)


def upgrade_cost(structure: Dict[str, Any]) -> int:
    tier = int(structure["tier"])
    current = BuildingGenerator.call(structure["race"], structure["function"], tier)
    upgraded = BuildingGenerator.call(structure["race"], structure["function"], tier + 1)
    return int(upgraded["cost"]) - int(current["cost"])


def upgrade_structure(conn: sqlite3.Connection, structure_id: int) -> Dict[str, Any]:
    """Raise a structure one tier. Returns the updated structure and the upgrade cost."""
    structure = get_structure(conn, structure_id)
    if not is_operational(structure):
        raise StructureError(f"Structure {structure_id} must be active and enabled to upgrade")
    if structure["tier"] >= 5:
        raise StructureError(f"Structure {structure_id} is already at max tier")

    cost = upgrade_cost(structure)
    conn.execute("UPDATE structures SET tier = tier + 1 WHERE id = ?", (int(structure_id),))
    conn.commit()
    return {"structure": get_structure(conn, structure_id), "cost": cost}
