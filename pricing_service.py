"""
Pricing service: live commodity prices for a materialized system.

Handles:
  - The price pipeline: base price -> abundance -> structure effects -> round -> ledger delta -> floor
  - Per-stage breakdowns of the same computation
  - The per-(system, commodity) delta ledger, updated atomically
  - Trade simulation (buys push the price up, sells push it down) and price trends

Rounding happens once, after the whole multiplicative chain, half up. All
intermediate arithmetic is exact (Decimal built from the tables' decimal strings).
"""

import logging
import sqlite3
import time
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional

import commodity_catalog
from constants import ABUNDANCE_ALIASES, DEFAULT_ABUNDANCE
from discovery_service import load_system
from structure_service import list_price_structures
from tier_tables import price_effects_for

ABUNDANCE_MODIFIERS: Dict[str, Decimal] = {
    "high": Decimal("0.8"),
    "medium": Decimal("1.0"),
    "low": Decimal("1.2"),
}

MIN_PRICE = 1
TRADE_IMPACT_PER_UNIT = Decimal("0.005")
TREND_THRESHOLD = 10


class PricingError(ValueError):
    pass


def _round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _load_system_or_raise(conn: sqlite3.Connection, system_id: int) -> Dict[str, Any]:
    system = load_system(conn, system_id)
    if system is None:
        raise PricingError(f"System {system_id} not found")
    return system


# ── Pipeline stages ────────────────────────────────────────────────────────────


def abundance_for(system: Dict[str, Any], commodity: str) -> str:
    """Abundance of the first planet slot (by index) hosting the commodity; medium otherwise."""
    distribution = system.get("mineral_distribution") or {}
    for slot in sorted(distribution, key=int):
        entry = distribution[slot] or {}
        if commodity in (entry.get("minerals") or []):
            level = str(entry.get("abundance") or DEFAULT_ABUNDANCE)
            level = ABUNDANCE_ALIASES.get(level, level)
            return level if level in ABUNDANCE_MODIFIERS else DEFAULT_ABUNDANCE
    return DEFAULT_ABUNDANCE


def _effect_targets(structure: Dict[str, Any], target: str) -> List[str]:
    specialization = structure.get("specialization")
    if target == "specialization":
        return [specialization] if specialization else []
    if target == "consumes":
        return commodity_catalog.specialization_consumes(specialization)
    if target == "produces":
        return commodity_catalog.specialization_produces(specialization)
    raise ValueError(f"Unknown price effect target '{target}'")


def structure_modifier(structure: Dict[str, Any], commodity: str) -> Optional[Decimal]:
    """Combined multiplier a structure applies to a commodity, or None if it has no effect."""
    factor: Optional[Decimal] = None
    for effect in price_effects_for(structure["function"]):
        if commodity in _effect_targets(structure, effect.target):
            factor = (factor if factor is not None else Decimal(1)) * Decimal(effect.multiplier_for(structure["tier"]))
    return factor


def compute_breakdown(
    system: Dict[str, Any],
    structures: List[Dict[str, Any]],
    delta: int,
    commodity: Any,
) -> Optional[Dict[str, Any]]:
    key = commodity_catalog.normalize_commodity(commodity)
    base_prices = system.get("base_prices") or {}
    if key not in base_prices:
        return None

    base_price = int(base_prices[key])
    abundance = abundance_for(system, key)
    abundance_modifier = ABUNDANCE_MODIFIERS[abundance]
    running = Decimal(base_price) * abundance_modifier
    after_abundance = running

    effects: List[Dict[str, Any]] = []
    for structure in structures:
        modifier = structure_modifier(structure, key)
        if modifier is None:
            continue
        running = running * modifier
        effects.append(
            {
                "structure_id": structure["id"],
                "building_name": structure["name"],
                "function": structure["function"],
                "tier": structure["tier"],
                "modifier": float(modifier),
                "price_after": float(running),
            }
        )

    rounded = _round_half_up(running)
    return {
        "commodity": key,
        "base_price": base_price,
        "abundance": abundance,
        "abundance_modifier": float(abundance_modifier),
        "after_abundance": float(after_abundance),
        "building_effects": effects,
        "after_buildings": float(running),
        "rounded_price": rounded,
        "delta": int(delta),
        "final_price": max(rounded + int(delta), MIN_PRICE),
    }


# ── Ledger ─────────────────────────────────────────────────────────────────────


def get_delta(conn: sqlite3.Connection, system_id: int, commodity: Any) -> int:
    row = conn.execute(
        "SELECT delta_cents FROM price_deltas WHERE system_id = ? AND commodity = ?",
        (int(system_id), commodity_catalog.normalize_commodity(commodity)),
    ).fetchone()
    return int(row["delta_cents"]) if row else 0


def _all_deltas(conn: sqlite3.Connection, system_id: int) -> Dict[str, int]:
    rows = conn.execute(
        "SELECT commodity, delta_cents FROM price_deltas WHERE system_id = ?",
        (int(system_id),),
    ).fetchall()
    return {str(r["commodity"]): int(r["delta_cents"]) for r in rows}


def apply_delta(conn: sqlite3.Connection, system_id: int, commodity: Any, amount: int) -> None:
    """Add `amount` to the stored delta in one statement, so concurrent writers never lose updates."""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise PricingError(f"Delta must be an integer, got {amount!r}")
    system = _load_system_or_raise(conn, system_id)
    key = commodity_catalog.normalize_commodity(commodity)
    if key not in (system.get("base_prices") or {}):
        raise PricingError(f"Unknown commodity '{commodity}'")

    conn.execute(
        """
        INSERT INTO price_deltas (system_id, commodity, delta_cents, updated_at)
        VALUES (?, ?, ?, ?)
        ON CONFLICT(system_id, commodity) DO UPDATE SET
          delta_cents = delta_cents + excluded.delta_cents,
          updated_at = excluded.updated_at
        """,
        (int(system_id), key, amount, time.time()),
    )
    conn.commit()
    logging.debug("Applied price delta %+d to %s in system %s", amount, key, system_id)


# ── Prices ─────────────────────────────────────────────────────────────────────


def price_breakdown_for(conn: sqlite3.Connection, system_id: int, commodity: Any) -> Optional[Dict[str, Any]]:
    system = _load_system_or_raise(conn, system_id)
    return compute_breakdown(
        system,
        list_price_structures(conn, system_id),
        get_delta(conn, system_id, commodity),
        commodity,
    )


def calculate_market_price(conn: sqlite3.Connection, system_id: int, commodity: Any) -> Optional[int]:
    breakdown = price_breakdown_for(conn, system_id, commodity)
    return int(breakdown["final_price"]) if breakdown else None


current_price = calculate_market_price


def all_current_prices(conn: sqlite3.Connection, system_id: int) -> Dict[str, int]:
    system = _load_system_or_raise(conn, system_id)
    structures = list_price_structures(conn, system_id)
    deltas = _all_deltas(conn, system_id)
    prices: Dict[str, int] = {}
    for commodity in sorted(system.get("base_prices") or {}):
        breakdown = compute_breakdown(system, structures, deltas.get(commodity, 0), commodity)
        if breakdown:
            prices[commodity] = int(breakdown["final_price"])
    return prices


def trend_for(conn: sqlite3.Connection, system_id: int, commodity: Any) -> str:
    delta = get_delta(conn, system_id, commodity)
    if delta > TREND_THRESHOLD:
        return "up"
    if delta < -TREND_THRESHOLD:
        return "down"
    return "stable"


# ── Trade simulation ───────────────────────────────────────────────────────────


def _trade(conn: sqlite3.Connection, system_id: int, commodity: Any, quantity: int, direction: int) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise PricingError(f"Trade quantity must be a positive integer, got {quantity!r}")
    price = calculate_market_price(conn, system_id, commodity)
    if price is None:
        raise PricingError(f"Unknown commodity '{commodity}'")
    shift = _round_half_up(Decimal(price) * TRADE_IMPACT_PER_UNIT * quantity)
    if shift:
        apply_delta(conn, system_id, commodity, direction * shift)
    return int(calculate_market_price(conn, system_id, commodity))


def simulate_buy(conn: sqlite3.Connection, system_id: int, commodity: Any, quantity: int) -> int:
    """Record a purchase; demand pushes the price up. Returns the new price."""
    return _trade(conn, system_id, commodity, quantity, 1)


def simulate_sell(conn: sqlite3.Connection, system_id: int, commodity: Any, quantity: int) -> int:
    """Record a sale; supply pushes the price down. Returns the new price."""
    return _trade(conn, system_id, commodity, quantity, -1)
