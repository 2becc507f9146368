"""
Ship and building archetype generation.

Handles:
  - Validation of (race, category, tier) keys
  - One ship archetype per (race, hull size, tier) and one building archetype per
    (race, function, tier), both deterministic in their key
  - Full 4 x 5 x 5 catalogues in race -> category -> tier order
  - Balance checks over the generated catalogues (tier scaling, racial averages)

Costs and primary outputs come straight from tier_tables; a per-archetype
variance of up to +/-10% is applied to secondary stats only.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError

from constants import BUILDING_FUNCTIONS, HULL_SIZES, RACES, TIERS
from seeds import derive_seed, extract_from_seed
from tier_tables import (
    BUILDING_BASE_DURABILITY,
    BUILDING_BASE_MAINTENANCE,
    BUILDING_BASE_POWER,
    BUILDING_BASE_STAFF,
    BUILDING_NAME_PREFIXES,
    BUILDING_OUTPUT_UNITS,
    BUILDING_RACIAL_MODIFIERS,
    BUILDING_TIER_TABLE,
    BUILDING_TYPES,
    HULL_PROFILES,
    PREFERRED_FUNCTION_EFFICIENCY,
    PREFERRED_FUNCTIONS,
    ROMAN_NUMERALS,
    SHIP_NAME_PREFIXES,
    SHIP_NAME_SUFFIXES,
    SHIP_RACIAL_MODIFIERS,
    SHIP_TIER_TABLE,
    TIER_MULTIPLIERS,
)

Race = Literal["vex", "solari", "krog", "myrmidon"]
HullSize = Literal["scout", "frigate", "transport", "cruiser", "titan"]
BuildingFunction = Literal["extraction", "refining", "logistics", "civic", "defense"]


class ArchetypeError(ValueError):
    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class ShipKey(BaseModel):
    model_config = ConfigDict(frozen=True)

    race: Race
    hull_size: HullSize
    tier: StrictInt = Field(ge=1, le=5)


class BuildingKey(BaseModel):
    model_config = ConfigDict(frozen=True)

    race: Race
    function: BuildingFunction
    tier: StrictInt = Field(ge=1, le=5)


def _validated(model: type, **fields: Any) -> Any:
    try:
        return model(**fields)
    except ValidationError as exc:
        raise ArchetypeError(
            f"Invalid archetype key {fields}",
            exc.errors(include_url=False, include_context=False),
        ) from exc


def _variances(seed_hex: str) -> List[int]:
    """Six signed percentages in [-10, 10] read from fixed digest offsets."""
    return [extract_from_seed(seed_hex, offset, 2, 21) - 10 for offset in (0, 2, 4, 6, 8, 10)]


def _scale(value: float, variance_pct: int) -> float:
    return value * (1 + variance_pct / 100)


# ── Ships ──────────────────────────────────────────────────────────────────────


class ShipGenerator:
    @staticmethod
    def call(race: str, hull_size: str, tier: int) -> Dict[str, Any]:
        key = _validated(ShipKey, race=race, hull_size=hull_size, tier=tier)
        seed_hex = derive_seed(key.race, key.hull_size, key.tier)
        v = _variances(seed_hex)
        profile = HULL_PROFILES[key.hull_size]
        mods = SHIP_RACIAL_MODIFIERS.get(key.race, {})
        tier_mult = TIER_MULTIPLIERS[key.tier]
        base_cost, base_cargo = SHIP_TIER_TABLE[key.hull_size][key.tier]

        maneuverability = profile.maneuverability - 3 * (key.tier - 1) + v[2]
        crew_min, crew_max = profile.crew

        return {
            "kind": "ship",
            "race": key.race,
            "category": key.hull_size,
            "tier": key.tier,
            "seed": seed_hex,
            "name": (
                f"{SHIP_NAME_PREFIXES[key.race][key.tier - 1]} "
                f"{SHIP_NAME_SUFFIXES[key.hull_size][key.tier - 1]} Mk{ROMAN_NUMERALS[key.tier]}"
            ),
            "cost": round(base_cost * mods.get("cost", 1.0)),
            "cargo_capacity": round(_scale(base_cargo, v[0]) * mods.get("cargo", 1.0)),
            "fuel_efficiency": round(_scale(profile.fuel_efficiency, v[1]), 2),
            "maneuverability": max(1, min(100, maneuverability)),
            "hardpoints": profile.hardpoints + (key.tier - 1) // 2,
            "crew_min": crew_min + (key.tier - 1),
            "crew_max": crew_max + 2 * (key.tier - 1),
            "hull_points": round(_scale(profile.hull_points * tier_mult, v[3]) * mods.get("hull", 1.0)),
            "maintenance_rate": round(_scale(profile.maintenance * tier_mult, v[4])),
            "sensor_range": max(1, round(_scale(profile.sensors + 2 * (key.tier - 1), v[5]) * mods.get("sensors", 1.0))),
        }

    generate = call

    @staticmethod
    def generate_all_types() -> List[Dict[str, Any]]:
        return [
            ShipGenerator.call(race, hull_size, tier)
            for race in RACES
            for hull_size in HULL_SIZES
            for tier in TIERS
        ]


# ── Buildings ──────────────────────────────────────────────────────────────────


class BuildingGenerator:
    @staticmethod
    def call(race: str, function: str, tier: int) -> Dict[str, Any]:
        key = _validated(BuildingKey, race=race, function=function, tier=tier)
        seed_hex = derive_seed(key.race, key.function, key.tier)
        v = _variances(seed_hex)
        mods = BUILDING_RACIAL_MODIFIERS.get(key.race, {})
        tier_mult = TIER_MULTIPLIERS[key.tier]
        base_cost, base_output = BUILDING_TIER_TABLE[key.function][key.tier]

        candidates = BUILDING_TYPES[key.function]
        building_type = candidates[extract_from_seed(seed_hex, 12, 1, len(candidates))]
        preferred = key.function in PREFERRED_FUNCTIONS.get(key.race, ())
        efficiency = _scale(1.0, v[5]) * (PREFERRED_FUNCTION_EFFICIENCY if preferred else 1.0)
        type_name = building_type.replace("_", " ").title()

        return {
            "kind": "building",
            "race": key.race,
            "category": key.function,
            "tier": key.tier,
            "seed": seed_hex,
            "building_type": building_type,
            "name": f"{BUILDING_NAME_PREFIXES[key.race][key.tier - 1]} {type_name} Mark {ROMAN_NUMERALS[key.tier]}",
            "cost": round(base_cost * mods.get("cost", 1.0)),
            "output": round(_scale(base_output, v[0]) * mods.get("output", 1.0)),
            "output_unit": BUILDING_OUTPUT_UNITS[key.function],
            "durability": round(_scale(BUILDING_BASE_DURABILITY * tier_mult, v[1]) * mods.get("durability", 1.0)),
            "maintenance_rate": round(_scale(BUILDING_BASE_MAINTENANCE * tier_mult, v[2])),
            "power_consumption": round(
                _scale(BUILDING_BASE_POWER[key.function] * tier_mult, v[3]) * mods.get("power", 1.0)
            ),
            "staff": round(_scale(BUILDING_BASE_STAFF * key.tier, v[4])),
            "efficiency": round(efficiency, 3),
            "preferred_function": preferred,
        }

    generate = call

    @staticmethod
    def generate_all_types() -> List[Dict[str, Any]]:
        return [
            BuildingGenerator.call(race, function, tier)
            for race in RACES
            for function in BUILDING_FUNCTIONS
            for tier in TIERS
        ]


# ── Balance checks ─────────────────────────────────────────────────────────────


def verify_tier_scaling(archetypes: List[Dict[str, Any]], stat: str = "cost") -> Dict[str, float]:
    """Average consecutive-tier ratio of `stat` per (race, category)."""
    grouped: Dict[str, Dict[int, float]] = {}
    for item in archetypes:
        grouped.setdefault(f"{item['race']}:{item['category']}", {})[int(item["tier"])] = float(item[stat])

    ratios: Dict[str, float] = {}
    for group, by_tier in grouped.items():
        tiers = sorted(by_tier)
        steps = [
            by_tier[b] / by_tier[a]
            for a, b in zip(tiers, tiers[1:])
            if by_tier[a] > 0
        ]
        ratios[group] = sum(steps) / len(steps) if steps else 0.0
    return ratios


def verify_racial_bonuses(archetypes: List[Dict[str, Any]], stats: List[str]) -> Dict[str, Dict[str, float]]:
    """Mean of each stat per race, across every category and tier."""
    totals: Dict[str, Dict[str, float]] = {}
    counts: Dict[str, int] = {}
    for item in archetypes:
        race = str(item["race"])
        counts[race] = counts.get(race, 0) + 1
        bucket = totals.setdefault(race, {s: 0.0 for s in stats})
        for s in stats:
            bucket[s] += float(item[s])
    return {
        race: {s: value / counts[race] for s, value in bucket.items()}
        for race, bucket in totals.items()
    }
