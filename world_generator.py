"""
Procedural world generation: systems, planets, mineral deposits, plants.

Handles:
  - Coordinate validation (grid step, symmetric bounds, strict integers)
  - The fixed origin hub ("The Cradle") at (0, 0, 0)
  - Seed-driven systems: star type, hazard, planets, mineral distribution, price table
  - Planet, deposit and plant generation, each from its own derived seed
  - Whole-grid generation over every legal coordinate

Every generator here is a pure function of its inputs. Generated records are
plain JSON-native dicts so a persisted snapshot reads back equal to a fresh run.
"""

import os
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, StrictInt, ValidationError, field_validator

import commodity_catalog
from constants import (
    ABUNDANCE_HIGH_FROM,
    ABUNDANCE_LOW_BELOW,
    COORDINATE_LIMIT,
    COORDINATE_STEP,
    DEFAULT_PURITY_RANGE_TENTHS,
    DEFAULT_QUANTITY_MULTIPLIER_TENTHS,
    DEPOSIT_DEPTHS,
    EXOTIC_CHANCE_PERCENT,
    MAX_DEPOSITS,
    MAX_HAZARD,
    MAX_PLANETS,
    MAX_PLANTS,
    ORIGIN,
    PLANET_NAME_PREFIXES,
    PLANET_NAME_SUFFIXES,
    PLANET_SIZES,
    PLANET_TYPES,
    PLANT_POOLS,
    PURITY_RANGE_TENTHS,
    QUANTITY_MULTIPLIER_TENTHS,
    STAR_TYPE_MINERALS,
    STAR_TYPES,
    SYSTEM_NAME_MIDDLES,
    SYSTEM_NAME_PREFIXES,
    SYSTEM_NAME_SUFFIXES,
)
from seeds import SeedStream, derive_seed, extract_from_seed

GALAXY_SEED = os.environ.get("GALAXY_SEED", "stellarb")

CRADLE_NAME = "The Cradle"
TUTORIAL_MINERAL = "iron"


class CoordinateError(ValueError):
    """Coordinates off the discovery grid. `errors` carries the per-axis failures."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class SystemCoordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: StrictInt
    y: StrictInt
    z: StrictInt

    @field_validator("x", "y", "z")
    @classmethod
    def _on_grid(cls, value: int) -> int:
        if value % COORDINATE_STEP != 0:
            raise ValueError(f"must be divisible by {COORDINATE_STEP}")
        if abs(value) > COORDINATE_LIMIT:
            raise ValueError(f"must be within -{COORDINATE_LIMIT}..{COORDINATE_LIMIT}")
        return value

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.x, self.y, self.z)


def validate_coordinates(x: Any, y: Any, z: Any) -> SystemCoordinates:
    try:
        return SystemCoordinates(x=x, y=y, z=z)
    except ValidationError as exc:
        raise CoordinateError(
            f"Invalid coordinates ({x}, {y}, {z})",
            exc.errors(include_url=False, include_context=False),
        ) from exc


# ── Minerals ───────────────────────────────────────────────────────────────────


class MineralGenerator:
    @staticmethod
    def call(planet_seed: str, planet_type: str) -> List[Dict[str, Any]]:
        """1-10 deposits for a planet; each deposit draws from its own seed."""
        minerals_seed = derive_seed(planet_seed, "minerals")
        count, _ = SeedStream(minerals_seed).next_range(1, MAX_DEPOSITS)

        multiplier = QUANTITY_MULTIPLIER_TENTHS.get(planet_type, DEFAULT_QUANTITY_MULTIPLIER_TENTHS)
        purity_low, purity_high = PURITY_RANGE_TENTHS.get(planet_type, DEFAULT_PURITY_RANGE_TENTHS)

        deposits: List[Dict[str, Any]] = []
        for i in range(count):
            stream = SeedStream(derive_seed(minerals_seed, "deposit", i))
            roll, stream = stream.next_int(100)
            pool = commodity_catalog.EXOTIC_MINERALS if roll < EXOTIC_CHANCE_PERCENT else commodity_catalog.REAL_MINERALS
            mineral, stream = stream.choice(pool)
            base_quantity, stream = stream.next_range(1_000, 99_999)
            purity_tenths, stream = stream.next_range(purity_low, purity_high)
            depth, stream = stream.choice(DEPOSIT_DEPTHS)
            deposits.append(
                {
                    "mineral": mineral,
                    "quantity": base_quantity * multiplier // 10,
                    "purity": purity_tenths / 10,
                    "depth": depth,
                    "exotic": roll < EXOTIC_CHANCE_PERCENT,
                }
            )
        return deposits

    generate = call


# ── Plants ─────────────────────────────────────────────────────────────────────


class PlantGenerator:
    @staticmethod
    def call(planet_seed: str, planet_type: str) -> List[str]:
        pool = PLANT_POOLS.get(planet_type) or []
        if not pool:
            return []
        stream = SeedStream(derive_seed(planet_seed, "plants"))
        count, stream = stream.next_range(0, MAX_PLANTS)
        plants, _ = stream.sample(pool, count)
        return plants

    generate = call


# ── Planets ────────────────────────────────────────────────────────────────────


def _planet_name(stream: SeedStream, ordinal: int) -> Tuple[str, SeedStream]:
    prefix, stream = stream.choice(PLANET_NAME_PREFIXES)
    suffix, stream = stream.choice(PLANET_NAME_SUFFIXES)
    style, stream = stream.next_int(3)
    if style == 0:
        return f"{prefix}-{ordinal}{suffix[0].lower()}", stream
    if style == 1:
        return f"{prefix} {suffix} {ordinal}", stream
    return f"{prefix}-{suffix}-{ordinal}", stream


class PlanetGenerator:
    @staticmethod
    def call(system_seed: str, planet_index: int) -> Dict[str, Any]:
        planet_seed = derive_seed(system_seed, "planet", planet_index)
        stream = SeedStream(planet_seed)
        name, stream = _planet_name(stream, planet_index + 1)
        planet_type, stream = stream.choice(PLANET_TYPES)
        size, stream = stream.choice(PLANET_SIZES)
        return {
            "index": planet_index,
            "name": name,
            "type": planet_type,
            "size": size,
            "minerals": MineralGenerator.call(planet_seed, planet_type),
            "plants": PlantGenerator.call(planet_seed, planet_type),
        }

    generate = call


# ── Systems ────────────────────────────────────────────────────────────────────


def _slot_abundance(deposits: List[Dict[str, Any]]) -> str:
    richness_tenths = sum(int(d["quantity"]) * round(float(d["purity"]) * 10) for d in deposits)
    if richness_tenths < ABUNDANCE_LOW_BELOW * 10:
        return "low"
    if richness_tenths < ABUNDANCE_HIGH_FROM * 10:
        return "medium"
    return "high"


def summarize_minerals(planets: List[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """Per planet slot: the distinct minerals it hosts and the slot's abundance tier."""
    distribution: Dict[str, Dict[str, Any]] = {}
    for planet in planets:
        deposits = planet.get("minerals") or []
        if not deposits:
            continue
        minerals: List[str] = []
        for deposit in deposits:
            if deposit["mineral"] not in minerals:
                minerals.append(deposit["mineral"])
        distribution[str(planet["index"])] = {
            "minerals": minerals,
            "abundance": _slot_abundance(deposits),
        }
    return distribution


def _system_name(system_seed: str) -> str:
    prefix = SYSTEM_NAME_PREFIXES[extract_from_seed(system_seed, 8, 1, len(SYSTEM_NAME_PREFIXES))]
    middle = SYSTEM_NAME_MIDDLES[extract_from_seed(system_seed, 9, 1, len(SYSTEM_NAME_MIDDLES))]
    suffix = SYSTEM_NAME_SUFFIXES[extract_from_seed(system_seed, 10, 1, len(SYSTEM_NAME_SUFFIXES))]
    return f"{prefix} {middle} {suffix}"


def _deposit(mineral: str, quantity: int, purity: float, depth: str) -> Dict[str, Any]:
    return {"mineral": mineral, "quantity": quantity, "purity": purity, "depth": depth, "exotic": False}


_CRADLE_PLANETS: List[Dict[str, Any]] = [
    {
        "index": 0,
        "name": "Cradle Forge",
        "type": "rocky",
        "size": "large",
        "minerals": [
            _deposit("iron", 150_000, 0.9, "surface"),
            _deposit("copper", 120_000, 0.8, "shallow"),
        ],
        "plants": ["stonelichen", "cavemoss"],
    },
    {
        "index": 1,
        "name": "Cradle Shallows",
        "type": "oceanic",
        "size": "massive",
        "minerals": [
            _deposit("aluminum", 140_000, 0.8, "shallow"),
            _deposit("silicon", 130_000, 0.9, "surface"),
        ],
        "plants": ["kelpforest", "seagrass", "biolume"],
    },
    {
        "index": 2,
        "name": "Cradle Verdance",
        "type": "jungle",
        "size": "medium",
        "minerals": [
            _deposit("carbon", 90_000, 0.7, "surface"),
            _deposit("graphite", 60_000, 0.6, "shallow"),
        ],
        "plants": ["megafern", "glowmoss", "canopygiant"],
    },
    {
        "index": 3,
        "name": "Cradle Dunes",
        "type": "desert",
        "size": "small",
        "minerals": [
            _deposit("gold", 12_000, 0.5, "deep"),
            _deposit("silver", 15_000, 0.5, "deep"),
        ],
        "plants": ["cactoid"],
    },
    {
        "index": 4,
        "name": "Cradle Ember",
        "type": "volcanic",
        "size": "medium",
        "minerals": [
            _deposit("uranium", 8_000, 0.4, "core"),
            _deposit("thorium", 9_000, 0.4, "core"),
        ],
        "plants": [],
    },
]

_CRADLE_ABUNDANCE: Dict[str, str] = {"0": "high", "1": "high", "2": "medium", "3": "low", "4": "low"}


def _cradle_system(seed: str) -> Dict[str, Any]:
    planets = [
        {**planet, "minerals": [dict(d) for d in planet["minerals"]], "plants": list(planet["plants"])}
        for planet in _CRADLE_PLANETS
    ]
    distribution = summarize_minerals(planets)
    for slot, abundance in _CRADLE_ABUNDANCE.items():
        distribution[slot]["abundance"] = abundance
    return {
        "coordinates": {"x": 0, "y": 0, "z": 0},
        "seed": derive_seed(seed, *ORIGIN),
        "name": CRADLE_NAME,
        "star_type": "yellow_dwarf",
        "hazard_level": 0,
        "planet_count": len(planets),
        "planets": planets,
        "mineral_distribution": distribution,
        "base_prices": commodity_catalog.canonical_price_table(),
        "special_properties": {
            "tutorial_zone": True,
            "safe_zone": True,
            "high_security": True,
            "saturated_markets": True,
            "tutorial_mineral": TUTORIAL_MINERAL,
            "futuristic_minerals": [],
        },
    }


class SystemGenerator:
    @staticmethod
    def call(seed: str, x: Any, y: Any, z: Any) -> Dict[str, Any]:
        coords = validate_coordinates(x, y, z)
        if coords.as_tuple() == ORIGIN:
            return _cradle_system(seed)

        system_seed = derive_seed(seed, coords.x, coords.y, coords.z)
        star_type = STAR_TYPES[extract_from_seed(system_seed, 0, 2, len(STAR_TYPES))]
        planet_count = extract_from_seed(system_seed, 2, 1, MAX_PLANETS + 1)
        hazard_level = extract_from_seed(system_seed, 3, 1, MAX_HAZARD + 1)

        planets = [PlanetGenerator.call(system_seed, i) for i in range(planet_count)]
        star_mineral = STAR_TYPE_MINERALS.get(star_type)

        return {
            "coordinates": {"x": coords.x, "y": coords.y, "z": coords.z},
            "seed": system_seed,
            "name": _system_name(system_seed),
            "star_type": star_type,
            "hazard_level": hazard_level,
            "planet_count": planet_count,
            "planets": planets,
            "mineral_distribution": summarize_minerals(planets),
            "base_prices": commodity_catalog.canonical_price_table(),
            "special_properties": {
                "tutorial_zone": False,
                "safe_zone": False,
                "high_security": False,
                "saturated_markets": False,
                "futuristic_minerals": [star_mineral] if star_mineral else [],
            },
        }

    generate = call


def generate_system(x: Any, y: Any, z: Any, seed: Optional[str] = None) -> Dict[str, Any]:
    return SystemGenerator.call(seed if seed is not None else GALAXY_SEED, x, y, z)


def grid_coordinates() -> List[Tuple[int, int, int]]:
    axis = range(-COORDINATE_LIMIT, COORDINATE_LIMIT + 1, COORDINATE_STEP)
    return [(x, y, z) for x in axis for y in axis for z in axis]


def generate_grid(seed: Optional[str] = None) -> Dict[Tuple[int, int, int], Dict[str, Any]]:
    """Every legal system on the grid, keyed by (x, y, z)."""
    galaxy_seed = seed if seed is not None else GALAXY_SEED
    return {coords: SystemGenerator.call(galaxy_seed, *coords) for coords in grid_coordinates()}
