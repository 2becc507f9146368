"""
Balance tables shared by the archetype generators and the pricing pipeline.

Everything here is data keyed by race / category / tier. The generators and
the pricing step read these tables; none of them branch on a race or a
function name.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

TIER_MULTIPLIERS: Dict[int, float] = {1: 1.0, 2: 1.8, 3: 3.24, 4: 5.832, 5: 10.4976}

ROMAN_NUMERALS: Dict[int, str] = {1: "I", 2: "II", 3: "III", 4: "IV", 5: "V"}


# ── Ship hulls ─────────────────────────────────────────────────────────────────

# tier -> (cost, cargo capacity)
SHIP_TIER_TABLE: Dict[str, Dict[int, Tuple[int, int]]] = {
    "scout": {
        1: (10_000, 10),
        2: (18_000, 18),
        3: (32_400, 32),
        4: (58_320, 58),
        5: (104_976, 105),
    },
    "frigate": {
        1: (50_000, 50),
        2: (90_000, 90),
        3: (162_000, 162),
        4: (291_600, 292),
        5: (524_880, 525),
    },
    "transport": {
        1: (200_000, 200),
        2: (360_000, 360),
        3: (648_000, 648),
        4: (1_166_400, 1_166),
        5: (2_099_520, 2_100),
    },
    "cruiser": {
        1: (1_000_000, 500),
        2: (1_800_000, 900),
        3: (3_240_000, 1_620),
        4: (5_832_000, 2_916),
        5: (10_497_600, 5_249),
    },
    "titan": {
        1: (5_000_000, 2_000),
        2: (9_000_000, 3_600),
        3: (16_200_000, 6_480),
        4: (29_160_000, 11_664),
        5: (52_488_000, 20_995),
    },
}


@dataclass(frozen=True)
class HullProfile:
    fuel_efficiency: float
    crew: Tuple[int, int]
    hardpoints: int
    maneuverability: int
    hull_points: int
    maintenance: int
    sensors: int


HULL_PROFILES: Dict[str, HullProfile] = {
    "scout": HullProfile(1.0, (1, 2), 1, 80, 100, 50, 10),
    "frigate": HullProfile(1.2, (2, 4), 2, 65, 250, 150, 8),
    "transport": HullProfile(1.5, (3, 6), 2, 40, 500, 300, 5),
    "cruiser": HullProfile(1.8, (5, 10), 4, 25, 1000, 600, 12),
    "titan": HullProfile(2.0, (10, 20), 8, 10, 2500, 1500, 15),
}

SHIP_RACIAL_MODIFIERS: Dict[str, Dict[str, float]] = {
    "vex": {"cargo": 1.2},
    "solari": {"sensors": 1.2},
    "krog": {"hull": 1.2},
    "myrmidon": {"cost": 0.8},
}

SHIP_NAME_PREFIXES: Dict[str, List[str]] = {
    "vex": ["Profit", "Greed", "Fortune", "Credit", "Margin"],
    "solari": ["Logic", "Reason", "Theory", "Axiom", "Proof"],
    "krog": ["Hammer", "Fist", "Rage", "Fury", "Storm"],
    "myrmidon": ["Swarm", "Hive", "Unity", "Cluster", "Colony"],
}

SHIP_NAME_SUFFIXES: Dict[str, List[str]] = {
    "scout": ["Scout", "Seeker", "Finder", "Eye", "Wing"],
    "frigate": ["Hunter", "Guard", "Shield", "Blade", "Edge"],
    "transport": ["Hauler", "Carrier", "Mover", "Lifter", "Loader"],
    "cruiser": ["Destroyer", "Warrior", "Champion", "Dominator", "Victor"],
    "titan": ["Colossus", "Behemoth", "Leviathan", "Juggernaut", "Sovereign"],
}


# ── Buildings ──────────────────────────────────────────────────────────────────

# tier -> (cost, primary output)
BUILDING_TIER_TABLE: Dict[str, Dict[int, Tuple[int, int]]] = {
    "extraction": {
        1: (10_000, 20),
        2: (18_000, 36),
        3: (32_400, 65),
        4: (58_320, 117),
        5: (104_976, 210),
    },
    "refining": {
        1: (25_000, 30),
        2: (45_000, 54),
        3: (81_000, 97),
        4: (145_800, 175),
        5: (262_440, 315),
    },
    "logistics": {
        1: (15_000, 10_000),
        2: (27_000, 18_000),
        3: (48_600, 32_400),
        4: (87_480, 58_320),
        5: (157_464, 104_976),
    },
    "civic": {
        1: (20_000, 1_000),
        2: (36_000, 1_800),
        3: (64_800, 3_240),
        4: (116_640, 5_832),
        5: (209_952, 10_498),
    },
    "defense": {
        1: (30_000, 100),
        2: (54_000, 180),
        3: (97_200, 324),
        4: (174_960, 583),
        5: (314_928, 1_050),
    },
}

BUILDING_OUTPUT_UNITS: Dict[str, str] = {
    "extraction": "ore_per_hour",
    "refining": "units_per_hour",
    "logistics": "storage_capacity",
    "civic": "population",
    "defense": "firepower",
}

BUILDING_TYPES: Dict[str, List[str]] = {
    "extraction": ["mineral_mine", "gas_harvester", "water_extractor"],
    "refining": ["ore_refinery", "chemical_plant"],
    "logistics": ["warehouse"],
    "civic": ["marketplace", "habitat"],
    "defense": ["defense_platform"],
}

# Per-tier baselines for the secondary building stats.
BUILDING_BASE_DURABILITY = 500
BUILDING_BASE_MAINTENANCE = 100
BUILDING_BASE_STAFF = 10
BUILDING_BASE_POWER: Dict[str, int] = {
    "extraction": 40,
    "refining": 60,
    "logistics": 15,
    "civic": 25,
    "defense": 50,
}

BUILDING_RACIAL_MODIFIERS: Dict[str, Dict[str, float]] = {
    "vex": {"output": 1.2},
    "solari": {"power": 1.3},
    "krog": {"durability": 1.3},
    "myrmidon": {"cost": 0.8},
}

PREFERRED_FUNCTIONS: Dict[str, Tuple[str, str]] = {
    "vex": ("logistics", "civic"),
    "solari": ("extraction", "refining"),
    "krog": ("refining", "defense"),
    "myrmidon": ("civic", "extraction"),
}
PREFERRED_FUNCTION_EFFICIENCY = 1.1

BUILDING_NAME_PREFIXES: Dict[str, List[str]] = {
    "vex": ["Profitable", "Golden", "Premium", "Luxury", "Elite"],
    "solari": ["Efficient", "Optimal", "Advanced", "Quantum", "Photonic"],
    "krog": ["Heavy", "Armored", "Fortified", "Brutal", "Massive"],
    "myrmidon": ["Collective", "Swarm", "Hive", "Unity", "Colony"],
}


# ── Structure price effects ────────────────────────────────────────────────────

@dataclass(frozen=True)
class PriceEffect:
    """A multiplicative price modifier a structure applies to a set of commodities.

    `target` names the commodity set relative to the structure:
      - "specialization": the structure's own specialization (a mine's mineral)
      - "consumes": minerals consumed by the structure's factory specialization
      - "produces": components produced by the structure's factory specialization
    """

    kind: str
    target: str
    multipliers: Dict[int, str]

    def multiplier_for(self, tier: int) -> str:
        return self.multipliers[int(tier)]


# Multipliers are decimal strings so the pipeline can use them exactly.
STRUCTURE_PRICE_EFFECTS: Dict[str, Tuple[PriceEffect, ...]] = {
    "extraction": (
        PriceEffect(
            kind="output_discount",
            target="specialization",
            multipliers={1: "0.95", 2: "0.90", 3: "0.85", 4: "0.80", 5: "0.75"},
        ),
    ),
    "refining": (
        PriceEffect(
            kind="input_surcharge",
            target="consumes",
            multipliers={1: "1.10", 2: "1.15", 3: "1.20", 4: "1.25", 5: "1.30"},
        ),
        PriceEffect(
            kind="output_discount",
            target="produces",
            multipliers={1: "0.95", 2: "0.90", 3: "0.85", 4: "0.80", 5: "0.75"},
        ),
    ),
}


def price_effects_for(function: str) -> Tuple[PriceEffect, ...]:
    return STRUCTURE_PRICE_EFFECTS.get(str(function or "").strip().lower(), ())
