"""
Canonical shared constants for the StellArb procedural core.

Generators, the commodity catalogue, and the pricing services all read
their enumerations and name pools from here.
"""

from typing import Dict, List, Tuple

# ---------------------------------------------------------------------------
# Coordinates
# ---------------------------------------------------------------------------

COORDINATE_STEP = 3
COORDINATE_LIMIT = 9
ORIGIN: Tuple[int, int, int] = (0, 0, 0)

# ---------------------------------------------------------------------------
# Systems
# ---------------------------------------------------------------------------

STAR_TYPES: List[str] = [
    "red_dwarf",
    "yellow_dwarf",
    "orange_dwarf",
    "white_dwarf",
    "blue_giant",
    "red_giant",
    "yellow_giant",
    "neutron_star",
    "binary_system",
    "black_hole_proximity",
]

MAX_PLANETS = 12
MAX_HAZARD = 100

SYSTEM_NAME_PREFIXES: List[str] = [
    "Alpha", "Beta", "Gamma", "Delta", "Epsilon",
    "Zeta", "Eta", "Theta", "Iota", "Kappa",
]
SYSTEM_NAME_MIDDLES: List[str] = [
    "Centauri", "Pegasi", "Cygni", "Orionis", "Ursae",
    "Draconis", "Leonis", "Aquarii", "Scorpii", "Tauri",
]
SYSTEM_NAME_SUFFIXES: List[str] = [
    "Prime", "Major", "Minor", "Alpha", "Beta", "Gamma",
    "I", "II", "III", "IV", "V", "VI", "VII", "VIII", "IX", "X",
]

# Futuristic mineral unlocked by each star type.
STAR_TYPE_MINERALS: Dict[str, str] = {
    "neutron_star": "stellarium",
    "black_hole_proximity": "voidite",
    "binary_system": "chronite",
    "blue_giant": "plasmaite",
    "yellow_giant": "solarite",
    "red_giant": "cryonite",
}

# ---------------------------------------------------------------------------
# Planets
# ---------------------------------------------------------------------------

PLANET_TYPES: List[str] = [
    "rocky",
    "gas_giant",
    "ice",
    "volcanic",
    "oceanic",
    "desert",
    "jungle",
    "barren",
]

PLANET_SIZES: List[str] = ["small", "medium", "large", "massive"]

PLANET_NAME_PREFIXES: List[str] = [
    "Kepler", "Sigma", "Tau", "Alpha", "Beta", "Gamma", "Delta", "Epsilon",
    "Zeta", "Theta", "Nova", "Vega", "Rigel", "Sirius", "Altair", "Deneb",
    "Polaris", "Antares", "Castor", "Pollux", "Proxima", "Gliese", "Wolf",
    "Ross", "Lacaille", "Tycho", "Hydra", "Lyra", "Orion",
]
PLANET_NAME_SUFFIXES: List[str] = [
    "Prime", "Minor", "Major", "Secundus", "Tertius", "Nova", "Ultima",
    "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
    "Ten", "Eleven", "Twelve",
    "b", "c", "d", "e", "f", "g", "h", "i", "j", "k",
]

DEPOSIT_DEPTHS: List[str] = ["surface", "shallow", "deep", "core"]

MAX_DEPOSITS = 10
MAX_PLANTS = 5

# Percent chance that a single deposit is drawn from the exotic pool.
EXOTIC_CHANCE_PERCENT = 2

# Deposit quantity multiplier per planet type, in tenths.
QUANTITY_MULTIPLIER_TENTHS: Dict[str, int] = {
    "gas_giant": 1,
    "rocky": 15,
    "barren": 15,
    "volcanic": 20,
}
DEFAULT_QUANTITY_MULTIPLIER_TENTHS = 10

# Inclusive purity range per planet type, in tenths.
PURITY_RANGE_TENTHS: Dict[str, Tuple[int, int]] = {
    "gas_giant": (1, 6),
    "volcanic": (3, 10),
}
DEFAULT_PURITY_RANGE_TENTHS: Tuple[int, int] = (1, 10)

PLANT_POOLS: Dict[str, List[str]] = {
    "jungle": [
        "megafern", "vinestalker", "sporetree", "glowmoss", "canopygiant",
        "thornvine", "orchidbloom", "rubbertree", "shadowleaf", "mudcrawler",
    ],
    "oceanic": [
        "kelpforest", "coralbloom", "seagrass", "planktonmat", "floatfruit",
        "tidepod", "shellflower", "deepsponge", "biolume", "currentweed",
    ],
    "desert": [
        "cactoid", "sandblossom", "dustshrub", "miragepalm", "thornweed",
        "saltbrush", "crystalcactus", "suntrapper", "sandcrawler", "drysage",
    ],
    "volcanic": [
        "ashbloom", "lavamoss", "sulfurweed", "firevine", "heatstem",
        "magmafern", "cinderfruit", "scorchroot", "emberflower", "pyrobulb",
    ],
    "ice": [
        "frostlichen", "snowbloom", "icemoss", "crystalfern", "winterleaf",
        "glaciervine", "permafrost", "polarweed", "coldsnap", "frozenfruit",
    ],
    "rocky": [
        "stonelichen", "rockweed", "mineralvine", "cliffbloom", "cavemoss",
        "gravelfern", "boulderleaf", "canyonroot", "plateaugrass", "dustlichen",
    ],
    "barren": [
        "voidlichen", "starmoss", "cosmicweed", "solardust", "nullbloom",
        "vacuumfern", "radleaf", "ionvine", "darkmatter", "zerogrowth",
    ],
    "gas_giant": [],
}

# ---------------------------------------------------------------------------
# Abundance
# ---------------------------------------------------------------------------

ABUNDANCE_LEVELS: List[str] = ["low", "medium", "high"]
DEFAULT_ABUNDANCE = "medium"

# Legacy five-step labels collapse onto the three pricing levels.
ABUNDANCE_ALIASES: Dict[str, str] = {
    "very_low": "low",
    "very_high": "high",
}

# Planet-slot richness (sum of quantity * purity) thresholds.
ABUNDANCE_LOW_BELOW = 50_000
ABUNDANCE_HIGH_FROM = 200_000

# ---------------------------------------------------------------------------
# Races, archetype categories, structures
# ---------------------------------------------------------------------------

RACES: List[str] = ["vex", "solari", "krog", "myrmidon"]
HULL_SIZES: List[str] = ["scout", "frigate", "transport", "cruiser", "titan"]
BUILDING_FUNCTIONS: List[str] = ["extraction", "refining", "logistics", "civic", "defense"]
TIERS: List[int] = [1, 2, 3, 4, 5]

STRUCTURE_STATUSES: List[str] = ["active", "inactive", "under_construction", "destroyed"]

# Functions limited to a single structure per system.
SINGLETON_FUNCTIONS = {"logistics", "civic"}
