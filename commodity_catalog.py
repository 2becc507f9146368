"""
Commodity catalogue: minerals, manufactured components, factory specializations.

Handles:
  - The 60 tradable minerals (50 real across four tiers + 10 futuristic)
  - The 45 components, priced at 1.5x the canonical cost of their mineral inputs
  - Factory specializations (which minerals a factory consumes, which components it produces)
  - Canonical base price lookup used when a system's price table is generated

Commodity ids are lower-case display names ("iron", "circuit board").
"""

from typing import Any, Dict, List, Optional, Tuple


def normalize_commodity(name: Any) -> str:
    return str(name or "").strip().lower()


# ── Minerals ───────────────────────────────────────────────────────────────────

# (name, category, canonical price, tier)
_MINERAL_ROWS: List[Tuple[str, str, int, str]] = [
    # Tier 1: common
    ("Iron", "Metal", 10, "common"),
    ("Copper", "Metal", 15, "common"),
    ("Aluminum", "Metal", 12, "common"),
    ("Silicon", "Semiconductor", 18, "common"),
    ("Carbon", "Element", 8, "common"),
    ("Sulfur", "Element", 6, "common"),
    ("Limestoneite", "Rock", 5, "common"),
    ("Salt", "Mineral", 4, "common"),
    ("Coal", "Fuel", 7, "common"),
    ("Graphite", "Carbon", 14, "common"),
    # Tier 2: uncommon
    ("Nickel", "Metal", 25, "uncommon"),
    ("Zinc", "Metal", 22, "uncommon"),
    ("Tin", "Metal", 28, "uncommon"),
    ("Lead", "Metal", 20, "uncommon"),
    ("Manganese", "Metal", 30, "uncommon"),
    ("Chromium", "Metal", 35, "uncommon"),
    ("Cobalt", "Metal", 45, "uncommon"),
    ("Tungsten", "Metal", 55, "uncommon"),
    ("Molybdenum", "Metal", 50, "uncommon"),
    ("Vanadium", "Metal", 48, "uncommon"),
    ("Quartz", "Crystal", 32, "uncommon"),
    ("Feldspar", "Mineral", 15, "uncommon"),
    ("Mica", "Mineral", 25, "uncommon"),
    ("Bauxite", "Ore", 18, "uncommon"),
    ("Magnetite", "Ore", 22, "uncommon"),
    # Tier 3: rare
    ("Gold", "Precious", 100, "rare"),
    ("Silver", "Precious", 65, "rare"),
    ("Platinum", "Precious", 150, "rare"),
    ("Palladium", "Precious", 140, "rare"),
    ("Rhodium", "Precious", 200, "rare"),
    ("Titanium", "Metal", 80, "rare"),
    ("Lithium", "Alkali", 75, "rare"),
    ("Beryllium", "Metal", 90, "rare"),
    ("Tantalum", "Metal", 120, "rare"),
    ("Niobium", "Metal", 95, "rare"),
    ("Gallium", "Metal", 85, "rare"),
    ("Germanium", "Semiconductor", 110, "rare"),
    ("Indium", "Metal", 130, "rare"),
    ("Tellurium", "Metalloid", 105, "rare"),
    ("Neodymium", "Rare Earth", 160, "rare"),
    # Tier 4: exotic
    ("Uranium", "Radioactive", 250, "exotic"),
    ("Thorium", "Radioactive", 220, "exotic"),
    ("Plutonium", "Radioactive", 400, "exotic"),
    ("Iridium", "Precious", 300, "exotic"),
    ("Osmium", "Precious", 280, "exotic"),
    ("Rhenium", "Metal", 350, "exotic"),
    ("Scandium", "Rare Earth", 180, "exotic"),
    ("Yttrium", "Rare Earth", 170, "exotic"),
    ("Hafnium", "Metal", 260, "exotic"),
    ("Zirconium", "Metal", 145, "exotic"),
    # Futuristic
    ("Stellarium", "Futuristic", 500, "futuristic"),
    ("Voidite", "Futuristic", 750, "futuristic"),
    ("Chronite", "Futuristic", 600, "futuristic"),
    ("Plasmaite", "Futuristic", 450, "futuristic"),
    ("Darkstone", "Futuristic", 800, "futuristic"),
    ("Quantium", "Futuristic", 650, "futuristic"),
    ("Nebulite", "Futuristic", 400, "futuristic"),
    ("Solarite", "Futuristic", 350, "futuristic"),
    ("Cryonite", "Futuristic", 300, "futuristic"),
    ("Exotite", "Futuristic", 1000, "futuristic"),
]

MINERALS: Dict[str, Dict[str, Any]] = {
    normalize_commodity(name): {
        "id": normalize_commodity(name),
        "name": name,
        "category": category,
        "base_price": price,
        "tier": tier,
        "kind": "mineral",
    }
    for name, category, price, tier in _MINERAL_ROWS
}

# Pools used by the deposit generator.
REAL_MINERALS: List[str] = [mid for mid, m in MINERALS.items() if m["tier"] != "futuristic"]
EXOTIC_MINERALS: List[str] = [mid for mid, m in MINERALS.items() if m["tier"] == "futuristic"]


# ── Components ─────────────────────────────────────────────────────────────────

COMPONENT_CATEGORIES: List[str] = [
    "Basic Parts",
    "Electronics",
    "Structural",
    "Power",
    "Propulsion",
    "Weapons",
    "Defense",
    "Life Support",
    "Advanced",
]

_COMPONENT_ROWS: List[Tuple[str, str, Dict[str, int]]] = [
    ("Iron Plate", "Basic Parts", {"iron": 2}),
    ("Copper Wire", "Basic Parts", {"copper": 1, "carbon": 1}),
    ("Steel Beam", "Basic Parts", {"iron": 3, "carbon": 1}),
    ("Metal Bracket", "Basic Parts", {"iron": 1, "aluminum": 1}),
    ("Carbon Rod", "Basic Parts", {"carbon": 2, "graphite": 1}),
    ("Circuit Board", "Electronics", {"silicon": 2, "copper": 1}),
    ("Processor", "Electronics", {"silicon": 3, "gold": 1, "copper": 1}),
    ("Sensor", "Electronics", {"silicon": 1, "copper": 1, "quartz": 1}),
    ("Memory Core", "Electronics", {"silicon": 2, "gold": 1}),
    ("Power Regulator", "Electronics", {"copper": 2, "silicon": 1, "germanium": 1}),
    ("Hull Plating", "Structural", {"iron": 3, "titanium": 1}),
    ("Bulkhead", "Structural", {"iron": 2, "carbon": 2}),
    ("Frame Section", "Structural", {"titanium": 2, "carbon": 1}),
    ("Reinforced Panel", "Structural", {"iron": 2, "titanium": 1, "carbon": 1}),
    ("Pressure Seal", "Structural", {"titanium": 1, "carbon": 2}),
    ("Battery", "Power", {"lithium": 2, "cobalt": 1}),
    ("Fusion Cell", "Power", {"uranium": 1, "lithium": 1, "cobalt": 1}),
    ("Solar Panel", "Power", {"silicon": 2, "indium": 1}),
    ("Power Conduit", "Power", {"copper": 2, "silver": 1}),
    ("Reactor Core", "Power", {"uranium": 2, "hafnium": 1, "zirconium": 1}),
    ("Thruster", "Propulsion", {"titanium": 2, "tungsten": 1}),
    ("Engine Core", "Propulsion", {"titanium": 3, "cobalt": 1, "manganese": 1}),
    ("FTL Coil", "Propulsion", {"stellarium": 2, "titanium": 1}),
    ("Fuel Injector", "Propulsion", {"titanium": 1, "tungsten": 1, "chromium": 1}),
    ("Nav Computer", "Propulsion", {"silicon": 2, "chronite": 1}),
    ("Laser Lens", "Weapons", {"quartz": 2, "platinum": 1}),
    ("Missile Casing", "Weapons", {"tungsten": 2, "titanium": 1}),
    ("Railgun Barrel", "Weapons", {"tungsten": 3, "manganese": 1}),
    ("Plasma Chamber", "Weapons", {"tungsten": 2, "plasmaite": 1}),
    ("Targeting Array", "Weapons", {"platinum": 1, "gold": 1, "silicon": 1}),
    ("Shield Emitter", "Defense", {"titanium": 2, "nebulite": 1}),
    ("Armor Plate", "Defense", {"titanium": 3, "iridium": 1}),
    ("Deflector Array", "Defense", {"nebulite": 2, "silver": 1}),
    ("Point Defense", "Defense", {"titanium": 1, "tungsten": 1, "silicon": 1}),
    ("Stealth Plating", "Defense", {"darkstone": 2, "carbon": 2}),
    ("Air Recycler", "Life Support", {"aluminum": 2, "carbon": 2}),
    ("Water Purifier", "Life Support", {"aluminum": 1, "carbon": 1, "salt": 1}),
    ("Cryo Pod", "Life Support", {"aluminum": 2, "cryonite": 1}),
    ("Atmospheric Processor", "Life Support", {"carbon": 3, "aluminum": 1}),
    ("Radiation Filter", "Life Support", {"lead": 2, "aluminum": 1}),
    ("Quantum Core", "Advanced", {"quantium": 2, "gold": 1}),
    ("Gravity Generator", "Advanced", {"voidite": 2, "titanium": 1}),
    ("Temporal Stabilizer", "Advanced", {"chronite": 2, "platinum": 1}),
    ("Dark Matter Container", "Advanced", {"darkstone": 2, "stellarium": 1}),
    ("Exo-Research Module", "Advanced", {"exotite": 1, "quantium": 1, "silicon": 2}),
]


def component_price(inputs: Dict[str, int]) -> int:
    """1.5x the canonical cost of the inputs, halves rounded up."""
    input_cost = 0
    for mineral_id, quantity in inputs.items():
        mineral = MINERALS.get(mineral_id)
        if mineral is None:
            raise ValueError(f"Unknown mineral input '{mineral_id}'")
        input_cost += int(mineral["base_price"]) * int(quantity)
    return (input_cost * 3 + 1) // 2


COMPONENTS: Dict[str, Dict[str, Any]] = {
    normalize_commodity(name): {
        "id": normalize_commodity(name),
        "name": name,
        "category": category,
        "inputs": dict(inputs),
        "base_price": component_price(inputs),
        "kind": "component",
    }
    for name, category, inputs in _COMPONENT_ROWS
}


# ── Factory specializations ────────────────────────────────────────────────────

_SPECIALIZATION_CATEGORIES: Dict[str, str] = {
    "basic": "Basic Parts",
    "electronics": "Electronics",
    "structural": "Structural",
    "power": "Power",
    "propulsion": "Propulsion",
    "weapons": "Weapons",
    "defense": "Defense",
    "advanced": "Advanced",
}


def _build_specializations() -> Dict[str, Dict[str, List[str]]]:
    out: Dict[str, Dict[str, List[str]]] = {}
    for spec, category in _SPECIALIZATION_CATEGORIES.items():
        members = [c for c in COMPONENTS.values() if c["category"] == category]
        consumes = sorted({mineral for c in members for mineral in c["inputs"]})
        out[spec] = {
            "consumes": consumes,
            "produces": [str(c["id"]) for c in members],
        }
    return out


FACTORY_SPECIALIZATIONS: Dict[str, Dict[str, List[str]]] = _build_specializations()


# ── Lookups ────────────────────────────────────────────────────────────────────

def get_commodity(name: Any) -> Optional[Dict[str, Any]]:
    key = normalize_commodity(name)
    return MINERALS.get(key) or COMPONENTS.get(key)


def is_known_commodity(name: Any) -> bool:
    return get_commodity(name) is not None


def canonical_price(name: Any) -> Optional[int]:
    commodity = get_commodity(name)
    return int(commodity["base_price"]) if commodity else None


def canonical_price_table() -> Dict[str, int]:
    """Every tradable commodity id mapped to its canonical base price."""
    table = {mid: int(m["base_price"]) for mid, m in MINERALS.items()}
    table.update({cid: int(c["base_price"]) for cid, c in COMPONENTS.items()})
    return table


def specialization_consumes(specialization: Any) -> List[str]:
    spec = FACTORY_SPECIALIZATIONS.get(normalize_commodity(specialization))
    return list(spec["consumes"]) if spec else []


def specialization_produces(specialization: Any) -> List[str]:
    spec = FACTORY_SPECIALIZATIONS.get(normalize_commodity(specialization))
    return list(spec["produces"]) if spec else []


def specialization_for_component(component: Any) -> Optional[str]:
    key = normalize_commodity(component)
    for spec, config in FACTORY_SPECIALIZATIONS.items():
        if key in config["produces"]:
            return spec
    return None


def components_using(mineral: Any) -> List[str]:
    key = normalize_commodity(mineral)
    return [cid for cid, c in COMPONENTS.items() if key in c["inputs"]]
