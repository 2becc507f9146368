"""
World generation tests: coordinate contract, the origin hub, and the
statistical shape of generated systems, planets, deposits and plants.

Most checks sweep every coordinate on the discovery grid (7 x 7 x 7 systems).
"""

import re
import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

GRID = [-9, -6, -3, 0, 3, 6, 9]


@pytest.fixture(scope="module")
def grid_systems() -> List[Dict[str, Any]]:
    from world_generator import generate_grid

    return list(generate_grid("stellarb").values())


@pytest.fixture(scope="module")
def all_planets(grid_systems) -> List[Dict[str, Any]]:
    return [p for s in grid_systems for p in s["planets"]]


# ── Coordinates ───────────────────────────────────────────────────────────

class TestCoordinates:
    @pytest.mark.parametrize("coords", [(1, 0, 0), (12, 0, 0), (0, -12, 0), (0, 0, 2), (3, 3, 10)])
    def test_off_grid_coordinates_rejected(self, coords):
        from world_generator import CoordinateError, SystemGenerator

        with pytest.raises(CoordinateError):
            SystemGenerator.call("stellarb", *coords)

    @pytest.mark.parametrize("coords", [("3", 0, 0), (3.0, 0, 0), (True, 0, 0), (None, 0, 0)])
    def test_non_integer_coordinates_rejected(self, coords):
        from world_generator import CoordinateError, validate_coordinates

        with pytest.raises(CoordinateError):
            validate_coordinates(*coords)

    def test_error_lists_each_bad_axis(self):
        from world_generator import CoordinateError, validate_coordinates

        with pytest.raises(CoordinateError) as excinfo:
            validate_coordinates(1, 0, 12)
        bad_axes = {err["loc"][0] for err in excinfo.value.errors}
        assert bad_axes == {"x", "z"}

    def test_coordinate_error_is_value_error(self):
        from world_generator import CoordinateError

        assert issubclass(CoordinateError, ValueError)

    def test_grid_corners_accepted(self):
        from world_generator import validate_coordinates

        assert validate_coordinates(-9, 9, -9).as_tuple() == (-9, 9, -9)

    def test_grid_covers_every_legal_coordinate(self):
        from world_generator import grid_coordinates, validate_coordinates

        coords = grid_coordinates()
        assert len(coords) == len(GRID) ** 3
        assert set(coords) == {(x, y, z) for x in GRID for y in GRID for z in GRID}
        for c in coords:
            validate_coordinates(*c)


class TestGrid:
    def test_keyed_by_coordinates(self, grid_systems):
        from world_generator import generate_grid

        grid = generate_grid("stellarb")
        assert list(grid.values()) == grid_systems
        for (x, y, z), system in grid.items():
            assert system["coordinates"] == {"x": x, "y": y, "z": z}

    def test_defaults_to_configured_seed(self):
        from world_generator import GALAXY_SEED, generate_grid, generate_system

        grid = generate_grid()
        assert grid[(3, -3, 9)] == generate_system(3, -3, 9, seed=GALAXY_SEED)


# ── Origin hub ────────────────────────────────────────────────────────────

class TestCradle:
    def test_fixed_properties(self):
        from world_generator import CRADLE_NAME, SystemGenerator

        cradle = SystemGenerator.call("stellarb", 0, 0, 0)
        assert cradle["name"] == CRADLE_NAME
        assert cradle["hazard_level"] == 0
        assert cradle["star_type"] == "yellow_dwarf"
        assert cradle["planet_count"] == len(cradle["planets"]) == 5

    def test_contains_tutorial_mineral(self):
        from world_generator import TUTORIAL_MINERAL, SystemGenerator

        cradle = SystemGenerator.call("stellarb", 0, 0, 0)
        minerals = {m for slot in cradle["mineral_distribution"].values() for m in slot["minerals"]}
        assert TUTORIAL_MINERAL in minerals
        assert cradle["mineral_distribution"]["0"]["abundance"] == "high"

    def test_flags_safe_tutorial_zone(self):
        from world_generator import SystemGenerator

        props = SystemGenerator.call("stellarb", 0, 0, 0)["special_properties"]
        assert props["tutorial_zone"] is True
        assert props["safe_zone"] is True

    def test_same_for_every_galaxy_seed(self):
        from world_generator import SystemGenerator

        a = SystemGenerator.call("alpha", 0, 0, 0)
        b = SystemGenerator.call("beta", 0, 0, 0)
        for key in ("name", "star_type", "hazard_level", "planets", "mineral_distribution"):
            assert a[key] == b[key]

    def test_generation_does_not_share_state(self):
        from world_generator import SystemGenerator

        a = SystemGenerator.call("stellarb", 0, 0, 0)
        a["planets"][0]["minerals"].clear()
        b = SystemGenerator.call("stellarb", 0, 0, 0)
        assert b["planets"][0]["minerals"]


# ── Systems ───────────────────────────────────────────────────────────────

class TestSystems:
    def test_deterministic(self):
        from world_generator import SystemGenerator

        assert SystemGenerator.call("stellarb", 3, -6, 9) == SystemGenerator.call("stellarb", 3, -6, 9)

    def test_galaxy_seed_changes_output(self):
        from world_generator import SystemGenerator

        a = SystemGenerator.call("stellarb", 3, -6, 9)
        b = SystemGenerator.call("another-galaxy", 3, -6, 9)
        assert a["seed"] != b["seed"]

    def test_generate_system_uses_configured_seed(self):
        from world_generator import GALAXY_SEED, SystemGenerator, generate_system

        assert generate_system(6, 6, 6) == SystemGenerator.call(GALAXY_SEED, 6, 6, 6)

    def test_distinct_coordinates_give_distinct_systems(self, grid_systems):
        procedural = [s for s in grid_systems if s["coordinates"] != {"x": 0, "y": 0, "z": 0}]
        assert len(procedural) >= 10
        assert len({s["seed"] for s in procedural}) == len(procedural)
        fingerprints = {(s["name"], s["star_type"], s["hazard_level"], s["planet_count"]) for s in procedural}
        assert len(fingerprints) > len(procedural) * 0.9

    def test_neighbouring_systems_differ(self):
        from world_generator import SystemGenerator

        coords = [(3, 0, 0), (0, 3, 0), (0, 0, 3), (-3, 0, 0), (0, -3, 0), (0, 0, -3),
                  (3, 3, 0), (3, 0, 3), (0, 3, 3), (3, 3, 3), (-3, -3, -3), (9, 9, 9)]
        systems = [SystemGenerator.call("stellarb", *c) for c in coords]
        assert len({s["seed"] for s in systems}) == len(coords)
        assert len({(s["name"], s["hazard_level"], s["planet_count"]) for s in systems}) >= len(coords) - 1

    def test_generate_is_call(self):
        from world_generator import MineralGenerator, PlanetGenerator, PlantGenerator, SystemGenerator

        assert SystemGenerator.generate("stellarb", 3, 6, 9) == SystemGenerator.call("stellarb", 3, 6, 9)
        assert PlanetGenerator.generate("s", 2) == PlanetGenerator.call("s", 2)
        assert MineralGenerator.generate("p", "volcanic") == MineralGenerator.call("p", "volcanic")
        assert PlantGenerator.generate("p", "jungle") == PlantGenerator.call("p", "jungle")

    def test_scalar_ranges(self, grid_systems):
        from constants import STAR_TYPES

        for system in grid_systems:
            assert 0 <= system["planet_count"] <= 12
            assert system["planet_count"] == len(system["planets"])
            assert 0 <= system["hazard_level"] <= 100
            assert system["star_type"] in STAR_TYPES

    def test_planet_counts_vary(self, grid_systems):
        assert len({s["planet_count"] for s in grid_systems}) > 5

    def test_base_prices_match_catalogue(self, grid_systems):
        import commodity_catalog

        table = commodity_catalog.canonical_price_table()
        for system in grid_systems[:20]:
            assert system["base_prices"] == table
        assert table["iron"] == 10

    def test_distribution_summarises_planet_deposits(self, grid_systems):
        for system in grid_systems:
            for slot, entry in system["mineral_distribution"].items():
                planet = system["planets"][int(slot)]
                assert set(entry["minerals"]) == {d["mineral"] for d in planet["minerals"]}
                assert entry["abundance"] in ("low", "medium", "high")

    def test_abundance_levels_all_occur(self, grid_systems):
        levels = {
            entry["abundance"]
            for s in grid_systems
            for entry in s["mineral_distribution"].values()
        }
        assert levels == {"low", "medium", "high"}

    def test_star_type_minerals_flagged(self, grid_systems):
        from constants import STAR_TYPE_MINERALS

        for system in grid_systems:
            expected = STAR_TYPE_MINERALS.get(system["star_type"])
            if system["coordinates"] == {"x": 0, "y": 0, "z": 0}:
                continue
            assert system["special_properties"]["futuristic_minerals"] == ([expected] if expected else [])


# ── Planets ───────────────────────────────────────────────────────────────

NAME_PATTERN = re.compile(r"^[\w\s\-]+$")


class TestPlanets:
    def test_names_match_pattern(self, all_planets):
        for planet in all_planets:
            assert NAME_PATTERN.match(planet["name"]), planet["name"]

    def test_names_distinct_within_system(self, grid_systems):
        for system in grid_systems:
            names = [p["name"] for p in system["planets"]]
            assert len(names) == len(set(names))

    def test_different_indices_give_different_planets(self):
        from world_generator import PlanetGenerator

        planets = [PlanetGenerator.call("system-seed", i) for i in range(12)]
        for a, b in zip(planets, planets[1:]):
            assert a["name"] != b["name"]

    def test_type_and_size_enumerations(self, all_planets):
        from constants import PLANET_SIZES, PLANET_TYPES

        for planet in all_planets:
            assert planet["type"] in PLANET_TYPES
            assert planet["size"] in PLANET_SIZES


# ── Deposits ──────────────────────────────────────────────────────────────

class TestDeposits:
    def test_deposit_bounds(self, all_planets):
        from constants import DEPOSIT_DEPTHS

        for planet in all_planets:
            assert 1 <= len(planet["minerals"]) <= 10
            for deposit in planet["minerals"]:
                assert 100 <= deposit["quantity"] <= 200_000
                assert 0.1 <= deposit["purity"] <= 1.0
                assert deposit["depth"] in DEPOSIT_DEPTHS

    def test_minerals_come_from_catalogue_pools(self, all_planets):
        import commodity_catalog

        pool = set(commodity_catalog.REAL_MINERALS) | set(commodity_catalog.EXOTIC_MINERALS)
        for planet in all_planets:
            for deposit in planet["minerals"]:
                assert deposit["mineral"] in pool

    def test_exotic_fraction_is_small(self, all_planets):
        import commodity_catalog

        deposits = [d for p in all_planets for d in p["minerals"]]
        assert len(deposits) >= 1000
        exotic = [d for d in deposits if d["mineral"] in commodity_catalog.EXOTIC_MINERALS]
        assert 0 <= len(exotic) / len(deposits) <= 0.05

    def test_gas_giant_quantities_are_scaled_down(self):
        from world_generator import MineralGenerator

        for i in range(50):
            for deposit in MineralGenerator.call(f"planet-{i}", "gas_giant"):
                assert deposit["quantity"] <= 9_999
                assert deposit["purity"] <= 0.6

    def test_deterministic_per_planet_seed(self):
        from world_generator import MineralGenerator

        assert MineralGenerator.call("p", "rocky") == MineralGenerator.call("p", "rocky")


# ── Plants ────────────────────────────────────────────────────────────────

class TestPlants:
    def test_gas_giants_have_no_plants(self, all_planets):
        gas_giants = [p for p in all_planets if p["type"] == "gas_giant"]
        assert gas_giants
        for planet in gas_giants:
            assert planet["plants"] == []

    def test_plants_distinct_and_from_type_pool(self, all_planets):
        from constants import PLANT_POOLS

        for planet in all_planets:
            assert len(planet["plants"]) <= 5
            assert len(planet["plants"]) == len(set(planet["plants"]))
            assert set(planet["plants"]) <= set(PLANT_POOLS[planet["type"]])

    def test_unknown_planet_type_has_no_plants(self):
        from world_generator import PlantGenerator

        assert PlantGenerator.call("p", "crystalline") == []
