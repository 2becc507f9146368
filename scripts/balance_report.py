#!/usr/bin/env python3
"""
Print a balance report for the ship and building archetype catalogues.

  - Average consecutive-tier cost ratio per (race, category); flags anything
    outside the 1.5x-2.1x band
  - Per-race averages of the stats racial modifiers touch

Pass a path to also write both catalogues as JSON:
  python scripts/balance_report.py archetypes.json
"""
import json
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from archetype_generator import (  # noqa: E402
    BuildingGenerator,
    ShipGenerator,
    verify_racial_bonuses,
    verify_tier_scaling,
)

RATIO_BAND = (1.5, 2.1)

ships = ShipGenerator.generate_all_types()
buildings = BuildingGenerator.generate_all_types()

for label, items in (("Ships", ships), ("Buildings", buildings)):
    print(f"\n── {label}: {len(items)} archetypes ──")
    for group, ratio in sorted(verify_tier_scaling(items).items()):
        status = "OK" if RATIO_BAND[0] <= ratio <= RATIO_BAND[1] else "OUT OF BAND"
        print(f"  {group:<24} cost x{ratio:.3f}  {status}")

print("\n── Ship racial averages ──")
for race, stats in verify_racial_bonuses(ships, ["cost", "cargo_capacity", "hull_points", "sensor_range"]).items():
    print(f"  {race:<10} " + "  ".join(f"{k}={v:,.0f}" for k, v in stats.items()))

print("\n── Building racial averages ──")
for race, stats in verify_racial_bonuses(buildings, ["cost", "output", "durability", "power_consumption"]).items():
    print(f"  {race:<10} " + "  ".join(f"{k}={v:,.0f}" for k, v in stats.items()))

if len(sys.argv) > 1:
    with open(sys.argv[1], "w") as f:
        json.dump({"ships": ships, "buildings": buildings}, f, indent=2)
        f.write("\n")
    print(f"\nWrote {len(ships) + len(buildings)} archetypes to {sys.argv[1]}")
