"""CLI entrypoint for the MK8 Build Optimizer."""

from __future__ import annotations

import sys

from mk8_engine import __version__
from mk8_engine.config import load_playstyles
from mk8_engine.core.grip import grip_on_slippery_terrain, slip_class_label
from mk8_engine.core.optimizer import find_best_combination
from mk8_engine.demo import demo_catalog, demo_slip_modifiers
from mk8_engine.logging_config import setup_logging


def main() -> None:
    """Run a demonstration of the build search on the offline catalog."""
    setup_logging()
    print(f"MK8 Build Optimizer v{__version__}")
    print("=" * 56)

    # -- Load playstyles ------------------------------------------------------
    playstyles = load_playstyles()
    print(f"\n{len(playstyles)} playstyles loaded")
    for key, style in playstyles.items():
        print(f"  {key:<18} {style.display_name}")

    catalog = demo_catalog()
    print(
        f"\nDemo catalog: {len(catalog.drivers)} drivers, "
        f"{len(catalog.bodies)} bodies, {len(catalog.tires)} tires, "
        f"{len(catalog.gliders)} gliders"
    )
    print("-" * 56)

    # -- Best build per playstyle --------------------------------------------
    for style in playstyles.values():
        best = find_best_combination(
            catalog.drivers,
            catalog.bodies,
            catalog.tires,
            catalog.gliders,
            style.weights,
        )
        print(f"\n{style.display_name}:")
        if best is None:
            print("  Could not determine a best build.")
            continue
        for category, name in best.names.items():
            print(f"  {category:<7} {name}")
        print(f"  {'Score':<7} {best.score:.2f}")

    # -- Grip on slippery terrain --------------------------------------------
    best = find_best_combination(
        catalog.drivers,
        catalog.bodies,
        catalog.tires,
        catalog.gliders,
        "OffRoadTraction",
    )
    if best is not None:
        traction = best.stats.get("OffRoadTraction", 0.0)
        print(f"\nBest OffRoadTraction build: {traction:.2f}")
        for slip_class, modifiers in demo_slip_modifiers().items():
            grip = grip_on_slippery_terrain(best.stats, modifiers)
            shown = "n/a" if grip is None else f"{grip:.3f}"
            print(f"  {slip_class_label(slip_class):<7} grip {shown}")


if __name__ == "__main__":
    sys.exit(main() or 0)
