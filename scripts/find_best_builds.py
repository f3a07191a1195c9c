#!/usr/bin/env python
"""Compute best builds for every playstyle and every stat.

This script orchestrates the batch workflow:

1. Fetch all Driver, Body, Tire and Glider components from the MK8
   ontology (or use the offline demo catalog with ``--offline``).
2. Run the weighted build search for every playstyle preset.
3. Run the single-stat build search for every known stat.
4. Save results to ``results/best_builds.json`` and the per-category stat
   tables to ``results/<category>_stats.csv``.
5. Print a structured summary.

Usage
-----
::

    python scripts/find_best_builds.py [--offline]

Requirements
------------
- ``requests``, ``pandas`` and ``pyyaml`` must be installed.
- Internet access is required unless ``--offline`` is given.
"""

from __future__ import annotations

import argparse
import json
import os
import sys

# Ensure the project root is on the import path.
_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from mk8_engine.config import load_playstyles  # noqa: E402
from mk8_engine.core.component import (  # noqa: E402
    CATEGORIES,
    STAT_NAMES,
    ComponentCatalog,
)
from mk8_engine.core.optimizer import (  # noqa: E402
    Combination,
    Objective,
    find_best_combination,
)
from mk8_engine.data_ingestion.sparql_loader import (  # noqa: E402
    build_stat_table,
    fetch_all_components,
)
from mk8_engine.demo import demo_catalog  # noqa: E402
from mk8_engine.logging_config import setup_logging  # noqa: E402

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

RESULTS_DIR: str = os.path.join(_project_root, "results")
OUTPUT_PATH: str = os.path.join(RESULTS_DIR, "best_builds.json")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _search(catalog: ComponentCatalog, objective: Objective) -> Combination | None:
    return find_best_combination(
        catalog.drivers,
        catalog.bodies,
        catalog.tires,
        catalog.gliders,
        objective,
    )


def _to_record(best: Combination | None) -> dict[str, object] | None:
    """Convert a search result into a JSON-serialisable dict."""
    if best is None:
        return None
    return {
        "components": best.names,
        "score": best.score,
        "stats": dict(best.stats),
    }


# ---------------------------------------------------------------------------
# Main pipeline
# ---------------------------------------------------------------------------


def main() -> None:
    """Run the best-build batch job."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--offline",
        action="store_true",
        help="use the built-in demo catalog instead of the SPARQL endpoint",
    )
    args = parser.parse_args()
    setup_logging()

    print("=" * 60)
    print("MK8 BEST BUILD SEARCH")
    print("=" * 60)
    print()

    # -- Step 1: Load components ---------------------------------------------
    source = "demo catalog" if args.offline else "SPARQL endpoint"
    print(f"[1/4] Loading components from {source}")
    catalog = demo_catalog() if args.offline else fetch_all_components()
    for category in CATEGORIES:
        print(f"      {category:<7} {len(catalog.for_category(category))}")
    print()

    # -- Step 2: Playstyles --------------------------------------------------
    playstyles = load_playstyles()
    print(f"[2/4] Searching {len(playstyles)} playstyles")
    by_playstyle = {
        key: _to_record(_search(catalog, style.weights))
        for key, style in playstyles.items()
    }
    print()

    # -- Step 3: Single stats ------------------------------------------------
    print(f"[3/4] Searching {len(STAT_NAMES)} stats")
    by_stat = {stat: _to_record(_search(catalog, stat)) for stat in STAT_NAMES}
    print()

    # -- Step 4: Save --------------------------------------------------------
    print("[4/4] Saving results")
    os.makedirs(RESULTS_DIR, exist_ok=True)
    output: dict[str, object] = {
        "metadata": {
            "source": source,
            "counts": {
                category: len(catalog.for_category(category))
                for category in CATEGORIES
            },
        },
        "playstyles": by_playstyle,
        "stats": by_stat,
    }
    with open(OUTPUT_PATH, "w", encoding="utf-8") as fh:
        json.dump(output, fh, indent=2)
    print(f"      Results saved to {OUTPUT_PATH}")

    for category in CATEGORIES:
        table = build_stat_table(list(catalog.for_category(category)))
        csv_path = os.path.join(RESULTS_DIR, f"{category.lower()}_stats.csv")
        table.to_csv(csv_path, index=False)
        print(f"      {category} table saved to {csv_path}")
    print()

    # -- Structured summary --------------------------------------------------
    print("=" * 60)
    print("PLAYSTYLE SUMMARY")
    print("=" * 60)
    for key, record in by_playstyle.items():
        name = playstyles[key].display_name
        if record is None:
            print(f"  {name:<24s}  no build found")
            continue
        parts = " / ".join(record["components"].values())
        print(f"  {name:<24s}  {record['score']:8.2f}  {parts}")
    print()
    print("=" * 60)
    print("STAT SUMMARY")
    print("=" * 60)
    for stat, record in by_stat.items():
        if record is None:
            print(f"  {stat:<20s}  no build found")
            continue
        parts = " / ".join(record["components"].values())
        print(f"  {stat:<20s}  {record['score']:6.2f}  {parts}")
    print()
    print("Search complete.")


if __name__ == "__main__":
    main()
