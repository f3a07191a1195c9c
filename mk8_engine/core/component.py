"""Component model for the MK8 build optimizer.

A kart build is made of one component from each of the four categories.
Every component carries a name and a mapping of stat name to value; stats
absent from a component count as zero when builds are aggregated.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

CATEGORIES: tuple[str, ...] = ("Driver", "Body", "Tire", "Glider")

STAT_NAMES: tuple[str, ...] = (
    "GroundSpeed",
    "WaterSpeed",
    "AirSpeed",
    "AntiGravitySpeed",
    "Acceleration",
    "Weight",
    "GroundHandling",
    "WaterHandling",
    "AirHandling",
    "AntiGravityHandling",
    "OnRoadTraction",
    "OffRoadTraction",
    "MiniTurbo",
    "Invincibility",
)

# Full-width value for stat bars.
STAT_BAR_MAX: float = 20.0


@dataclass(frozen=True)
class Component:
    """Immutable description of a single build component.

    Attributes:
        name: Display name.  Not required to be unique within a category.
        stats: Stat name to numeric value.  Unknown stat names are allowed.
            Copied into a read-only mapping on construction.
    """

    name: str
    stats: Mapping[str, float] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        """Validate stat values."""
        for stat, value in self.stats.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(
                    f"Component '{self.name}': stat '{stat}' must be numeric, "
                    f"got {type(value).__name__}"
                )
            if math.isnan(value):
                raise ValueError(f"Component '{self.name}': stat '{stat}' is NaN.")
        object.__setattr__(self, "stats", MappingProxyType(dict(self.stats)))

    def stat(self, name: str) -> float:
        """Return the value of *name*, or 0.0 if the component lacks it."""
        return self.stats.get(name, 0.0)


@dataclass(frozen=True)
class ComponentCatalog:
    """Fully loaded components for all four categories.

    Owned by the caller; the search functions never hold on to it.
    """

    drivers: tuple[Component, ...] = ()
    bodies: tuple[Component, ...] = ()
    tires: tuple[Component, ...] = ()
    gliders: tuple[Component, ...] = ()

    def for_category(self, category: str) -> tuple[Component, ...]:
        """Return the components of *category* (one of ``CATEGORIES``)."""
        try:
            index = CATEGORIES.index(category)
        except ValueError:
            raise ValueError(
                f"Unknown category '{category}', expected one of {CATEGORIES}"
            ) from None
        return (self.drivers, self.bodies, self.tires, self.gliders)[index]

    def is_complete(self) -> bool:
        """True when every category has at least one component."""
        return all((self.drivers, self.bodies, self.tires, self.gliders))


def stat_bar_percentages(
    stats: Mapping[str, float],
    names: tuple[str, ...] = STAT_NAMES,
) -> dict[str, float]:
    """Map each stat in *names* to a bar width percentage.

    Missing stats render as 0.  Widths are capped at 100 once a value
    reaches ``STAT_BAR_MAX``.
    """
    return {
        name: min(stats.get(name, 0.0) / STAT_BAR_MAX * 100.0, 100.0)
        for name in names
    }
