"""Playstyle presets for the weighted build search."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Playstyle:
    """Named set of stat weights used as a weighted objective.

    Attributes:
        key: Stable identifier (e.g. ``"speedDemon"``).
        display_name: Human-readable label.
        description: Short explanation shown alongside the recommendation.
        weights: Stat name to weight (> 0).  Only these stats are scored.
    """

    key: str
    display_name: str
    description: str = ""
    weights: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate playstyle parameters."""
        if not self.key:
            raise ValueError("Playstyle key must not be empty.")
        if not self.display_name:
            raise ValueError(f"Playstyle '{self.key}': display_name must not be empty.")
        if not self.weights:
            raise ValueError(f"Playstyle '{self.key}': weights must not be empty.")
        for stat, weight in self.weights.items():
            if isinstance(weight, bool) or not isinstance(weight, (int, float)):
                raise ValueError(
                    f"Playstyle '{self.key}': weight for '{stat}' must be "
                    f"numeric, got {type(weight).__name__}"
                )
            if weight <= 0.0:
                raise ValueError(
                    f"Playstyle '{self.key}': weight for '{stat}' must be > 0, "
                    f"got {weight}"
                )
