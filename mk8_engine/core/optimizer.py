"""Exhaustive build search for the MK8 build optimizer.

Every Driver x Body x Tire x Glider combination is aggregated and scored.
The search is a plain brute force over the cross-product: category sizes
are in the tens, so a full pass is a few tens of thousands of builds.

Enumeration order is fixed (Driver outermost, Glider innermost) and only a
strictly greater score replaces the current best, so ties always go to the
build encountered first.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Union

from mk8_engine.core.component import CATEGORIES, Component

logger = logging.getLogger(__name__)

# Weighted sum over stats, or the name of a single stat to maximise.
Objective = Union[Mapping[str, float], str]


@dataclass(frozen=True)
class Combination:
    """A scored four-component build.

    Attributes:
        driver: Chosen driver.
        body: Chosen kart body.
        tire: Chosen tires.
        glider: Chosen glider.
        stats: Aggregated stats of the four components.
        score: Value of the objective for ``stats``.
    """

    driver: Component
    body: Component
    tire: Component
    glider: Component
    stats: Mapping[str, float]
    score: float

    @property
    def components(self) -> tuple[Component, Component, Component, Component]:
        return (self.driver, self.body, self.tire, self.glider)

    @property
    def names(self) -> dict[str, str]:
        """Component names keyed by category."""
        return {
            category: component.name
            for category, component in zip(CATEGORIES, self.components)
        }


def combine_stats(*components: Component) -> dict[str, float]:
    """Sum the stats of *components* key by key.

    Every key present on at least one component appears in the result;
    a component lacking that key contributes 0.
    """
    keys: dict[str, None] = {}
    for component in components:
        keys.update(dict.fromkeys(component.stats))

    totals: dict[str, float] = {}
    for key in keys:
        total: float = 0.0
        for component in components:
            total += component.stats.get(key, 0.0)
        totals[key] = total
    return totals


def score_stats(stats: Mapping[str, float], objective: Objective) -> float:
    """Score aggregated *stats* under *objective*.

    A string objective scores the raw value of that stat.  A mapping
    objective scores ``sum(stats[k] * w)`` over its own keys only; stats
    the build lacks contribute nothing.
    """
    if isinstance(objective, str):
        return stats.get(objective, 0.0)

    score: float = 0.0
    for stat, weight in objective.items():
        score += stats.get(stat, 0.0) * weight
    return score


def find_best_combination(
    drivers: Sequence[Component],
    bodies: Sequence[Component],
    tires: Sequence[Component],
    gliders: Sequence[Component],
    objective: Objective,
) -> Combination | None:
    """Return the highest-scoring build across all four categories.

    Args:
        drivers: Candidate drivers.
        bodies: Candidate kart bodies.
        tires: Candidate tires.
        gliders: Candidate gliders.
        objective: Stat weights for a weighted score, or a single stat
            name whose aggregated value is the score.

    Returns:
        The best :class:`Combination`, or ``None`` when any category is
        empty or no build scores above ``-inf``.
    """
    if not drivers or not bodies or not tires or not gliders:
        return None

    best: Combination | None = None
    best_score: float = float("-inf")
    evaluated: int = 0

    for driver, body, tire, glider in itertools.product(
        drivers, bodies, tires, gliders
    ):
        stats = combine_stats(driver, body, tire, glider)
        score = score_stats(stats, objective)
        evaluated += 1
        if score > best_score:
            best_score = score
            best = Combination(
                driver=driver,
                body=body,
                tire=tire,
                glider=glider,
                stats=stats,
                score=score,
            )

    logger.debug(
        "Evaluated %d combinations, best score %s", evaluated, best_score
    )
    return best
