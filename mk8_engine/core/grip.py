"""Grip on slippery terrain.

Tracks with slippery off-road sections belong to one of three slip
classes.  Each class defines a modifier per integer traction level; a
build's grip is its OffRoadTraction scaled by the modifier for its
rounded traction level.
"""

from __future__ import annotations

import math
from collections.abc import Mapping

SLIP_CLASSES: tuple[str, ...] = ("LightSlip", "MediumSlip", "HeavySlip")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (7.5 -> 8, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def adjusted_grip(
    off_road_traction: float,
    modifiers: Mapping[int, float],
) -> float | None:
    """Scale *off_road_traction* by the modifier for its rounded level.

    Args:
        off_road_traction: Aggregated OffRoadTraction of a build.
        modifiers: Slip class table of traction level to multiplier.

    Returns:
        ``off_road_traction * modifier``, or ``None`` when the rounded
        level has no entry in *modifiers* or the traction is not finite.
    """
    if not math.isfinite(off_road_traction):
        return None
    modifier = modifiers.get(round_half_up(off_road_traction))
    if modifier is None:
        return None
    return off_road_traction * modifier


def grip_on_slippery_terrain(
    stats: Mapping[str, float],
    modifiers: Mapping[int, float],
) -> float | None:
    """Apply :func:`adjusted_grip` to the OffRoadTraction in *stats*."""
    return adjusted_grip(stats.get("OffRoadTraction", 0.0), modifiers)


def slip_class_label(slip_class: str) -> str:
    """Short label for a slip class, e.g. ``"MediumSlip"`` -> ``"Medium"``."""
    return slip_class.replace("Slip", "")
