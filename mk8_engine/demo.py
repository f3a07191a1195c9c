"""Small offline catalog for demos and smoke runs.

Values are a representative subset of the in-game stat points; they are
not meant to be complete.
"""

from __future__ import annotations

from mk8_engine.core.component import Component, ComponentCatalog


def _c(name: str, **stats: float) -> Component:
    return Component(name=name, stats=stats)


def demo_catalog() -> ComponentCatalog:
    """Return a four-category catalog that needs no network access."""
    drivers = (
        _c("Mario", GroundSpeed=3.75, WaterSpeed=3.75, AirSpeed=3.75,
           AntiGravitySpeed=3.75, Acceleration=2.5, Weight=3.0,
           GroundHandling=3.0, MiniTurbo=2.5, OffRoadTraction=2.0,
           OnRoadTraction=2.5, Invincibility=2.5),
        _c("Baby Peach", GroundSpeed=2.25, WaterSpeed=2.25, AirSpeed=2.25,
           AntiGravitySpeed=2.25, Acceleration=4.0, Weight=1.25,
           GroundHandling=4.5, MiniTurbo=4.0, OffRoadTraction=3.5,
           OnRoadTraction=3.25, Invincibility=4.0),
        _c("Bowser", GroundSpeed=4.75, WaterSpeed=4.75, AirSpeed=4.75,
           AntiGravitySpeed=4.75, Acceleration=2.0, Weight=4.75,
           GroundHandling=2.25, MiniTurbo=2.0, OffRoadTraction=1.75,
           OnRoadTraction=1.75, Invincibility=1.25),
        _c("Yoshi", GroundSpeed=3.5, WaterSpeed=3.5, AirSpeed=3.5,
           AntiGravitySpeed=3.5, Acceleration=2.75, Weight=2.75,
           GroundHandling=3.25, MiniTurbo=2.75, OffRoadTraction=2.25,
           OnRoadTraction=2.5, Invincibility=3.0),
    )
    bodies = (
        _c("Standard Kart", GroundSpeed=0.5, Acceleration=0.5, Weight=0.5,
           GroundHandling=0.5, MiniTurbo=0.5, OffRoadTraction=0.5,
           OnRoadTraction=0.5, Invincibility=0.5),
        _c("Pipe Frame", GroundSpeed=0.25, Acceleration=1.0, Weight=0.25,
           GroundHandling=0.75, MiniTurbo=1.0, OffRoadTraction=0.75,
           OnRoadTraction=0.5, Invincibility=1.0),
        _c("Circuit Special", GroundSpeed=1.25, Acceleration=0.0, Weight=0.75,
           GroundHandling=0.0, MiniTurbo=0.0, OffRoadTraction=0.25,
           OnRoadTraction=0.75, Invincibility=0.0),
    )
    tires = (
        _c("Standard", GroundSpeed=0.5, Acceleration=0.5, Weight=0.5,
           GroundHandling=0.5, MiniTurbo=0.5, OffRoadTraction=0.75,
           OnRoadTraction=0.5, Invincibility=0.5),
        _c("Roller", GroundSpeed=0.0, Acceleration=1.5, Weight=0.0,
           GroundHandling=0.75, MiniTurbo=1.5, OffRoadTraction=1.25,
           OnRoadTraction=0.25, Invincibility=1.5),
        _c("Slick", GroundSpeed=0.75, Acceleration=0.0, Weight=0.5,
           GroundHandling=0.25, MiniTurbo=0.0, OffRoadTraction=0.0,
           OnRoadTraction=1.0, Invincibility=0.0),
    )
    gliders = (
        _c("Super Glider", GroundSpeed=0.25, Acceleration=0.25, Weight=0.25,
           GroundHandling=0.25, MiniTurbo=0.25, OffRoadTraction=0.25,
           Invincibility=0.25),
        _c("Cloud Glider", GroundSpeed=0.0, Acceleration=0.5, Weight=0.0,
           GroundHandling=0.25, MiniTurbo=0.5, OffRoadTraction=0.25,
           Invincibility=0.5),
    )
    return ComponentCatalog(
        drivers=drivers, bodies=bodies, tires=tires, gliders=gliders
    )


def demo_slip_modifiers() -> dict[str, dict[int, float]]:
    """Return slip class tables covering traction levels 0-20."""
    return {
        "LightSlip": {level: round(0.7 + 0.015 * level, 3) for level in range(21)},
        "MediumSlip": {level: round(0.5 + 0.02 * level, 3) for level in range(21)},
        "HeavySlip": {level: round(0.3 + 0.025 * level, 3) for level in range(21)},
    }
