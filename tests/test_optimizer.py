"""Tests for the exhaustive build search: aggregation, scoring, tie-breaks."""

import itertools

from mk8_engine.core.component import Component
from mk8_engine.core.optimizer import (
    Combination,
    combine_stats,
    find_best_combination,
    score_stats,
)

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _sample_categories() -> tuple[list[Component], ...]:
    drivers = [
        Component("Mario", {"GroundSpeed": 3.75, "Acceleration": 2.5, "Weight": 3.0}),
        Component("Toad", {"GroundSpeed": 2.75, "Acceleration": 3.75, "Weight": 1.75}),
        Component("Bowser", {"GroundSpeed": 4.75, "Acceleration": 2.0, "Weight": 4.75}),
    ]
    bodies = [
        Component("Standard Kart", {"GroundSpeed": 0.5, "Acceleration": 0.5}),
        Component("Pipe Frame", {"Acceleration": 1.0, "MiniTurbo": 1.0}),
    ]
    tires = [
        Component("Standard", {"GroundSpeed": 0.5, "OffRoadTraction": 0.75}),
        Component("Roller", {"Acceleration": 1.5, "MiniTurbo": 1.5}),
        Component("Slick", {"GroundSpeed": 0.75, "Weight": 0.5}),
    ]
    gliders = [
        Component("Super Glider", {"GroundSpeed": 0.25, "Acceleration": 0.25}),
        Component("Cloud Glider", {"Acceleration": 0.5, "MiniTurbo": 0.5}),
    ]
    return drivers, bodies, tires, gliders


def _single(name: str, **stats: float) -> list[Component]:
    return [Component(name, stats)]


# ---------------------------------------------------------------------------
# Aggregation and scoring
# ---------------------------------------------------------------------------


def test_combine_stats_sums_every_key() -> None:
    """Aggregated stats must be the per-key sum, missing keys counting 0."""
    a = Component("A", {"GroundSpeed": 1.0, "Weight": 2.0})
    b = Component("B", {"GroundSpeed": 0.5})
    c = Component("C", {})
    d = Component("D", {"MiniTurbo": 1.25, "Weight": 0.25})
    totals = combine_stats(a, b, c, d)
    assert totals == {"GroundSpeed": 1.5, "Weight": 2.25, "MiniTurbo": 1.25}


def test_combine_stats_no_components() -> None:
    """Aggregating nothing yields an empty mapping."""
    assert combine_stats() == {}


def test_score_single_stat_missing_is_zero() -> None:
    """A single-stat objective on an absent stat must score 0."""
    assert score_stats({"GroundSpeed": 4.0}, "Weight") == 0.0
    assert score_stats({"GroundSpeed": 4.0}, "GroundSpeed") == 4.0


def test_score_weighted_uses_only_weighted_keys() -> None:
    """Weighted scores must ignore stats not in the weights."""
    stats = {"GroundSpeed": 2.0, "Weight": 3.0, "MiniTurbo": 100.0}
    weights = {"GroundSpeed": 1.5, "Weight": 2.0, "AirSpeed": 4.0}
    assert score_stats(stats, weights) == 2.0 * 1.5 + 3.0 * 2.0


# ---------------------------------------------------------------------------
# Search scenarios
# ---------------------------------------------------------------------------


def test_single_stat_scenario() -> None:
    """X+Y+Z+W with speeds 5, 3, -, 1 maximises speed at 9."""
    best = find_best_combination(
        _single("X", speed=5),
        _single("Y", speed=3),
        _single("Z"),
        _single("W", speed=1),
        "speed",
    )
    assert isinstance(best, Combination)
    assert best.names == {"Driver": "X", "Body": "Y", "Tire": "Z", "Glider": "W"}
    assert best.stats["speed"] == 9
    assert best.score == 9


def test_weighted_scenario() -> None:
    """The same build under weight 2 on speed scores 18."""
    best = find_best_combination(
        _single("X", speed=5),
        _single("Y", speed=3),
        _single("Z"),
        _single("W", speed=1),
        {"speed": 2},
    )
    assert best is not None
    assert best.score == 18


def test_empty_category_returns_none() -> None:
    """Any empty category must yield None rather than raise."""
    drivers, bodies, tires, gliders = _sample_categories()
    assert find_best_combination([], bodies, tires, gliders, "Weight") is None
    assert find_best_combination(drivers, [], tires, gliders, "Weight") is None
    assert find_best_combination(drivers, bodies, [], gliders, "Weight") is None
    assert find_best_combination(drivers, bodies, tires, [], {"Weight": 1}) is None


def test_tie_goes_to_first_driver() -> None:
    """Equal scores must resolve to the earliest build in enumeration order."""
    drivers = [Component("First", {"speed": 2}), Component("Second", {"speed": 2})]
    best = find_best_combination(
        drivers, _single("B"), _single("T"), _single("G"), "speed"
    )
    assert best is not None
    assert best.driver.name == "First"


def test_tie_break_follows_nested_order() -> None:
    """Driver order outranks glider order when scores tie."""
    drivers = [Component("D0", {"s": 1}), Component("D1", {"s": 1})]
    bodies = [Component("B0", {}), Component("B1", {})]
    gliders = [Component("G0", {"s": 0}), Component("G1", {"s": 1})]
    best = find_best_combination(drivers, bodies, _single("T"), gliders, "s")
    # Four builds reach 2; (D0, B0, G1) is enumerated first.
    assert best is not None
    assert (best.driver.name, best.body.name, best.glider.name) == ("D0", "B0", "G1")


def test_best_dominates_every_combination() -> None:
    """The returned score must be >= the score of every build."""
    drivers, bodies, tires, gliders = _sample_categories()
    weights = {"GroundSpeed": 3, "Acceleration": 1.5, "MiniTurbo": 0.5}
    best = find_best_combination(drivers, bodies, tires, gliders, weights)
    assert best is not None
    for combo in itertools.product(drivers, bodies, tires, gliders):
        assert best.score >= score_stats(combine_stats(*combo), weights)


def test_best_single_stat_dominates_every_combination() -> None:
    """Exhaustive check for every stat used by the fixture."""
    drivers, bodies, tires, gliders = _sample_categories()
    for stat in ("GroundSpeed", "Acceleration", "Weight", "MiniTurbo", "AirSpeed"):
        best = find_best_combination(drivers, bodies, tires, gliders, stat)
        assert best is not None
        for combo in itertools.product(drivers, bodies, tires, gliders):
            assert best.score >= combine_stats(*combo).get(stat, 0.0)


def test_absent_stat_everywhere_returns_first_build() -> None:
    """If nobody has the stat every build scores 0 and the first one wins."""
    drivers, bodies, tires, gliders = _sample_categories()
    best = find_best_combination(drivers, bodies, tires, gliders, "AirSpeed")
    assert best is not None
    assert best.score == 0.0
    assert best.components == (drivers[0], bodies[0], tires[0], gliders[0])


def test_result_stats_match_components() -> None:
    """Stats on the result must equal the aggregate of its four components."""
    drivers, bodies, tires, gliders = _sample_categories()
    best = find_best_combination(drivers, bodies, tires, gliders, "Acceleration")
    assert best is not None
    assert dict(best.stats) == combine_stats(*best.components)


def test_search_is_deterministic() -> None:
    """Repeated searches over the same input must return identical results."""
    drivers, bodies, tires, gliders = _sample_categories()
    weights = {"Weight": 3, "GroundSpeed": 1, "Invincibility": 1.5}
    r1 = find_best_combination(drivers, bodies, tires, gliders, weights)
    r2 = find_best_combination(drivers, bodies, tires, gliders, weights)
    assert r1 == r2


def test_all_scores_negative_infinity_returns_none() -> None:
    """A search where nothing beats -inf must return None without raising."""
    best = find_best_combination(
        _single("D", s=float("-inf")),
        _single("B"),
        _single("T"),
        _single("G"),
        "s",
    )
    assert best is None


def test_negative_scores_still_found() -> None:
    """A best build must be found even when every score is negative."""
    drivers = [Component("A", {"s": -3.0}), Component("B", {"s": -1.0})]
    best = find_best_combination(
        drivers, _single("B"), _single("T"), _single("G"), "s"
    )
    assert best is not None
    assert best.driver.name == "B"
    assert best.score == -1.0


def test_input_not_modified() -> None:
    """The search must not mutate component stats."""
    drivers, bodies, tires, gliders = _sample_categories()
    before = [dict(c.stats) for c in drivers]
    find_best_combination(drivers, bodies, tires, gliders, {"GroundSpeed": 1})
    assert [dict(c.stats) for c in drivers] == before
