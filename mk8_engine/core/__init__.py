"""Core build search modules for the MK8 build optimizer."""

from mk8_engine.core.component import (
    CATEGORIES,
    STAT_BAR_MAX,
    STAT_NAMES,
    Component,
    ComponentCatalog,
    stat_bar_percentages,
)
from mk8_engine.core.grip import (
    SLIP_CLASSES,
    adjusted_grip,
    grip_on_slippery_terrain,
    round_half_up,
    slip_class_label,
)
from mk8_engine.core.optimizer import (
    Combination,
    Objective,
    combine_stats,
    find_best_combination,
    score_stats,
)
from mk8_engine.core.playstyle import Playstyle

__all__ = [
    "CATEGORIES",
    "Combination",
    "Component",
    "ComponentCatalog",
    "Objective",
    "Playstyle",
    "SLIP_CLASSES",
    "STAT_BAR_MAX",
    "STAT_NAMES",
    "adjusted_grip",
    "combine_stats",
    "find_best_combination",
    "grip_on_slippery_terrain",
    "round_half_up",
    "score_stats",
    "slip_class_label",
    "stat_bar_percentages",
]
