"""Choosers and suggestion strategies."""

from sleuth.strategy.chooser import (
    Chooser,
    ChooserKind,
    DeterministicChooser,
    RandomChooser,
    make_chooser,
)
from sleuth.strategy.suggestions import (
    STRATEGIES,
    ExploitStrategy,
    ExploreStrategy,
    RecentTargets,
    StrategyKind,
    SurgicalStrikeStrategy,
)

__all__ = [
    "Chooser",
    "ChooserKind",
    "DeterministicChooser",
    "ExploitStrategy",
    "ExploreStrategy",
    "make_chooser",
    "RandomChooser",
    "RecentTargets",
    "STRATEGIES",
    "StrategyKind",
    "SurgicalStrikeStrategy",
]
