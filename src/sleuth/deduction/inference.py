"""Elimination rules and the fixed-point loop that drives them."""

from __future__ import annotations

from sleuth import config
from sleuth.deduction.grid import KnowledgeGrid
from sleuth.deduction.mysteries import MysteryTracker
from sleuth.domain.enums import CATEGORIES, Certainty


def deduce_solution_by_elimination(grid: KnowledgeGrid) -> bool:
    """A category with one card left that could be the solution must be it."""
    changed = False
    for category in CATEGORIES:
        if grid.solution_card(category) is not None:
            continue
        maybes = [
            card
            for card in grid.catalog.cards_in(category)
            if grid.get(card, config.SOLUTION) == Certainty.MAYBE
        ]
        if len(maybes) == 1 and grid.mark(maybes[0], config.SOLUTION):
            changed = True
    return changed


def deduce_locations_by_elimination(grid: KnowledgeGrid) -> bool:
    """A card with a single location still open must be there."""
    changed = False
    for card in grid.catalog.all_cards:
        if grid.is_resolved(card):
            continue
        maybes = grid.maybe_locations(card)
        if len(maybes) == 1 and grid.mark(card, maybes[0]):
            changed = True
    return changed


def run_deduction_loop(
    grid: KnowledgeGrid,
    mysteries: MysteryTracker,
    pass_limit: int = config.DEDUCTION_PASS_LIMIT,
) -> int:
    """Apply every rule until a pass changes nothing. Returns the passes run."""
    passes = 0
    while passes < pass_limit:
        passes += 1
        changed = mysteries.prune_and_solve()
        changed = deduce_solution_by_elimination(grid) or changed
        changed = deduce_locations_by_elimination(grid) or changed
        if not changed:
            break
    return passes
