"""Disprovals whose shown card this agent did not see."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from sleuth.deduction.grid import KnowledgeGrid
from sleuth.domain.enums import Certainty
from sleuth.domain.errors import ContradictionError

logger = logging.getLogger(__name__)


@dataclass
class Mystery:
    disprover: str
    candidates: set[str] = field(default_factory=set)

    def sorted_candidates(self) -> list[str]:
        return sorted(self.candidates)


class MysteryTracker:
    """Ordered set of open mysteries, pruned against a knowledge grid."""

    def __init__(self, grid: KnowledgeGrid, log: logging.Logger | logging.LoggerAdapter | None = None) -> None:
        self.grid = grid
        self.log = log or logger
        self._mysteries: list[Mystery] = []

    def __len__(self) -> int:
        return len(self._mysteries)

    def __iter__(self) -> Iterator[Mystery]:
        return iter(self._mysteries)

    def add(self, disprover: str, cards: Iterable[str]) -> Mystery | None:
        if disprover not in self.grid.locations:
            self.log.error("Ignoring a disproval by unknown player %r", disprover)
            return None
        candidates: set[str] = set()
        for card in cards:
            if not self.grid.catalog.contains(card):
                self.log.error("Ignoring unknown card %r in a disproval by %s", card, disprover)
                continue
            candidates.add(card)
        if not candidates:
            return None
        mystery = Mystery(disprover=disprover, candidates=candidates)
        self._mysteries.append(mystery)
        self.log.info("Noted that %s holds one of %s.", disprover, mystery.sorted_candidates())
        return mystery

    def prune_and_solve(self) -> bool:
        """Drop ruled-out candidates and commit mysteries narrowed to one card.

        Returns True when any mystery shrank or was solved. Raises
        ContradictionError if a mystery loses every candidate; that mystery is
        dropped first so later facts can still be recorded.
        """
        changed = False
        remaining: list[Mystery] = []
        for mystery in self._mysteries:
            pruned = {
                card
                for card in mystery.candidates
                if self.grid.get(card, mystery.disprover) != Certainty.NO
            }
            if not pruned:
                self._mysteries = [m for m in self._mysteries if m is not mystery]
                raise ContradictionError(
                    f"{mystery.disprover} cannot hold any of {mystery.sorted_candidates()}",
                    location=mystery.disprover,
                )
            if len(pruned) < len(mystery.candidates):
                self.log.debug(
                    "Pruning mystery: %s's options narrowed to %s", mystery.disprover, sorted(pruned)
                )
                mystery.candidates = pruned
                changed = True
            if len(pruned) == 1:
                card = next(iter(pruned))
                self.log.info("Solved a mystery: %s must have shown '%s'.", mystery.disprover, card)
                self.grid.mark(card, mystery.disprover)
                changed = True
            else:
                remaining.append(mystery)
        self._mysteries = remaining
        return changed

    def snapshot(self) -> list[Mystery]:
        return [Mystery(m.disprover, set(m.candidates)) for m in self._mysteries]
