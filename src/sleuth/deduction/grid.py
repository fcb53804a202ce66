"""Tri-state knowledge grid: where each card can, must or cannot be."""

from __future__ import annotations

import logging
from typing import Iterable

from sleuth import config
from sleuth.domain.catalog import Catalog
from sleuth.domain.enums import Category, Certainty
from sleuth.domain.errors import ContradictionError

logger = logging.getLogger(__name__)

Snapshot = dict[str, dict[str, Certainty]]


class KnowledgeGrid:
    """Belief matrix of card x location.

    Locations are the seated players plus the ``solution`` envelope. A card is
    ``YES`` in at most one location and a ``YES`` is never revoked; ``mark``
    is the only way certainty changes.
    """

    def __init__(
        self,
        catalog: Catalog,
        players: Iterable[str],
        log: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        self.catalog = catalog
        self.players: tuple[str, ...] = tuple(players)
        self.locations: tuple[str, ...] = self.players + (config.SOLUTION,)
        self.log = log or logger
        self._cells: Snapshot = {
            card: {location: Certainty.MAYBE for location in self.locations}
            for card in catalog.all_cards
        }

    def get(self, card: str, location: str) -> Certainty:
        return self._cells[card][location]

    def set(self, card: str, location: str, certainty: Certainty) -> None:
        """Write one cell directly; only for seeding fixtures and replays."""
        self._cells[card][location] = certainty

    def mark(self, card: str, location: str) -> bool:
        """Record that ``card`` is at ``location``. Returns True if anything changed."""
        if not self.catalog.contains(card):
            self.log.error("Consistency violation: mark() called with unknown card %r", card)
            return False
        if location not in self.locations:
            self.log.error("Consistency violation: mark() called with unknown location %r", location)
            return False
        row = self._cells[card]
        if row[location] == Certainty.YES:
            return False
        holder = self.holder_of(card)
        if holder is not None:
            raise ContradictionError(
                f"'{card}' is already known to be with {holder}, cannot move it to {location}",
                card=card,
                location=location,
            )
        self.log.debug("Learned that '%s' is with %s.", card, location)
        for other in self.locations:
            row[other] = Certainty.NO
        row[location] = Certainty.YES
        return True

    def holder_of(self, card: str) -> str | None:
        for location, certainty in self._cells[card].items():
            if certainty == Certainty.YES:
                return location
        return None

    def is_resolved(self, card: str) -> bool:
        return self.holder_of(card) is not None

    def maybe_locations(self, card: str) -> list[str]:
        return [loc for loc in self.locations if self._cells[card][loc] == Certainty.MAYBE]

    def solution_card(self, category: Category) -> str | None:
        for card in self.catalog.cards_in(category):
            if self._cells[card][config.SOLUTION] == Certainty.YES:
                return card
        return None

    def cards_at(self, location: str) -> list[str]:
        return [card for card in self.catalog.all_cards if self._cells[card][location] == Certainty.YES]

    def snapshot(self) -> Snapshot:
        return {card: dict(row) for card, row in self._cells.items()}
