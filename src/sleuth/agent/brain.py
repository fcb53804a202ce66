"""Deduction agent: the decision surface a turn loop or co-pilot talks to."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from sleuth import config
from sleuth.config import AgentSettings
from sleuth.deduction.grid import KnowledgeGrid, Snapshot
from sleuth.deduction.inference import run_deduction_loop
from sleuth.deduction.mysteries import Mystery, MysteryTracker
from sleuth.domain.catalog import Catalog
from sleuth.domain.enums import CATEGORIES, Category
from sleuth.domain.errors import GameSetupError
from sleuth.domain.models import Suggestion, suggestion_cards
from sleuth.game.events import TurnResolved
from sleuth.strategy.chooser import Chooser, RandomChooser
from sleuth.strategy.suggestions import STRATEGIES, RecentTargets, StrategyKind
from sleuth.util.rng import Rng

logger = logging.getLogger(__name__)


class _PlayerLogAdapter(logging.LoggerAdapter):
    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        return f"[{self.extra['player']}] {msg}", kwargs


class DeductionAgent:
    """Computer player that keeps exact notes and plays from them.

    The agent owns its knowledge grid, open mysteries, recent strike targets
    and hand. Every incoming fact is recorded through the grid and followed by
    a full deduction pass, so decisions always see the closed set of
    inferences.
    """

    def __init__(
        self,
        rng: Rng,
        chooser: Chooser | None = None,
        settings: AgentSettings | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self.rng = rng
        self.chooser: Chooser = chooser or RandomChooser(rng)
        self.settings = settings or AgentSettings()
        self._base_log = log or logger
        self.log: logging.Logger | logging.LoggerAdapter = self._base_log
        self.name = ""
        self.last_strategy: StrategyKind | None = None
        self._catalog: Catalog | None = None
        self._players: tuple[str, ...] = ()
        self._hand: set[str] = set()
        self.grid: KnowledgeGrid | None = None
        self.mysteries: MysteryTracker | None = None
        self.recent_targets = RecentTargets(self.settings.recent_target_capacity)

    def setup(self, catalog: Catalog, player_names: Iterable[str], my_name: str) -> None:
        players = tuple(player_names)
        if len(set(players)) != len(players):
            raise GameSetupError(f"Player names must be unique: {list(players)}")
        if config.SOLUTION in players:
            raise GameSetupError(f"'{config.SOLUTION}' is reserved and cannot be a player name")
        if my_name not in players:
            raise GameSetupError(f"{my_name} is not one of the players {list(players)}")
        self.name = my_name
        self.log = _PlayerLogAdapter(self._base_log, {"player": my_name})
        self._catalog = catalog
        self._players = players
        self._hand = set()
        self.grid = KnowledgeGrid(catalog, players, log=self.log)
        self.mysteries = MysteryTracker(self.grid, log=self.log)
        self.recent_targets = RecentTargets(self.settings.recent_target_capacity)
        self.last_strategy = None
        self.log.debug("Deduction engine initialized for %d players.", len(players))

    # --- read-only views ---

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def players(self) -> tuple[str, ...]:
        return self._players

    @property
    def hand(self) -> frozenset[str]:
        return frozenset(self._hand)

    def knowledge(self) -> Snapshot:
        return self.grid.snapshot()

    def open_mysteries(self) -> list[Mystery]:
        return self.mysteries.snapshot()

    # --- intake ---

    def receive_hand(self, cards: Iterable[str]) -> None:
        for card in cards:
            if not self.catalog.contains(card):
                self.log.error("Ignoring unknown card %r dealt to me.", card)
                continue
            if self.grid.mark(card, self.name) or self.grid.holder_of(card) == self.name:
                self._hand.add(card)
        self._deduce()

    def handle_event(self, event: object) -> None:
        if isinstance(event, TurnResolved):
            self.process_turn(event)

    def process_turn(self, event: TurnResolved) -> None:
        if event.is_direct_reveal:
            if event.disprover and event.revealed_card:
                self.grid.mark(event.revealed_card, event.disprover)
        elif event.suggester == self.name:
            if event.disprover and event.revealed_card:
                self.grid.mark(event.revealed_card, event.disprover)
            elif not event.disprover:
                self.log.info("My suggestion was not disproved! Making powerful deductions.")
                for card in suggestion_cards(event.suggestion):
                    if card not in self._hand:
                        self.grid.mark(card, config.SOLUTION)
        elif event.disprover and event.disprover != self.name:
            self.mysteries.add(event.disprover, suggestion_cards(event.suggestion))
        self._deduce()

    def _deduce(self) -> int:
        return run_deduction_loop(self.grid, self.mysteries, self.settings.pass_limit)

    # --- decisions ---

    def make_suggestion(self) -> Suggestion:
        self.log.debug("Formulating a suggestion...")
        for strategy in STRATEGIES:
            suggestion = strategy.build(self)
            if suggestion is not None:
                self.last_strategy = strategy.kind
                return suggestion
        raise AssertionError("Explore always builds a suggestion")

    def should_accuse(self) -> Suggestion | None:
        solution: Suggestion = {}
        for category in CATEGORIES:
            card = self.grid.solution_card(category)
            if card is None:
                return None
            solution[category] = card
        self.log.debug("Solution fully known, ready to accuse.")
        return solution

    def choose_card_to_show(self, suggestion: Mapping[Category, str]) -> str | None:
        can_show = [card for card in suggestion_cards(suggestion) if card in self._hand]
        return self.chooser.choose(can_show)
