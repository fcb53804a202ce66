"""Headless game table: seating, dealing and the turn loop for computer agents."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sleuth import config
from sleuth.agent.brain import DeductionAgent
from sleuth.config import AgentSettings
from sleuth.domain.catalog import Catalog
from sleuth.domain.enums import CATEGORIES
from sleuth.domain.errors import GameSetupError
from sleuth.domain.models import Suggestion
from sleuth.game.events import (
    Disproved,
    EventBus,
    GameOver,
    GameReady,
    NotDisproved,
    SuggestionMade,
    TurnResolved,
    TurnStarted,
)
from sleuth.strategy.chooser import ChooserKind, make_chooser
from sleuth.util.rng import Rng

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameResult:
    winner: str | None
    is_correct: bool
    turns: int


@dataclass
class Game:
    catalog: Catalog
    rng: Rng
    bus: EventBus = field(default_factory=EventBus)
    agents: list[DeductionAgent] = field(default_factory=list)
    solution: Suggestion = field(default_factory=dict)
    hands: dict[str, list[str]] = field(default_factory=dict)
    turn: int = 0

    def deal(self) -> None:
        """Pick the solution, then deal the rest round-robin in seat order."""
        deck = list(self.catalog.all_cards)
        self.rng.shuffle(deck)
        self.solution = {}
        to_deal: list[str] = []
        for card in reversed(deck):
            category = self.catalog.category_of(card)
            if category not in self.solution:
                self.solution[category] = card
            else:
                to_deal.append(card)
        to_deal.sort()
        self.hands = {agent.name: [] for agent in self.agents}
        for index, card in enumerate(to_deal):
            self.hands[self.agents[index % len(self.agents)].name].append(card)
        for agent in self.agents:
            agent.receive_hand(self.hands[agent.name])
            logger.debug("%s hand: %s", agent.name, self.hands[agent.name])
        logger.debug("Solution: %s", {c.value: card for c, card in self.solution.items()})

    def find_disprover(self, suggester: DeductionAgent, suggestion: Suggestion) -> tuple[str | None, str | None]:
        """Ask each player after the suggester, in seat order, to show a card."""
        seat = self.agents.index(suggester)
        for offset in range(1, len(self.agents)):
            candidate = self.agents[(seat + offset) % len(self.agents)]
            shown = candidate.choose_card_to_show(suggestion)
            if shown is not None:
                return candidate.name, shown
        return None, None

    def check_accusation(self, accusation: Suggestion) -> bool:
        return all(self.solution.get(category) == accusation.get(category) for category in CATEGORIES)

    def play_turn(self) -> GameResult | None:
        current = self.agents[self.turn % len(self.agents)]
        self.bus.publish(TurnStarted(turn_number=self.turn + 1, player=current.name))

        accusation = current.should_accuse()
        if accusation is not None:
            is_correct = self.check_accusation(accusation)
            self.bus.publish(
                GameOver(
                    solution=self.solution,
                    winner=current.name,
                    accusation=accusation,
                    is_correct=is_correct,
                )
            )
            return GameResult(winner=current.name, is_correct=is_correct, turns=self.turn)

        suggestion = current.make_suggestion()
        self.bus.publish(SuggestionMade(player=current.name, suggestion=suggestion))
        disprover, revealed = self.find_disprover(current, suggestion)
        if disprover is not None:
            self.bus.publish(Disproved(suggester=current.name, disprover=disprover))
        else:
            self.bus.publish(NotDisproved(suggester=current.name))

        # Only the suggester sees which card was shown.
        for agent in self.agents:
            agent.handle_event(
                TurnResolved(
                    suggester=current.name,
                    suggestion=suggestion,
                    disprover=disprover,
                    revealed_card=revealed if agent is current else None,
                )
            )
        self.turn += 1
        return None

    def run(self, turn_limit: int = config.TURN_LIMIT) -> GameResult:
        while self.turn < turn_limit:
            result = self.play_turn()
            if result is not None:
                return result
        self.bus.publish(GameOver(solution=self.solution))
        return GameResult(winner=None, is_correct=False, turns=self.turn)


class GameBuilder:
    """Step-by-step construction of a seeded, dealt game."""

    def __init__(self, catalog: Catalog, rng: Rng) -> None:
        self.catalog = catalog
        self.rng = rng
        self.bus = EventBus()
        self.num_agents = 0
        self.settings = AgentSettings()
        self.chooser_kind = ChooserKind.RANDOM

    def with_agents(self, count: int) -> "GameBuilder":
        self.num_agents = count
        return self

    def with_settings(self, settings: AgentSettings) -> "GameBuilder":
        self.settings = settings
        return self

    def with_chooser(self, kind: ChooserKind) -> "GameBuilder":
        self.chooser_kind = kind
        return self

    def build(self) -> Game:
        suspects = list(self.catalog.suspects)
        if not config.MIN_PLAYERS <= self.num_agents <= len(suspects):
            raise GameSetupError(
                f"Need between {config.MIN_PLAYERS} and {len(suspects)} players, got {self.num_agents}"
            )
        names = suspects[: self.num_agents]
        self.rng.shuffle(names)

        game = Game(catalog=self.catalog, rng=self.rng, bus=self.bus)
        for name in names:
            agent_rng = self.rng.fork(f"agent:{name}")
            agent = DeductionAgent(
                agent_rng,
                chooser=make_chooser(self.chooser_kind, agent_rng),
                settings=self.settings,
            )
            agent.setup(self.catalog, list(names), name)
            game.agents.append(agent)
            self.bus.subscribe(agent)

        game.deal()
        self.bus.publish(GameReady(players=list(names)))
        return game
