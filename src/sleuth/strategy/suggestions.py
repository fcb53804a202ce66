"""Suggestion strategies, tried in priority order by the agent."""

from __future__ import annotations

from collections import Counter, deque
from enum import StrEnum
from typing import TYPE_CHECKING, Iterable

from sleuth import config
from sleuth.deduction.mysteries import Mystery
from sleuth.domain.catalog import Catalog
from sleuth.domain.enums import CATEGORIES, Category, Certainty
from sleuth.domain.models import Suggestion

if TYPE_CHECKING:
    from sleuth.agent.brain import DeductionAgent


class StrategyKind(StrEnum):
    EXPLOIT = "exploit"
    SURGICAL_STRIKE = "surgical_strike"
    EXPLORE = "explore"


class RecentTargets:
    """Bounded FIFO of recent surgical-strike targets."""

    def __init__(self, capacity: int = config.RECENT_TARGET_CAPACITY) -> None:
        self._targets: deque[str] = deque(maxlen=capacity)

    def push(self, card: str) -> None:
        self._targets.append(card)

    def __contains__(self, card: object) -> bool:
        return card in self._targets

    def __len__(self) -> int:
        return len(self._targets)

    def as_list(self) -> list[str]:
        return list(self._targets)


def rank_targets(mysteries: Iterable[Mystery], catalog: Catalog) -> list[str]:
    """Candidate cards by how many mysteries list them, ties in catalog order."""
    frequency: Counter[str] = Counter()
    for mystery in mysteries:
        frequency.update(mystery.candidates)
    return sorted(frequency, key=lambda card: (-frequency[card], catalog.card_order[card]))


def pick_unknown_card(agent: DeductionAgent, category: Category) -> str:
    cards = agent.catalog.cards_in(category)
    open_cards = [
        card
        for card in cards
        if card not in agent.hand and agent.grid.get(card, config.SOLUTION) == Certainty.MAYBE
    ]
    if open_cards:
        return agent.chooser.choose(open_cards)
    not_mine = [card for card in cards if card not in agent.hand]
    if not_mine:
        return agent.chooser.choose(not_mine)
    return agent.chooser.choose(cards)


def build_around_target(agent: DeductionAgent, target: str) -> Suggestion:
    suggestion: Suggestion = {agent.catalog.category_of(target): target}
    for card in agent.rng.shuffled(sorted(agent.hand)):
        if len(suggestion) == len(CATEGORIES):
            break
        suggestion.setdefault(agent.catalog.category_of(card), card)
    for category in CATEGORIES:
        if category not in suggestion:
            suggestion[category] = pick_unknown_card(agent, category)
    return suggestion


class ExploitStrategy:
    """Re-assert proven solution cards while probing the open categories."""

    kind = StrategyKind.EXPLOIT

    def build(self, agent: DeductionAgent) -> Suggestion | None:
        known = {
            category: card
            for category in CATEGORIES
            if (card := agent.grid.solution_card(category)) is not None
        }
        if not 0 < len(known) < len(CATEGORIES):
            return None
        agent.log.info("Strategy: EXPLOIT. I know %d/%d of the solution.", len(known), len(CATEGORIES))
        return {
            category: known[category] if category in known else pick_unknown_card(agent, category)
            for category in CATEGORIES
        }


class SurgicalStrikeStrategy:
    """Target the card that appears in the most open mysteries."""

    kind = StrategyKind.SURGICAL_STRIKE

    def build(self, agent: DeductionAgent) -> Suggestion | None:
        ranked = rank_targets(agent.mysteries, agent.catalog)
        if not ranked:
            return None
        fresh = [card for card in ranked if card not in agent.recent_targets]
        target = (fresh or ranked)[0]
        agent.log.info("Strategy: SURGICAL STRIKE. Targeting '%s'.", target)
        agent.recent_targets.push(target)
        return build_around_target(agent, target)


class ExploreStrategy:
    """Fallback: one open card per category."""

    kind = StrategyKind.EXPLORE

    def build(self, agent: DeductionAgent) -> Suggestion:
        agent.log.info("Strategy: EXPLORE. Gathering new information.")
        return {category: pick_unknown_card(agent, category) for category in CATEGORIES}


STRATEGIES: tuple[ExploitStrategy | SurgicalStrikeStrategy | ExploreStrategy, ...] = (
    ExploitStrategy(),
    SurgicalStrikeStrategy(),
    ExploreStrategy(),
)
