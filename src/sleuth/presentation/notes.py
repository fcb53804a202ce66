"""Plain-text rendering of an agent's detective notes."""

from __future__ import annotations

from typing import Mapping

from sleuth import config
from sleuth.agent.brain import DeductionAgent
from sleuth.domain.enums import CATEGORIES, Category, Certainty
from sleuth.domain.models import suggestion_cards

SYMBOLS = {
    Certainty.YES: "✔",
    Certainty.NO: "✖",
    Certainty.MAYBE: "?",
}


def format_suggestion(suggestion: Mapping[Category, str]) -> str:
    return ", ".join(suggestion_cards(suggestion))


def render_notes(agent: DeductionAgent) -> str:
    knowledge = agent.knowledge()
    columns = list(agent.players) + [config.SOLUTION]
    card_width = max(len(card) for card in agent.catalog.all_cards)
    widths = [max(len(column), 1) for column in columns]

    def row(cells: list[str], first: str, kind: str) -> str:
        padded = [cell.center(width) for cell, width in zip(cells, widths)]
        return f"{first.ljust(card_width)}  {kind.ljust(7)}  " + " | ".join(padded)

    lines: list[str] = [f"{agent.name}'s detective notes"]
    header = row([column.title() if column == config.SOLUTION else column for column in columns], "Card", "Type")
    lines.append(header)
    lines.append("-" * len(header))
    for index, category in enumerate(CATEGORIES):
        if index:
            lines.append("")
        for card in agent.catalog.cards_in(category):
            marks = [SYMBOLS[knowledge[card][column]] for column in columns]
            lines.append(row(marks, card, category.value))
    return "\n".join(lines)


def format_mysteries(agent: DeductionAgent) -> list[str]:
    return [
        f"{mystery.disprover} holds one of: {', '.join(mystery.sorted_candidates())}"
        for mystery in agent.open_mysteries()
    ]
