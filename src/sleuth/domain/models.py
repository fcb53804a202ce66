"""Suggestion helpers shared by the engine and the game table."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping

from sleuth.domain.catalog import Catalog
from sleuth.domain.enums import CATEGORIES, Category

Suggestion = Dict[Category, str]


def suggestion_cards(suggestion: Mapping[Category, str]) -> list[str]:
    """Cards of a suggestion in suspect, weapon, room order."""
    return [suggestion[category] for category in CATEGORIES if category in suggestion]


def is_complete(suggestion: Mapping[Category, str], catalog: Catalog) -> bool:
    if set(suggestion) != set(CATEGORIES):
        return False
    return all(
        catalog.contains(card) and catalog.category_of(card) == category
        for category, card in suggestion.items()
    )


def suggestion_from_cards(cards: Iterable[str], catalog: Catalog) -> Suggestion:
    """Group loose card names by category; later cards win on a repeat."""
    suggestion: Suggestion = {}
    for card in cards:
        suggestion[catalog.category_of(card)] = card
    return suggestion
