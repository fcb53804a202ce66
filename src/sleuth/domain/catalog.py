"""Static card catalog: the three categories and their cards."""

from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from sleuth import config
from sleuth.domain.enums import CATEGORIES, Category
from sleuth.domain.errors import CatalogError


class Catalog(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    suspects: List[str] = Field(min_length=1)
    weapons: List[str] = Field(min_length=1)
    rooms: List[str] = Field(min_length=1)

    @field_validator("suspects", "weapons", "rooms")
    @classmethod
    def _sorted_names(cls, value: List[str]) -> List[str]:
        names = [name.strip() for name in value]
        if any(not name for name in names):
            raise ValueError("card names must be non-empty")
        return sorted(names)

    @model_validator(mode="after")
    def _unique_cards(self) -> "Catalog":
        seen: set[str] = set()
        for card in self.suspects + self.weapons + self.rooms:
            if card in seen:
                raise ValueError(f"card listed twice: {card}")
            if card == config.SOLUTION:
                raise ValueError(f"card name is reserved: {card}")
            seen.add(card)
        return self

    @cached_property
    def all_cards(self) -> tuple[str, ...]:
        return tuple(self.suspects + self.weapons + self.rooms)

    @cached_property
    def card_to_category(self) -> dict[str, Category]:
        mapping: dict[str, Category] = {}
        for category in CATEGORIES:
            for card in self.cards_in(category):
                mapping[card] = category
        return mapping

    @cached_property
    def card_order(self) -> dict[str, int]:
        return {card: index for index, card in enumerate(self.all_cards)}

    def cards_in(self, category: Category) -> tuple[str, ...]:
        if category == Category.SUSPECT:
            return tuple(self.suspects)
        if category == Category.WEAPON:
            return tuple(self.weapons)
        return tuple(self.rooms)

    def contains(self, card: str) -> bool:
        return card in self.card_to_category

    def category_of(self, card: str) -> Category:
        try:
            return self.card_to_category[card]
        except KeyError:
            raise CatalogError(f"Unknown card: {card}") from None


def load_catalog(path: Path | None = None) -> Catalog:
    """Read a catalog from YAML with ``suspects``, ``weapons`` and ``rooms`` lists."""
    catalog_path = Path(path) if path is not None else config.CATALOG_PATH
    try:
        data = yaml.safe_load(catalog_path.read_text(encoding="utf-8")) or {}
    except OSError as exc:
        raise CatalogError(f"Cannot read catalog {catalog_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise CatalogError(f"Malformed catalog {catalog_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise CatalogError(f"Catalog {catalog_path} must be a mapping")
    try:
        return Catalog.model_validate(data)
    except ValidationError as exc:
        raise CatalogError(f"Invalid catalog {catalog_path}: {exc}") from exc


def default_catalog() -> Catalog:
    return load_catalog(config.CATALOG_PATH)
