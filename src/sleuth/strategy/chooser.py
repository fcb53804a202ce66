"""Pick-one-of-N policies used wherever several options are equally valid."""

from __future__ import annotations

from enum import StrEnum
from typing import Protocol, Sequence

from sleuth.util.rng import Rng


class Chooser(Protocol):
    def choose(self, cards: Sequence[str]) -> str | None: ...


class RandomChooser:
    """Uniform choice driven by the owning agent's seeded source."""

    def __init__(self, rng: Rng) -> None:
        self.rng = rng

    def choose(self, cards: Sequence[str]) -> str | None:
        if not cards:
            return None
        return self.rng.choice(list(cards))


class DeterministicChooser:
    """Always the alphabetically first card; used for reproducible runs."""

    def choose(self, cards: Sequence[str]) -> str | None:
        if not cards:
            return None
        return sorted(cards)[0]


class ChooserKind(StrEnum):
    RANDOM = "random"
    DETERMINISTIC = "deterministic"


def make_chooser(kind: ChooserKind, rng: Rng) -> Chooser:
    if kind == ChooserKind.DETERMINISTIC:
        return DeterministicChooser()
    return RandomChooser(rng)
