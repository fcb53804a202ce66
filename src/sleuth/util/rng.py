"""Seeded random source owned by a single agent or game."""

from __future__ import annotations

from dataclasses import dataclass
import hashlib
import random
from typing import Sequence, TypeVar

T = TypeVar("T")


@dataclass
class Rng:
    seed: int

    def __post_init__(self) -> None:
        self._random = random.Random(self.seed)

    def fork(self, salt: str) -> "Rng":
        """Derive an independent stream, e.g. one per seated agent."""
        digest = hashlib.sha256(f"{self.seed}:{salt}".encode("utf-8")).hexdigest()
        return Rng(int(digest[:16], 16))

    def choice(self, seq: Sequence[T]) -> T:
        return self._random.choice(seq)

    def shuffle(self, seq: list[T]) -> None:
        self._random.shuffle(seq)

    def shuffled(self, seq: Sequence[T]) -> list[T]:
        items = list(seq)
        self._random.shuffle(items)
        return items
