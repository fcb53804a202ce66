"""Defaults shared by the engine, the simulator and the scripts."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

SEED = 1337
TURN_LIMIT = 50
MIN_PLAYERS = 2

SOLUTION = "solution"
DIRECT_REVEAL = "Game Event"

DEDUCTION_PASS_LIMIT = 10
RECENT_TARGET_CAPACITY = 3

CATALOG_PATH = Path(__file__).resolve().parent / "data" / "catalog.yml"


@dataclass(frozen=True)
class AgentSettings:
    pass_limit: int = DEDUCTION_PASS_LIMIT
    recent_target_capacity: int = RECENT_TARGET_CAPACITY

    def __post_init__(self) -> None:
        if self.pass_limit < 1:
            raise ValueError("pass_limit must be >= 1")
        if self.recent_target_capacity < 1:
            raise ValueError("recent_target_capacity must be >= 1")
