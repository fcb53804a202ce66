"""Event records and the synchronous bus that fans them out."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field

from sleuth import config
from sleuth.domain.enums import Category


class GameEvent(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class GameReady(GameEvent):
    players: List[str]


class TurnStarted(GameEvent):
    turn_number: int
    player: str


class SuggestionMade(GameEvent):
    player: str
    suggestion: Dict[Category, str]


class Disproved(GameEvent):
    suggester: str
    disprover: str


class NotDisproved(GameEvent):
    suggester: str


class GameOver(GameEvent):
    solution: Dict[Category, str]
    winner: Optional[str] = None
    accusation: Optional[Dict[Category, str]] = None
    is_correct: bool = False


class TurnResolved(GameEvent):
    """Complete outcome of one turn, as seen by one agent.

    ``revealed_card`` is only set for the agent that made the suggestion, or
    for a direct reveal where ``suggester`` is ``config.DIRECT_REVEAL``.
    """

    suggester: str
    suggestion: Dict[Category, str] = Field(default_factory=dict)
    disprover: Optional[str] = None
    revealed_card: Optional[str] = None

    @classmethod
    def direct_reveal(cls, holder: str, card: str) -> "TurnResolved":
        return cls(suggester=config.DIRECT_REVEAL, disprover=holder, revealed_card=card)

    @property
    def is_direct_reveal(self) -> bool:
        return self.suggester == config.DIRECT_REVEAL


class Listener(Protocol):
    def handle_event(self, event: Any) -> None: ...


class EventBus:
    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def publish(self, event: GameEvent) -> None:
        # Each listener finishes before the next one is called.
        for listener in list(self._listeners):
            listener.handle_event(event)

    @property
    def listeners(self) -> tuple[Listener, ...]:
        return tuple(self._listeners)
