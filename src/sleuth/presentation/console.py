"""Console narration of a headless game."""

from __future__ import annotations

from typing import Any, Callable

from sleuth.agent.brain import DeductionAgent
from sleuth.game.events import (
    Disproved,
    EventBus,
    GameOver,
    GameReady,
    NotDisproved,
    SuggestionMade,
    TurnStarted,
)
from sleuth.presentation.notes import format_suggestion, render_notes


class ConsoleRenderer:
    """Bus listener that prints each game event as it happens."""

    def __init__(self, bus: EventBus, write: Callable[[str], Any] = print) -> None:
        self.bus = bus
        self.write = write

    def handle_event(self, event: Any) -> None:
        if isinstance(event, GameReady):
            self.write("--- Starting Game: Initial State ---")
            # Agents subscribe during the build, before the game is announced.
            agent = next((x for x in self.bus.listeners if isinstance(x, DeductionAgent)), None)
            if agent is not None:
                self.write(render_notes(agent))
        elif isinstance(event, TurnStarted):
            self.write(f"\n--- Turn {event.turn_number}: {event.player} ---")
        elif isinstance(event, SuggestionMade):
            self.write(f"{event.player} suggests: {format_suggestion(event.suggestion)}")
        elif isinstance(event, Disproved):
            self.write(f"-> {event.disprover} shows a card to {event.suggester}.")
        elif isinstance(event, NotDisproved):
            self.write("-> No player could show a card.")
        elif isinstance(event, GameOver):
            self.write("\n--- GAME OVER ---")
            if event.accusation is not None:
                self.write(f"{event.winner} accused with: {format_suggestion(event.accusation)}")
                verdict = "CORRECT" if event.is_correct else "INCORRECT"
                self.write(f"The accusation is {verdict}.")
            else:
                self.write("Game ended without an accusation.")
            self.write(f"The solution was: {format_suggestion(event.solution)}")
