from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from textual.app import App, ComposeResult
from textual.containers import Vertical, VerticalScroll
from textual.widgets import Input, RichLog, Static

from sleuth.agent.brain import DeductionAgent
from sleuth.domain.catalog import Catalog
from sleuth.domain.errors import CatalogError, ContradictionError
from sleuth.domain.models import suggestion_from_cards
from sleuth.game.events import TurnResolved
from sleuth.presentation.notes import format_mysteries, format_suggestion, render_notes

NO_ONE = "no one"

COMMANDS: list[tuple[str, tuple[str, ...], str]] = [
    ("log", ("1", "log", "l"), "Log a turn"),
    ("reveal", ("2", "reveal", "r"), "Log a revealed card"),
    ("suggest", ("3", "suggest", "s"), "Suggest"),
    ("hand", ("4", "hand", "ha"), "Hand"),
    ("accuse", ("5", "accuse", "a"), "Accusation check"),
    ("cards", ("6", "cards", "c"), "Card list"),
    ("notes", ("7", "notes", "n"), "Detective notes"),
    ("help", ("8", "help", "h", "?"), "Help"),
]


def resolve_command(text: str) -> str | None:
    value = text.strip().lower()
    for name, aliases, _ in COMMANDS:
        if value in aliases:
            return name
    return None


def menu_text() -> str:
    lines = ["Choose action:"]
    lines.extend(f"{aliases[0]}) {label}" for _, aliases, label in COMMANDS)
    return "\n".join(lines)


@dataclass
class PromptState:
    step: str
    data: dict[str, Any] = field(default_factory=dict)
    options: list[Any] = field(default_factory=list)


def resolve_card(text: str, catalog: Catalog) -> str | None:
    """Match a card by catalog number (1-based) or case-insensitive name."""
    value = text.strip()
    if value.isdigit():
        index = int(value) - 1
        if 0 <= index < len(catalog.all_cards):
            return catalog.all_cards[index]
        return None
    lowered = value.lower()
    for card in catalog.all_cards:
        if card.lower() == lowered:
            return card
    return None


def resolve_cards(text: str, catalog: Catalog) -> list[str]:
    cards: list[str] = []
    for part in text.split(","):
        if not part.strip():
            continue
        card = resolve_card(part, catalog)
        if card is None:
            raise CatalogError(f"Unknown card: {part.strip()}")
        cards.append(card)
    return cards


def resolve_option(text: str, options: list[Any]) -> Any | None:
    value = text.strip()
    if value.isdigit():
        index = int(value) - 1
        if 0 <= index < len(options):
            return options[index]
        return None
    for option in options:
        if str(option).lower() == value.lower():
            return option
    return None


class DetectiveApp(App):
    """Co-pilot for a real table: log what happens, ask what to suggest."""

    TITLE = "sleuth"
    SUB_TITLE = "detective mode"
    BINDINGS = [
        ("f6", "focus_log", "Focus log"),
        ("f7", "focus_detail", "Focus notes"),
        ("f8", "focus_input", "Focus input"),
    ]
    CSS = """
    Screen {
        layout: vertical;
    }
    #header {
        height: auto;
        padding: 1 1;
    }
    #log {
        height: 1fr;
        border: solid $secondary;
        padding: 0 1;
    }
    #detail {
        height: 2fr;
        border: solid $secondary;
        padding: 0 1;
    }
    #menu {
        height: auto;
        padding: 1 1;
    }
    #command {
        height: 3;
        padding: 0 1;
    }
    """

    def __init__(self, agent: DeductionAgent) -> None:
        super().__init__()
        self.agent = agent
        self.prompt_state: PromptState | None = None

    @property
    def catalog(self) -> Catalog:
        return self.agent.catalog

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("", id="header")
            yield RichLog(id="log", wrap=True)
            yield VerticalScroll(Static("", id="detail_view", expand=True), id="detail")
            yield Static(menu_text(), id="menu")
            yield Input(placeholder="Enter command (1-8 or q)...", id="command")

    def on_mount(self) -> None:
        self._refresh()
        self._write(f"Detective mode is active for {self.agent.name}.")
        self._write("Cards can be typed by name or by their number in the catalog.")
        self.query_one("#command", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        value = event.value.strip()
        event.input.value = ""
        if not value:
            return
        if self.prompt_state is not None:
            if value.lower() == "cancel":
                self.prompt_state = None
                self._write("Cancelled.")
                return
            self._handle_prompt_input(value)
            return
        if value.lower() in ("q", "quit"):
            self.exit()
            return
        self._handle_command(value.lower())

    def _write(self, message: str) -> None:
        self.query_one("#log", RichLog).write(message)

    def action_focus_log(self) -> None:
        self.query_one("#log", RichLog).focus()

    def action_focus_detail(self) -> None:
        self.query_one("#detail", VerticalScroll).focus()

    def action_focus_input(self) -> None:
        self.query_one("#command", Input).focus()

    def _refresh(self) -> None:
        header = self.query_one("#header", Static)
        known = self.agent.should_accuse()
        status = "solution known" if known else f"{len(self.agent.open_mysteries())} open mysteries"
        header.update(f"Player: {self.agent.name}  Players: {', '.join(self.agent.players)}  ({status})")
        lines = [render_notes(self.agent)]
        mysteries = format_mysteries(self.agent)
        if mysteries:
            lines.append("")
            lines.append("Open mysteries:")
            lines.extend(f"- {line}" for line in mysteries)
        self.query_one("#detail_view", Static).update("\n".join(lines))

    def _ask(self, step: str, prompt: str, options: list[Any] | None = None, **data: Any) -> None:
        self.prompt_state = PromptState(step=step, data=data, options=options or [])
        self._write(prompt)
        for idx, option in enumerate(options or [], start=1):
            self._write(f"  {idx}) {option}")

    def _handle_command(self, value: str) -> None:
        command = resolve_command(value)
        if command == "log":
            self._ask("suggester", "Who made the suggestion?", list(self.agent.players))
        elif command == "reveal":
            self._ask("holder", "Which player revealed a card?", list(self.agent.players))
        elif command == "suggest":
            suggestion = self.agent.make_suggestion()
            self._write(f"Suggest ({self.agent.last_strategy}): {format_suggestion(suggestion)}")
        elif command == "hand":
            self._write("Your hand: " + ", ".join(sorted(self.agent.hand)))
        elif command == "accuse":
            accusation = self.agent.should_accuse()
            if accusation is None:
                self._write("Not enough evidence to accuse yet.")
            else:
                self._write(f"Accuse: {format_suggestion(accusation)}")
        elif command == "cards":
            for idx, card in enumerate(self.catalog.all_cards, start=1):
                self._write(f"  {idx}) {card}")
        elif command == "notes":
            self._write(render_notes(self.agent))
            for line in format_mysteries(self.agent):
                self._write(f"- {line}")
        elif command == "help":
            self._write(menu_text())
            self._write("Type q to quit, or cancel while answering a question.")
        else:
            self._write(f"Unknown command '{value}'.")

    def _handle_prompt_input(self, value: str) -> None:
        state = self.prompt_state
        if state.step == "suggester":
            suggester = resolve_option(value, state.options)
            if suggester is None:
                self._write("Pick a player from the list.")
                return
            self._ask("cards", "Which 3 cards were suggested? (comma-separated)", suggester=suggester)
        elif state.step == "cards":
            try:
                suggestion = suggestion_from_cards(resolve_cards(value, self.catalog), self.catalog)
            except CatalogError as exc:
                self._write(str(exc))
                return
            if len(suggestion) != 3:
                self._write("A suggestion needs one suspect, one weapon and one room.")
                return
            self._ask(
                "disprover",
                "Who disproved the suggestion?",
                list(self.agent.players) + [NO_ONE],
                suggestion=suggestion,
                **state.data,
            )
        elif state.step == "disprover":
            disprover = resolve_option(value, state.options)
            if disprover is None:
                self._write("Pick a player from the list.")
                return
            data = dict(state.data, disprover=None if disprover == NO_ONE else disprover)
            if data["disprover"] and data["suggester"] == self.agent.name:
                self._ask("shown", "Which card were you shown?", **data)
                return
            self._apply(TurnResolved(**data))
        elif state.step == "shown":
            card = resolve_card(value, self.catalog)
            if card is None:
                self._write("Unknown card.")
                return
            self._apply(TurnResolved(revealed_card=card, **state.data))
        elif state.step == "holder":
            holder = resolve_option(value, state.options)
            if holder is None:
                self._write("Pick a player from the list.")
                return
            self._ask("revealed", "Which card did they reveal?", holder=holder)
        elif state.step == "revealed":
            card = resolve_card(value, self.catalog)
            if card is None:
                self._write("Unknown card.")
                return
            self._apply(TurnResolved.direct_reveal(state.data["holder"], card))

    def _apply(self, event: TurnResolved) -> None:
        self.prompt_state = None
        try:
            self.agent.handle_event(event)
        except ContradictionError as exc:
            self._write(f"That contradicts earlier notes: {exc}")
            self._refresh()
            return
        self._write("Logged.")
        self._refresh()
