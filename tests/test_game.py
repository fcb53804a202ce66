import pytest

from sleuth.agent.brain import DeductionAgent
from sleuth.domain.enums import CATEGORIES, Category
from sleuth.domain.errors import GameSetupError
from sleuth.game.events import GameOver, GameReady, SuggestionMade, TurnStarted
from sleuth.game.table import Game, GameBuilder
from sleuth.strategy.chooser import ChooserKind, DeterministicChooser
from sleuth.util.rng import Rng


class Recorder:
    def __init__(self):
        self.events = []

    def handle_event(self, event):
        self.events.append(event)


@pytest.mark.parametrize("count", [1, 7])
def test_builder_rejects_bad_player_counts(catalog, count):
    with pytest.raises(GameSetupError):
        GameBuilder(catalog, Rng(1)).with_agents(count).build()


def test_deal_is_complete_and_disjoint(catalog):
    game = GameBuilder(catalog, Rng(1)).with_agents(4).build()

    assert set(game.solution) == set(CATEGORIES)
    for category, card in game.solution.items():
        assert catalog.category_of(card) == category

    dealt = [card for hand in game.hands.values() for card in hand]
    assert len(dealt) + 3 == len(catalog.all_cards)
    assert set(dealt) | set(game.solution.values()) == set(catalog.all_cards)
    assert not set(dealt) & set(game.solution.values())

    sizes = [len(hand) for hand in game.hands.values()]
    assert max(sizes) - min(sizes) <= 1
    for agent in game.agents:
        assert agent.hand == frozenset(game.hands[agent.name])


def test_players_are_seated_from_suspects(catalog):
    game = GameBuilder(catalog, Rng(3)).with_agents(3).build()
    names = [agent.name for agent in game.agents]
    assert sorted(names) == sorted(catalog.suspects[:3])


def test_events_are_published_in_turn_order(catalog):
    builder = GameBuilder(catalog, Rng(5)).with_agents(3)
    recorder = Recorder()
    builder.bus.subscribe(recorder)
    game = builder.build()

    game.run(turn_limit=4)

    kinds = [type(event) for event in recorder.events]
    assert kinds[0] is GameReady
    assert kinds[1] is TurnStarted
    assert kinds[-1] is GameOver
    turns = [event for event in recorder.events if isinstance(event, TurnStarted)]
    assert [t.turn_number for t in turns] == list(range(1, len(turns) + 1))
    for event in recorder.events:
        if isinstance(event, SuggestionMade):
            assert set(event.suggestion) == set(CATEGORIES)


@pytest.mark.parametrize("seed", [1, 2, 3, 4, 5, 6])
def test_agents_only_accuse_when_right(catalog, seed):
    game = GameBuilder(catalog, Rng(seed)).with_agents(4).build()
    result = game.run()
    assert result.turns <= 50
    if result.winner is not None:
        assert result.is_correct


def test_deterministic_choosers_reproduce_the_same_game(catalog):
    results = []
    for _ in range(2):
        builder = GameBuilder(catalog, Rng(11)).with_agents(3).with_chooser(ChooserKind.DETERMINISTIC)
        results.append(builder.build().run())
    assert results[0] == results[1]


def test_fixed_deal(catalog):
    solution = {Category.SUSPECT: "Mrs. White", Category.WEAPON: "Lead Pipe", Category.ROOM: "Kitchen"}
    seats = ["Miss Scarlett", "Mr. Green", "Colonel Mustard"]
    hands = {
        "Miss Scarlett": ["Colonel Mustard", "Mrs. Peacock", "Rope", "Ballroom", "Dining Room", "Lounge"],
        "Mr. Green": ["Professor Plum", "Hall", "Conservatory", "Mr. Green", "Study", "Billiard Room"],
        "Colonel Mustard": ["Miss Scarlett", "Dagger", "Candlestick", "Wrench", "Revolver", "Library"],
    }
    rng = Rng(1)
    game = Game(catalog=catalog, rng=rng, solution=solution, hands=hands)
    for name in seats:
        agent = DeductionAgent(rng.fork(name), chooser=DeterministicChooser())
        agent.setup(catalog, seats, name)
        agent.receive_hand(hands[name])
        game.agents.append(agent)
        game.bus.subscribe(agent)

    result = game.run()

    if result.winner is not None:
        assert result.is_correct
        winner = next(a for a in game.agents if a.name == result.winner)
        assert winner.should_accuse() == solution
