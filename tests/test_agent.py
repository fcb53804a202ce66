import logging

import pytest

from sleuth import config
from sleuth.config import AgentSettings
from sleuth.domain.enums import Category, Certainty
from sleuth.domain.errors import ContradictionError, GameSetupError
from sleuth.game.events import TurnResolved, TurnStarted
from sleuth.strategy.suggestions import StrategyKind

HAND = ["Colonel Mustard", "Candlestick", "Ballroom", "Kitchen"]


def _suggestion(suspect, weapon, room):
    return {Category.SUSPECT: suspect, Category.WEAPON: weapon, Category.ROOM: room}


class TestSetup:
    def test_fresh_agent_knows_nothing(self, agent, catalog):
        knowledge = agent.knowledge()
        assert set(knowledge) == set(catalog.all_cards)
        assert all(v == Certainty.MAYBE for row in knowledge.values() for v in row.values())
        assert agent.hand == frozenset()
        assert agent.open_mysteries() == []
        assert agent.players == ("Player 1", "Player 2", "Player 3")

    @pytest.mark.parametrize(
        "players,me",
        [
            (["Player 1", "Player 1"], "Player 1"),
            (["Player 1", "Player 2"], "Player 3"),
            (["Player 1", config.SOLUTION], "Player 1"),
        ],
    )
    def test_bad_seating_is_rejected(self, make_agent, players, me):
        with pytest.raises(GameSetupError):
            make_agent(name=me, players=players)

    def test_settings_are_validated(self):
        with pytest.raises(ValueError):
            AgentSettings(pass_limit=0)


class TestIntake:
    def test_receive_hand(self, make_agent):
        agent = make_agent(hand=HAND)
        assert agent.hand == frozenset(HAND)
        for card in HAND:
            assert agent.knowledge()[card]["Player 1"] == Certainty.YES
            assert agent.knowledge()[card][config.SOLUTION] == Certainty.NO

    def test_unknown_hand_card_is_ignored(self, make_agent, caplog):
        with caplog.at_level(logging.ERROR):
            agent = make_agent(hand=["Rope", "Spanner"])
        assert agent.hand == frozenset({"Rope"})
        assert "Spanner" in caplog.text

    def test_revealed_card_to_me(self, make_agent):
        agent = make_agent(hand=HAND)
        agent.handle_event(
            TurnResolved(
                suggester="Player 1",
                suggestion=_suggestion("Mr. Green", "Rope", "Hall"),
                disprover="Player 2",
                revealed_card="Rope",
            )
        )
        assert agent.knowledge()["Rope"]["Player 2"] == Certainty.YES
        assert agent.open_mysteries() == []

    def test_undisproved_suggestion_reveals_solution(self, make_agent):
        agent = make_agent(hand=HAND)
        agent.handle_event(
            TurnResolved(suggester="Player 1", suggestion=_suggestion("Colonel Mustard", "Rope", "Hall"))
        )
        knowledge = agent.knowledge()
        assert knowledge["Rope"][config.SOLUTION] == Certainty.YES
        assert knowledge["Hall"][config.SOLUTION] == Certainty.YES
        assert knowledge["Colonel Mustard"]["Player 1"] == Certainty.YES
        assert agent.should_accuse() is None

        suggestion = agent.make_suggestion()
        assert agent.last_strategy == StrategyKind.EXPLOIT
        assert suggestion[Category.WEAPON] == "Rope"
        assert suggestion[Category.ROOM] == "Hall"

    def test_third_party_disproval_opens_a_mystery(self, agent):
        agent.handle_event(
            TurnResolved(
                suggester="Player 2",
                suggestion=_suggestion("Mr. Green", "Rope", "Hall"),
                disprover="Player 3",
            )
        )
        (mystery,) = agent.open_mysteries()
        assert mystery.disprover == "Player 3"
        assert mystery.candidates == {"Mr. Green", "Rope", "Hall"}

    def test_disproving_myself_teaches_nothing(self, make_agent):
        agent = make_agent(hand=HAND)
        before = agent.knowledge()
        agent.handle_event(
            TurnResolved(
                suggester="Player 2",
                suggestion=_suggestion("Colonel Mustard", "Rope", "Hall"),
                disprover="Player 1",
            )
        )
        assert agent.knowledge() == before
        assert agent.open_mysteries() == []

    def test_direct_reveal_runs_deductions(self, make_agent, small_catalog):
        agent = make_agent(name="Me", players=["Me", "You"], hand=["Green", "Hall"], cat=small_catalog)
        agent.handle_event(TurnResolved.direct_reveal("You", "Knife"))

        knowledge = agent.knowledge()
        assert knowledge["Knife"]["You"] == Certainty.YES
        # Plum and Study are the only suspects/rooms left; Rope the only weapon.
        assert knowledge["Rope"][config.SOLUTION] == Certainty.YES
        assert knowledge["Plum"][config.SOLUTION] == Certainty.YES
        assert knowledge["Study"][config.SOLUTION] == Certainty.YES
        assert agent.should_accuse() == _suggestion("Plum", "Rope", "Study")

    def test_mystery_resolves_when_alternatives_are_placed(self, make_agent):
        agent = make_agent(hand=HAND)
        agent.handle_event(
            TurnResolved(
                suggester="Player 2",
                suggestion=_suggestion("Mr. Green", "Rope", "Hall"),
                disprover="Player 3",
            )
        )
        agent.handle_event(TurnResolved.direct_reveal("Player 2", "Mr. Green"))
        agent.handle_event(TurnResolved.direct_reveal("Player 2", "Rope"))

        assert agent.knowledge()["Hall"]["Player 3"] == Certainty.YES
        assert agent.open_mysteries() == []

    def test_other_events_are_ignored(self, agent):
        before = agent.knowledge()
        agent.handle_event(TurnStarted(turn_number=1, player="Player 2"))
        assert agent.knowledge() == before

    def test_inconsistent_reports_raise(self, make_agent):
        agent = make_agent(hand=HAND)
        agent.handle_event(TurnResolved.direct_reveal("Player 2", "Rope"))
        with pytest.raises(ContradictionError):
            agent.handle_event(TurnResolved.direct_reveal("Player 3", "Rope"))

    def test_disproval_by_unknown_player_is_ignored(self, agent):
        agent.handle_event(
            TurnResolved(
                suggester="Player 2",
                suggestion=_suggestion("Mr. Green", "Rope", "Hall"),
                disprover="Player 9",
            )
        )
        assert agent.open_mysteries() == []
        agent.handle_event(TurnResolved.direct_reveal("Player 2", "Dagger"))
        assert agent.knowledge()["Dagger"]["Player 2"] == Certainty.YES

    def test_facts_are_accepted_after_a_contradiction(self, make_agent):
        agent = make_agent(hand=HAND)
        agent.handle_event(
            TurnResolved(
                suggester="Player 3",
                suggestion=_suggestion("Mr. Green", "Rope", "Hall"),
                disprover="Player 2",
            )
        )
        agent.handle_event(TurnResolved.direct_reveal("Player 1", "Mr. Green"))
        with pytest.raises(ContradictionError):
            agent.handle_event(
                TurnResolved(
                    suggester="Player 1",
                    suggestion=_suggestion("Colonel Mustard", "Rope", "Hall"),
                    disprover=None,
                )
            )
        assert agent.open_mysteries() == []

        agent.handle_event(TurnResolved.direct_reveal("Player 3", "Dagger"))
        assert agent.knowledge()["Dagger"]["Player 3"] == Certainty.YES


class TestDecisions:
    def test_accuse_only_with_full_solution(self, agent):
        agent.handle_event(TurnResolved.direct_reveal(config.SOLUTION, "Mrs. Peacock"))
        agent.handle_event(TurnResolved.direct_reveal(config.SOLUTION, "Rope"))
        assert agent.should_accuse() is None
        agent.handle_event(TurnResolved.direct_reveal(config.SOLUTION, "Study"))
        assert agent.should_accuse() == _suggestion("Mrs. Peacock", "Rope", "Study")

    def test_choose_card_to_show(self, make_agent):
        agent = make_agent(hand=HAND)
        assert agent.choose_card_to_show(_suggestion("Colonel Mustard", "Candlestick", "Hall")) == "Candlestick"
        assert agent.choose_card_to_show(_suggestion("Mr. Green", "Rope", "Hall")) is None

    def test_suggestion_is_always_complete(self, make_agent, catalog):
        agent = make_agent(hand=HAND)
        for card in catalog.all_cards:
            if card not in HAND and card not in ("Mrs. Peacock", "Rope", "Study"):
                agent.handle_event(TurnResolved.direct_reveal("Player 2", card))
        assert agent.should_accuse() == _suggestion("Mrs. Peacock", "Rope", "Study")
        suggestion = agent.make_suggestion()
        assert set(suggestion) == {Category.SUSPECT, Category.WEAPON, Category.ROOM}

    def test_knowledge_cannot_be_mutated_from_outside(self, agent):
        agent.knowledge()["Rope"]["Player 2"] = Certainty.YES
        agent.open_mysteries().append(None)
        assert agent.knowledge()["Rope"]["Player 2"] == Certainty.MAYBE
        assert agent.open_mysteries() == []
