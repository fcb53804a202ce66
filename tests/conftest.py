import pytest

from sleuth.agent.brain import DeductionAgent
from sleuth.domain.catalog import Catalog, default_catalog
from sleuth.strategy.chooser import DeterministicChooser
from sleuth.util.rng import Rng

PLAYERS = ["Player 1", "Player 2", "Player 3"]


@pytest.fixture(scope="session")
def catalog() -> Catalog:
    return default_catalog()


@pytest.fixture
def small_catalog() -> Catalog:
    return Catalog(suspects=["Green", "Plum"], weapons=["Knife", "Rope"], rooms=["Hall", "Study"])


@pytest.fixture
def make_agent(catalog):
    def _make(name: str = "Player 1", players=None, hand=(), seed: int = 1, cat=None) -> DeductionAgent:
        agent = DeductionAgent(Rng(seed), chooser=DeterministicChooser())
        agent.setup(cat or catalog, list(players or PLAYERS), name)
        if hand:
            agent.receive_hand(list(hand))
        return agent

    return _make


@pytest.fixture
def agent(make_agent) -> DeductionAgent:
    return make_agent()
