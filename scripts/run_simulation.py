from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

from sleuth import config
from sleuth.domain.catalog import load_catalog
from sleuth.game.table import GameBuilder
from sleuth.presentation.console import ConsoleRenderer
from sleuth.presentation.notes import render_notes
from sleuth.strategy.chooser import ChooserKind
from sleuth.util.rng import Rng


def main() -> None:
    parser = argparse.ArgumentParser(description="Run a headless game between deduction agents.")
    parser.add_argument("--seed", type=int, default=config.SEED)
    parser.add_argument("--players", type=int, default=4)
    parser.add_argument("--turn-limit", type=int, default=config.TURN_LIMIT)
    parser.add_argument("--catalog", type=str, default=str(config.CATALOG_PATH))
    parser.add_argument(
        "--chooser",
        type=str,
        choices=[c.value for c in ChooserKind],
        default=ChooserKind.RANDOM.value,
    )
    parser.add_argument("--log-level", type=str, default="WARNING")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    catalog = load_catalog(Path(args.catalog))
    builder = GameBuilder(catalog, Rng(args.seed)).with_agents(args.players)
    builder.with_chooser(ChooserKind(args.chooser))
    builder.bus.subscribe(ConsoleRenderer(builder.bus))
    game = builder.build()
    result = game.run(turn_limit=args.turn_limit)

    if result.winner is not None:
        winner = next(agent for agent in game.agents if agent.name == result.winner)
        print()
        print(render_notes(winner))


if __name__ == "__main__":
    main()
