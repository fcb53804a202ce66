from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

from sleuth import config
from sleuth.agent.brain import DeductionAgent
from sleuth.domain.catalog import load_catalog
from sleuth.strategy.chooser import ChooserKind, make_chooser
from sleuth.ui.app import DetectiveApp, resolve_cards
from sleuth.util.rng import Rng


def _split(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def main() -> None:
    parser = argparse.ArgumentParser(description="Detective-mode co-pilot for a real game.")
    parser.add_argument("--players", type=str, required=True, help="Comma-separated seat order.")
    parser.add_argument("--me", type=str, required=True, help="Which player you are.")
    parser.add_argument("--hand", type=str, required=True, help="Comma-separated cards in your hand.")
    parser.add_argument("--seed", type=int, default=config.SEED)
    parser.add_argument("--catalog", type=str, default=str(config.CATALOG_PATH))
    parser.add_argument(
        "--chooser",
        type=str,
        choices=[c.value for c in ChooserKind],
        default=ChooserKind.RANDOM.value,
    )
    parser.add_argument("--log-file", type=str, default=None, help="Write engine logs to this file.")
    parser.add_argument("--log-level", type=str, default="INFO")
    args = parser.parse_args()

    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=args.log_level.upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    catalog = load_catalog(Path(args.catalog))
    rng = Rng(args.seed)
    agent = DeductionAgent(rng, chooser=make_chooser(ChooserKind(args.chooser), rng))
    agent.setup(catalog, _split(args.players), args.me)
    agent.receive_hand(resolve_cards(args.hand, catalog))
    DetectiveApp(agent).run()


if __name__ == "__main__":
    main()
