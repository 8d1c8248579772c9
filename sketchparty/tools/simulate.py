"""Command line runner for offline party rotation simulations."""

from __future__ import annotations

import argparse
import logging
import random
import sys

from sketchparty.rotation.config import RotationSettings, load_settings
from sketchparty.rotation.models import TurnPassingAlgorithm
from sketchparty.rotation.seed import derive_seed
from sketchparty.rotation.simulator import SimulationOutcome, simulate_party
from sketchparty.rotation.square import (
    WilliamsSquareProvider,
    analyze_pairings,
    format_pairing_analysis,
    supports_balanced_square,
)


def parse_args(argv: list[str] | None, settings: RotationSettings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simulate turn rotation for one party")
    parser.add_argument("--players", type=int, default=settings.sim_participants)
    parser.add_argument("--target-games", type=int, default=settings.sim_target_games)
    parser.add_argument("--season-id", default=settings.sim_season_id)
    parser.add_argument("--seed", type=int, default=settings.sim_seed)
    parser.add_argument(
        "--algorithm",
        choices=[algorithm.value for algorithm in TurnPassingAlgorithm],
        default=TurnPassingAlgorithm.ALGORITHMIC.value,
    )
    parser.add_argument("--show-matrix", action="store_true")
    parser.add_argument("--show-square", action="store_true")
    return parser.parse_args(argv)


def render_summary(outcome: SimulationOutcome) -> str:
    lines = [
        f"Games completed: {outcome.completed_game_count}/{len(outcome.games)}",
        f"Party status: {outcome.party_status}",
        f"Iterations: {outcome.iterations}",
        f"Simulated end: {outcome.ended_at.isoformat()}",
        f"Stalled: {'yes' if outcome.stalled else 'no'}",
        f"Diagnostics: {len(outcome.diagnostics)}",
    ]
    for game in outcome.games:
        order = " -> ".join(turn.participant_id for turn in game.turns)
        lines.append(f"  {game.game_id}: {order}")
    return "\n".join(lines) + "\n"


def main(argv: list[str] | None = None) -> int:
    settings = load_settings()
    args = parse_args(argv, settings)
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        outcome = simulate_party(
            args.players,
            args.target_games,
            season_id=args.season_id,
            rng=random.Random(args.seed),
            algorithm=TurnPassingAlgorithm(args.algorithm),
        )
    except ValueError as exc:
        print(f"Invalid simulation arguments: {exc}", file=sys.stderr)
        return 2

    sys.stdout.write(render_summary(outcome))
    if args.show_matrix:
        sys.stdout.write("\n" + outcome.interaction_matrix().format_table())
    if args.show_square:
        if supports_balanced_square(args.players):
            square = WilliamsSquareProvider().generate(args.players, derive_seed(args.season_id))
            sys.stdout.write("\n" + format_pairing_analysis(analyze_pairings(square)))
        else:
            print(f"No balanced square for {args.players} players.", file=sys.stderr)
    return 1 if outcome.stalled else 0


if __name__ == "__main__":
    raise SystemExit(main())
