from __future__ import annotations

import random
import unittest
from datetime import datetime, timezone

from sketchparty.rotation.engine import assign_next
from sketchparty.rotation.models import Assigned, GameFinished, GameTurnSummary, TurnContext
from sketchparty.rotation.payloads import resolve_assignment_payload
from sketchparty.rotation.simulator import simulate_party


START = datetime(2025, 6, 1, tzinfo=timezone.utc)


class HandBuiltSquareProvider:
    def __init__(self) -> None:
        self.calls = 0

    def generate(self, n: int, seed: int) -> list[list[str]]:
        self.calls += 1
        letters = "ABCDE"
        return [[letters[(row + col) % n] for col in range(n)] for row in range(n)]


class PartyRotationAcceptanceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.participants = ["P1", "P2", "P3", "P4", "P5"]
        self.games = [GameTurnSummary(game_id=f"g{i}") for i in range(5)]

    def test_three_player_party_passes_turn_round_robin(self):
        provider = HandBuiltSquareProvider()
        result = assign_next(
            TurnContext(game_id="g0", completed_turn_participant_id="P2", completed_turn_order_index=1),
            ["P1", "P2", "P3"],
            self.games,
            provider=provider,
        )

        self.assertIsInstance(result, Assigned)
        self.assertEqual(result.next_participant_id, "P3")
        self.assertEqual(provider.calls, 0)

    def test_five_player_party_follows_square_row_until_finished(self):
        provider = HandBuiltSquareProvider()
        order = ["P1"]
        for column in range(5):
            result = assign_next(
                TurnContext(
                    game_id="g0",
                    party_season_id="season-1",
                    completed_turn_participant_id=order[-1],
                    completed_turn_order_index=column,
                ),
                self.participants,
                self.games,
                provider=provider,
            )
            if isinstance(result, GameFinished):
                break
            order.append(result.next_participant_id)

        self.assertEqual(order, self.participants)
        self.assertIsInstance(result, GameFinished)
        self.assertIsNone(result.error)

    def test_orchestrator_payload_for_unknown_game_falls_back(self):
        response = resolve_assignment_payload(
            {
                "context": {
                    "game_id": "late-game",
                    "party_season_id": "season-1",
                    "completed_turn_participant_id": "P5",
                    "completed_turn_order_index": 2,
                },
                "participant_ids": self.participants,
                "games": [{"game_id": game.game_id} for game in self.games],
            },
            provider=HandBuiltSquareProvider(),
        )

        self.assertEqual(response["outcome"], "assigned")
        self.assertEqual(response["next_participant_id"], "P1")
        self.assertIn("late-game", response["log"])

    def test_simulated_party_reaches_target_with_fair_interactions(self):
        outcome = simulate_party(12, 8, season_id="mock-season", rng=random.Random(2024), start_time=START)

        self.assertFalse(outcome.stalled)
        self.assertGreaterEqual(outcome.completed_game_count, 8)
        matrix = outcome.interaction_matrix()
        for follower in outcome.participant_ids:
            self.assertEqual(matrix.get(follower, follower).total, 0)


if __name__ == "__main__":
    unittest.main()
