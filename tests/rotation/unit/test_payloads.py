import pytest
from pydantic import ValidationError

from sketchparty.rotation.models import Assigned, AssignmentFailed, FailureKind, GameFinished, Strategy
from sketchparty.rotation.payloads import AssignmentRequest, AssignmentResponse, resolve_assignment_payload


PARTICIPANTS = ["P1", "P2", "P3", "P4", "P5"]


class FixedSquareProvider:
    def generate(self, n: int, seed: int) -> list[list[str]]:
        return [["A", "B", "C", "D", "E"] for _ in range(n)]


class FailingSquareProvider:
    def generate(self, n: int, seed: int) -> list[list[str]]:
        raise RuntimeError("timeout")


def _payload(**overrides) -> dict:
    payload = {
        "context": {
            "game_id": "g0",
            "party_season_id": "season-1",
            "completed_turn_participant_id": "P1",
            "completed_turn_order_index": 0,
        },
        "participant_ids": PARTICIPANTS,
        "games": [
            {
                "game_id": "g0",
                "turns": [{"participant_id": "P1", "is_drawing": False, "completed_at": "2025-01-01T00:00:00+00:00"}],
            },
            {"game_id": "g1", "turns": []},
        ],
    }
    payload.update(overrides)
    return payload


def test_resolve_assignment_payload_returns_assigned_response() -> None:
    response = resolve_assignment_payload(_payload(), provider=FixedSquareProvider())

    assert response == {
        "outcome": "assigned",
        "next_participant_id": "P2",
        "error": None,
        "log": None,
        "retryable": False,
    }


def test_resolve_assignment_payload_reports_retryable_provider_failure() -> None:
    response = resolve_assignment_payload(_payload(), provider=FailingSquareProvider())

    assert response["outcome"] == "failed"
    assert response["retryable"] is True
    assert "timeout" in response["error"]


def test_resolve_assignment_payload_honors_round_robin_algorithm() -> None:
    response = resolve_assignment_payload(_payload(algorithm="round-robin"), provider=FailingSquareProvider())

    assert response["outcome"] == "assigned"
    assert response["next_participant_id"] == "P2"


def test_request_to_domain_keeps_turn_order() -> None:
    request = AssignmentRequest.model_validate(_payload())

    games = [game.to_domain() for game in request.games]

    assert games[0].ordered_turns[0].participant_id == "P1"
    assert games[0].ordered_turns[0].is_completed is True
    assert games[1].ordered_turns == ()
    assert request.context.to_domain().party_season_id == "season-1"


def test_request_rejects_duplicate_participants() -> None:
    with pytest.raises(ValidationError):
        AssignmentRequest.model_validate(_payload(participant_ids=["P1", "P1", "P2"]))


def test_request_rejects_negative_order_index() -> None:
    payload = _payload()
    payload["context"]["completed_turn_order_index"] = -1

    with pytest.raises(ValidationError):
        AssignmentRequest.model_validate(payload)


def test_request_rejects_empty_participant_list() -> None:
    with pytest.raises(ValidationError):
        AssignmentRequest.model_validate(_payload(participant_ids=[]))


def test_response_from_each_result_variant() -> None:
    assigned = AssignmentResponse.from_result(Assigned("P2", Strategy.ROUND_ROBIN, log="fallback"))
    finished = AssignmentResponse.from_result(GameFinished(log="done"))
    failed = AssignmentResponse.from_result(AssignmentFailed("season id required", FailureKind.CONTRACT))

    assert (assigned.outcome, assigned.next_participant_id, assigned.log) == ("assigned", "P2", "fallback")
    assert (finished.outcome, finished.next_participant_id) == ("finished", None)
    assert (failed.outcome, failed.retryable) == ("failed", False)
