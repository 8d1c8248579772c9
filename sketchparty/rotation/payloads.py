"""Pydantic envelopes validating orchestrator payloads for turn assignment."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from .engine import resolve_next_turn
from .models import (
    Assigned,
    AssignmentFailed,
    AssignmentResult,
    GameTurnSummary,
    TurnContext,
    TurnPassingAlgorithm,
    TurnRecord,
)
from .square import SquareProvider


class TurnPayload(BaseModel):
    participant_id: str = Field(min_length=1)
    is_drawing: bool
    completed_at: datetime | None = None


class GameTurnSummaryPayload(BaseModel):
    game_id: str = Field(min_length=1)
    turns: list[TurnPayload] = Field(default_factory=list)

    def to_domain(self) -> GameTurnSummary:
        return GameTurnSummary(
            game_id=self.game_id,
            ordered_turns=tuple(
                TurnRecord(participant_id=turn.participant_id, is_drawing=turn.is_drawing, completed_at=turn.completed_at)
                for turn in self.turns
            ),
        )


class TurnContextPayload(BaseModel):
    game_id: str = Field(min_length=1)
    party_season_id: str | None = None
    completed_turn_participant_id: str = Field(min_length=1)
    completed_turn_order_index: int = Field(ge=0)

    def to_domain(self) -> TurnContext:
        return TurnContext(
            game_id=self.game_id,
            party_season_id=self.party_season_id,
            completed_turn_participant_id=self.completed_turn_participant_id,
            completed_turn_order_index=self.completed_turn_order_index,
        )


class AssignmentRequest(BaseModel):
    context: TurnContextPayload
    participant_ids: list[str] = Field(min_length=1)
    games: list[GameTurnSummaryPayload] = Field(default_factory=list)
    algorithm: TurnPassingAlgorithm = TurnPassingAlgorithm.ALGORITHMIC

    @field_validator("participant_ids")
    @classmethod
    def _participants_unique(cls, value: list[str]) -> list[str]:
        if len(set(value)) != len(value):
            raise ValueError("participant_ids must be unique")
        if any(not participant for participant in value):
            raise ValueError("participant_ids must be non-empty strings")
        return value


class AssignmentResponse(BaseModel):
    outcome: Literal["assigned", "finished", "failed"]
    next_participant_id: str | None = None
    error: str | None = None
    log: str | None = None
    retryable: bool = False

    @classmethod
    def from_result(cls, result: AssignmentResult) -> "AssignmentResponse":
        if isinstance(result, Assigned):
            return cls(outcome="assigned", next_participant_id=result.participant_id, log=result.log)
        if isinstance(result, AssignmentFailed):
            return cls(outcome="failed", error=result.error, log=result.log, retryable=result.retryable)
        return cls(outcome="finished", log=result.log)


def resolve_assignment_payload(payload: dict[str, Any], provider: SquareProvider | None = None) -> dict[str, Any]:
    """Validate an orchestrator payload, resolve the next turn and return the response as a dict."""
    request = AssignmentRequest.model_validate(payload)
    result = resolve_next_turn(
        request.algorithm,
        request.context.to_domain(),
        request.participant_ids,
        [game.to_domain() for game in request.games],
        provider=provider,
    )
    return AssignmentResponse.from_result(result).model_dump()
