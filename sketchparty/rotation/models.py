"""Domain models for turn assignment inputs and results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Strategy(str, Enum):
    ROUND_ROBIN = "round-robin"
    BALANCED_SQUARE = "balanced-square"


class TurnPassingAlgorithm(str, Enum):
    """Party-level setting choosing how turns are passed on."""

    ROUND_ROBIN = "round-robin"
    ALGORITHMIC = "algorithmic"


class FailureKind(str, Enum):
    # Caller broke an invariant; retrying will not help.
    CONTRACT = "contract"
    # Square provider fault; may succeed on a later scheduling attempt.
    DEPENDENCY = "dependency"


@dataclass(frozen=True)
class TurnContext:
    game_id: str
    completed_turn_participant_id: str
    completed_turn_order_index: int
    party_season_id: str | None = None


@dataclass(frozen=True)
class TurnRecord:
    participant_id: str
    is_drawing: bool
    completed_at: datetime | None = None

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None


@dataclass(frozen=True)
class GameTurnSummary:
    """Read-only projection of one game's turns, ordered by order index."""

    game_id: str
    ordered_turns: tuple[TurnRecord, ...] = field(default_factory=tuple)

    def completed_turns(self) -> list[TurnRecord]:
        return [turn for turn in self.ordered_turns if turn.is_completed]


@dataclass(frozen=True)
class Assigned:
    participant_id: str
    strategy: Strategy
    log: str | None = None

    @property
    def next_participant_id(self) -> str | None:
        return self.participant_id

    @property
    def error(self) -> str | None:
        return None


@dataclass(frozen=True)
class GameFinished:
    log: str | None = None

    @property
    def next_participant_id(self) -> str | None:
        return None

    @property
    def error(self) -> str | None:
        return None


@dataclass(frozen=True)
class AssignmentFailed:
    error: str
    kind: FailureKind
    log: str | None = None

    @property
    def next_participant_id(self) -> str | None:
        return None

    @property
    def retryable(self) -> bool:
        return self.kind is FailureKind.DEPENDENCY


AssignmentResult = Assigned | GameFinished | AssignmentFailed
