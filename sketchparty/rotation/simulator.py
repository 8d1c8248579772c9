"""Offline party simulation driving the resolver over many concurrent games."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from sketchparty.rotation.engine import resolve_next_turn
from sketchparty.rotation.matrix import InteractionMatrix, build_matrix
from sketchparty.rotation.models import (
    AssignmentResult,
    GameTurnSummary,
    TurnContext,
    TurnPassingAlgorithm,
    TurnRecord,
)
from sketchparty.rotation.square import ALPHABET, SquareProvider


logger = logging.getLogger(__name__)

COMPLETION_DELAYS = (timedelta(days=1), timedelta(days=5), timedelta(days=25))
DRAWING_PLACEHOLDER = "<svg>...</svg>"
WRITING_PLACEHOLDER = "Some text"

PENDING = "pending"
COMPLETED = "completed"


def _label(position: int) -> str:
    return ALPHABET[position] if position < len(ALPHABET) else str(position + 1)


def participant_id_for(position: int) -> str:
    return f"player-{_label(position)}"


def game_id_for(position: int) -> str:
    return f"game-{_label(position)}"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SimulatedTurn:
    turn_id: str
    game_id: str
    participant_id: str
    order_index: int
    is_drawing: bool
    created_at: datetime
    completed_at: datetime | None = None
    status: str = PENDING
    content: str = ""

    def complete(self, at: datetime) -> None:
        self.completed_at = at
        self.status = COMPLETED
        self.content = DRAWING_PLACEHOLDER if self.is_drawing else WRITING_PLACEHOLDER

    def record(self) -> TurnRecord:
        return TurnRecord(participant_id=self.participant_id, is_drawing=self.is_drawing, completed_at=self.completed_at)


@dataclass
class SimulatedGame:
    game_id: str
    season_id: str
    turns: list[SimulatedTurn] = field(default_factory=list)
    completed_count: int = 0
    completed_at: datetime | None = None

    def add_turn(self, participant_id: str, is_drawing: bool, created_at: datetime) -> SimulatedTurn:
        order_index = len(self.turns)
        turn = SimulatedTurn(
            turn_id=f"turn-{self.game_id}-{order_index + 1}",
            game_id=self.game_id,
            participant_id=participant_id,
            order_index=order_index,
            is_drawing=is_drawing,
            created_at=created_at,
        )
        self.turns.append(turn)
        return turn

    def summary(self) -> GameTurnSummary:
        return GameTurnSummary(game_id=self.game_id, ordered_turns=tuple(turn.record() for turn in self.turns))


@dataclass(frozen=True)
class RejectedParticipant:
    participant_id: str
    reasons: tuple[str, ...]


@dataclass(frozen=True)
class SimulationDiagnostic:
    game_id: str
    detail: str
    rejected: tuple[RejectedParticipant, ...] = ()


@dataclass
class SimulationOutcome:
    participant_ids: list[str]
    games: list[SimulatedGame]
    started_at: datetime
    ended_at: datetime
    iterations: int
    stalled: bool
    diagnostics: list[SimulationDiagnostic] = field(default_factory=list)

    @property
    def completed_game_count(self) -> int:
        return sum(1 for game in self.games if game.completed_at is not None)

    @property
    def party_status(self) -> str:
        if self.games and all(game.completed_at is not None for game in self.games):
            return "completed"
        return "active"

    def interaction_matrix(self) -> InteractionMatrix:
        return build_matrix([game.summary() for game in self.games], self.participant_ids)


def build_initial_party(participant_count: int, season_id: str, start_time: datetime) -> tuple[list[str], list[SimulatedGame]]:
    """One game per participant, each opened with a writing turn by that participant."""
    participant_ids = [participant_id_for(position) for position in range(participant_count)]
    games: list[SimulatedGame] = []
    for position, participant_id in enumerate(participant_ids):
        game = SimulatedGame(game_id=game_id_for(position), season_id=season_id)
        game.add_turn(participant_id=participant_id, is_drawing=False, created_at=start_time)
        games.append(game)
    return participant_ids, games


def explain_unassignable(
    game: SimulatedGame,
    participant_ids: list[str],
    summaries: list[GameTurnSummary],
) -> tuple[RejectedParticipant, ...]:
    """List participants absent from ``game`` who already hit the per-type turn ceiling."""
    next_is_drawing = len([turn for turn in game.turns if turn.completed_at is not None]) % 2 == 1
    ceiling = (len(participant_ids) + 1) // 2
    played = {turn.participant_id for turn in game.turns}

    rejected: list[RejectedParticipant] = []
    for participant_id in participant_ids:
        if participant_id in played:
            continue
        own_turns = [
            turn for summary in summaries for turn in summary.ordered_turns if turn.participant_id == participant_id
        ]
        drawing = sum(1 for turn in own_turns if turn.is_drawing)
        writing = len(own_turns) - drawing

        reasons: list[str] = []
        if next_is_drawing and drawing >= ceiling:
            reasons.append("too many drawing turns")
        if not next_is_drawing and writing >= ceiling:
            reasons.append("too many writing turns")
        if reasons:
            rejected.append(RejectedParticipant(participant_id=participant_id, reasons=tuple(reasons)))
    return tuple(rejected)


def _diagnose(
    game: SimulatedGame,
    result: AssignmentResult,
    participant_ids: list[str],
    summaries: list[GameTurnSummary],
) -> SimulationDiagnostic:
    detail = result.error or result.log or "resolver returned no participant"
    rejected = explain_unassignable(game, participant_ids, summaries)
    logger.warning("Game %s has no valid participants: %s", game.game_id, detail)
    for participant in rejected:
        logger.warning("%s: %s", participant.participant_id, ", ".join(participant.reasons))
    return SimulationDiagnostic(game_id=game.game_id, detail=detail, rejected=rejected)


def simulate_party(
    participant_count: int = 12,
    target_completed_games: int = 8,
    *,
    season_id: str = "mock-season",
    rng: random.Random | None = None,
    provider: SquareProvider | None = None,
    start_time: datetime | None = None,
    algorithm: TurnPassingAlgorithm = TurnPassingAlgorithm.ALGORITHMIC,
) -> SimulationOutcome:
    """Complete random pending turns until enough games finish or nothing is pending.

    Each iteration completes one turn after a random delay and asks the
    resolver who plays next in that game. A run that runs out of pending
    turns first is returned with ``stalled=True``.
    """
    if participant_count < 1:
        raise ValueError("participant_count must be at least 1")
    if not 0 <= target_completed_games <= participant_count:
        raise ValueError("target_completed_games must be between 0 and participant_count")

    random_source = rng if rng is not None else random.Random()
    started_at = start_time if start_time is not None else _utc_now()
    participant_ids, games = build_initial_party(participant_count, season_id, started_at)
    games_by_id = {game.game_id: game for game in games}

    clock = started_at
    completed_games = 0
    iterations = 0
    stalled = False
    diagnostics: list[SimulationDiagnostic] = []

    while completed_games < target_completed_games:
        pending = [turn for game in games for turn in game.turns if turn.status == PENDING]
        if not pending:
            stalled = True
            logger.info("Party %s stalled with %d of %d games completed", season_id, completed_games, len(games))
            break

        iterations += 1
        turn = random_source.choice(pending)
        game = games_by_id[turn.game_id]
        clock = clock + random_source.choice(COMPLETION_DELAYS)
        turn.complete(clock)
        game.completed_count += 1

        if game.completed_count == participant_count:
            game.completed_at = clock
            completed_games += 1
            continue

        summaries = [candidate.summary() for candidate in games]
        context = TurnContext(
            game_id=game.game_id,
            party_season_id=game.season_id,
            completed_turn_participant_id=turn.participant_id,
            completed_turn_order_index=turn.order_index,
        )
        result = resolve_next_turn(algorithm, context, participant_ids, summaries, provider=provider)
        if result.log:
            logger.debug("Game %s: %s", game.game_id, result.log)

        if result.next_participant_id is None:
            diagnostics.append(_diagnose(game, result, participant_ids, summaries))
            continue

        game.add_turn(participant_id=result.next_participant_id, is_drawing=not turn.is_drawing, created_at=clock)

    return SimulationOutcome(
        participant_ids=participant_ids,
        games=games,
        started_at=started_at,
        ended_at=clock,
        iterations=iterations,
        stalled=stalled,
        diagnostics=diagnostics,
    )
