"""Next-turn resolver: round-robin and balanced-square strategies."""

from __future__ import annotations

from typing import Sequence

from sketchparty.rotation.models import (
    Assigned,
    AssignmentFailed,
    AssignmentResult,
    FailureKind,
    GameFinished,
    GameTurnSummary,
    Strategy,
    TurnContext,
    TurnPassingAlgorithm,
)
from sketchparty.rotation.seed import derive_seed
from sketchparty.rotation.square import (
    SquareProvider,
    WilliamsSquareProvider,
    position_for_letter,
    supports_balanced_square,
)


SEASON_ID_REQUIRED = "season id required"
SEQUENCE_COMPLETED = "game completed its scheduled sequence"


def assign_next_round_robin(completed_participant_id: str, participant_ids: Sequence[str]) -> AssignmentResult:
    """Hand the turn to the completer's successor in the participant list."""
    try:
        index = list(participant_ids).index(completed_participant_id)
    except ValueError:
        return AssignmentFailed(
            error=f"Completed turn participant not found in party participants: {completed_participant_id}",
            kind=FailureKind.CONTRACT,
        )
    next_participant = participant_ids[(index + 1) % len(participant_ids)]
    return Assigned(participant_id=next_participant, strategy=Strategy.ROUND_ROBIN)


def _fall_back(context: TurnContext, participant_ids: Sequence[str], reason: str) -> AssignmentResult:
    result = assign_next_round_robin(context.completed_turn_participant_id, participant_ids)
    note = f"{reason} Falling back to round-robin."
    if isinstance(result, AssignmentFailed):
        return AssignmentFailed(error=result.error, kind=result.kind, log=note)
    return Assigned(participant_id=result.participant_id, strategy=result.strategy, log=note)


def _game_position(game_id: str, games: Sequence[GameTurnSummary]) -> int | None:
    for position, game in enumerate(games):
        if game.game_id == game_id:
            return position
    return None


def assign_next(
    context: TurnContext,
    participant_ids: Sequence[str],
    all_games_in_party: Sequence[GameTurnSummary],
    provider: SquareProvider | None = None,
) -> AssignmentResult:
    """Pick the participant for the turn after ``context``.

    Parties of 4 to 26 participants follow a balanced square derived from the
    party season id: the game's position in ``all_games_in_party`` selects the
    row and the next order index selects the column. Smaller or larger parties
    use round-robin. Bookkeeping mismatches (unknown game, malformed square
    cell) fall back to round-robin with an explanatory ``log`` instead of
    failing.
    """
    n = len(participant_ids)
    if not supports_balanced_square(n):
        return assign_next_round_robin(context.completed_turn_participant_id, participant_ids)

    if not context.party_season_id:
        return AssignmentFailed(error=SEASON_ID_REQUIRED, kind=FailureKind.CONTRACT)

    square_provider = provider if provider is not None else WilliamsSquareProvider()
    seed = derive_seed(context.party_season_id)
    try:
        square = square_provider.generate(n, seed)
    except Exception as exc:
        return AssignmentFailed(error=f"Failed to generate balanced square: {exc}", kind=FailureKind.DEPENDENCY)

    game_index = _game_position(context.game_id, all_games_in_party)
    if game_index is None:
        return _fall_back(
            context,
            participant_ids,
            f"Game {context.game_id} not found among the party's games for balanced square assignment.",
        )

    next_column = context.completed_turn_order_index + 1
    if next_column >= n:
        return GameFinished(log=f"Game {context.game_id}: {SEQUENCE_COMPLETED}.")

    if game_index >= len(square) or next_column >= len(square[game_index]):
        return _fall_back(
            context,
            participant_ids,
            f"Balanced square has no cell at row {game_index}, column {next_column}.",
        )

    letter = square[game_index][next_column]
    position = position_for_letter(letter, n)
    if position is None:
        return _fall_back(context, participant_ids, f"Could not find participant for letter {letter!r}.")

    return Assigned(participant_id=participant_ids[position], strategy=Strategy.BALANCED_SQUARE)


def resolve_next_turn(
    algorithm: TurnPassingAlgorithm,
    context: TurnContext,
    participant_ids: Sequence[str],
    all_games_in_party: Sequence[GameTurnSummary] = (),
    provider: SquareProvider | None = None,
) -> AssignmentResult:
    """Dispatch on the party's configured turn passing algorithm."""
    if TurnPassingAlgorithm(algorithm) is TurnPassingAlgorithm.ROUND_ROBIN:
        return assign_next_round_robin(context.completed_turn_participant_id, participant_ids)
    return assign_next(context, participant_ids, all_games_in_party, provider=provider)


def is_game_complete(game: GameTurnSummary, participant_count: int) -> bool:
    """A party game ends once every participant could have played one turn."""
    return len(game.completed_turns()) >= participant_count
