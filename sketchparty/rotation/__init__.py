"""Turn-rotation engine package."""

from .config import RotationSettings, load_settings
from .engine import assign_next, assign_next_round_robin, is_game_complete, resolve_next_turn
from .matrix import InteractionCounts, InteractionMatrix, build_matrix
from .models import (
    Assigned,
    AssignmentFailed,
    AssignmentResult,
    FailureKind,
    GameFinished,
    GameTurnSummary,
    Strategy,
    TurnContext,
    TurnPassingAlgorithm,
    TurnRecord,
)
from .seed import derive_seed
from .simulator import SimulationOutcome, simulate_party
from .square import SquareGenerationError, SquareProvider, WilliamsSquareProvider

__all__ = [
    "assign_next",
    "assign_next_round_robin",
    "Assigned",
    "AssignmentFailed",
    "AssignmentResult",
    "build_matrix",
    "derive_seed",
    "FailureKind",
    "GameFinished",
    "GameTurnSummary",
    "InteractionCounts",
    "InteractionMatrix",
    "is_game_complete",
    "load_settings",
    "resolve_next_turn",
    "RotationSettings",
    "simulate_party",
    "SimulationOutcome",
    "SquareGenerationError",
    "SquareProvider",
    "Strategy",
    "TurnContext",
    "TurnPassingAlgorithm",
    "TurnRecord",
    "WilliamsSquareProvider",
]
