"""Interaction matrix: who followed whom, split by turn type."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from sketchparty.rotation.models import GameTurnSummary


logger = logging.getLogger(__name__)


@dataclass
class InteractionCounts:
    writing_count: int = 0
    drawing_count: int = 0

    @property
    def total(self) -> int:
        return self.writing_count + self.drawing_count


@dataclass(frozen=True)
class SkippedPair:
    game_id: str
    follower_id: str
    followed_id: str


@dataclass
class InteractionMatrix:
    participant_ids: tuple[str, ...]
    cells: dict[tuple[str, str], InteractionCounts]
    skipped: list[SkippedPair] = field(default_factory=list)

    def get(self, follower_id: str, followed_id: str) -> InteractionCounts:
        return self.cells[(follower_id, followed_id)]

    def total(self) -> int:
        return sum(counts.total for counts in self.cells.values())

    def unmet_pairs(self) -> list[tuple[str, str]]:
        """Distinct (follower, followed) pairs that never appeared back to back."""
        return [
            (follower, followed)
            for (follower, followed), counts in self.cells.items()
            if follower != followed and counts.total == 0
        ]

    def format_table(self) -> str:
        ids = self.participant_ids
        width = max([len(pid) for pid in ids] + [8]) + 2
        lines = ["Interaction Matrix (follower row, followed column; writing/drawing):"]
        lines.append("".ljust(width) + "".join(pid.rjust(width) for pid in ids))
        for follower in ids:
            cells: list[str] = []
            for followed in ids:
                counts = self.cells[(follower, followed)]
                cells.append(f"{counts.writing_count}/{counts.drawing_count}".rjust(width))
            lines.append(follower.ljust(width) + "".join(cells))
        return "\n".join(lines) + "\n"


def build_matrix(games: Iterable[GameTurnSummary], participant_ids: Sequence[str]) -> InteractionMatrix:
    """Count, for every ordered participant pair, how often one's turn directly followed the other's.

    Only completed turns are considered, in order-index order. A pair naming
    a participant outside ``participant_ids`` is skipped and logged.
    """
    ids = tuple(participant_ids)
    cells = {(follower, followed): InteractionCounts() for follower in ids for followed in ids}
    matrix = InteractionMatrix(participant_ids=ids, cells=cells)

    for game in games:
        completed = game.completed_turns()
        for followed_turn, follower_turn in zip(completed, completed[1:]):
            key = (follower_turn.participant_id, followed_turn.participant_id)
            counts = cells.get(key)
            if counts is None:
                logger.warning(
                    "Missing matrix entry for %s -> %s in game %s; known participants: %s",
                    key[0],
                    key[1],
                    game.game_id,
                    list(ids),
                )
                matrix.skipped.append(SkippedPair(game_id=game.game_id, follower_id=key[0], followed_id=key[1]))
                continue
            if follower_turn.is_drawing:
                counts.drawing_count += 1
            else:
                counts.writing_count += 1

    return matrix
