"""Configuration helpers for simulation and tooling runtime."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class RotationSettings:
    sim_participants: int
    sim_target_games: int
    sim_season_id: str
    sim_seed: int | None
    log_level: str


def load_settings() -> RotationSettings:
    seed_raw = os.getenv("SKETCHPARTY_SIM_SEED")
    return RotationSettings(
        sim_participants=int(os.getenv("SKETCHPARTY_SIM_PLAYERS", "12")),
        sim_target_games=int(os.getenv("SKETCHPARTY_SIM_TARGET_GAMES", "8")),
        sim_season_id=os.getenv("SKETCHPARTY_SIM_SEASON_ID", "mock-season"),
        sim_seed=int(seed_raw) if seed_raw else None,
        log_level=os.getenv("SKETCHPARTY_LOG_LEVEL", "INFO").upper(),
    )
