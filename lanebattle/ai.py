# lanebattle/ai.py
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from lanebattle.rules import is_valid_deploy
from lanebattle.unit import TEAM_OPPONENT, Unit

logger = logging.getLogger(__name__)


def spawn_opponent_wave(match, type_ids: Optional[Sequence[str]] = None) -> List[Unit]:
    """
    Simple AI:
    - one unit per lane, in the last column
    - unit type chosen at random (match rng) from type_ids, default all types
    - lanes whose last cell is taken are skipped
    """
    state = match.state
    pool = list(type_ids) if type_ids else state.registry.ids()
    unknown = [t for t in pool if t not in state.registry]
    if unknown:
        raise ValueError(f"Unknown unit types for wave: {', '.join(unknown)}")

    col = state.arena.width - 1
    placed: List[Unit] = []

    for row in range(state.arena.height):
        type_id = state.rng.choice(pool)
        if not is_valid_deploy(state, type_id, TEAM_OPPONENT, row, col):
            continue
        placed.append(match.place_unit(type_id, TEAM_OPPONENT, row, col))

    logger.info("Opponent wave: %d units", len(placed))
    return placed
