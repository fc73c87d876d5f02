# lanebattle/projectiles.py
"""In-flight projectiles: launch, per-tick flight and arrival damage."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Tuple

if TYPE_CHECKING:
    from lanebattle.state import SimulationState

logger = logging.getLogger(__name__)


@dataclass
class Projectile:
    id: str
    origin_row: int
    origin_col: int
    target_id: str
    target_row: int
    target_col: int
    total_ticks: int
    damage: int
    team: str
    elapsed_ticks: int = 0

    @property
    def progress(self) -> float:
        """Render-only flight ratio in [0, 1]."""
        if self.total_ticks <= 0:
            return 1.0
        return min(self.elapsed_ticks / self.total_ticks, 1.0)

    @property
    def arrived(self) -> bool:
        return self.elapsed_ticks >= self.total_ticks

    @property
    def origin(self) -> Tuple[int, int]:
        return self.origin_row, self.origin_col

    @property
    def target_cell(self) -> Tuple[int, int]:
        return self.target_row, self.target_col


def projectile_position(origin: Tuple[int, int], target: Tuple[int, int], progress: float) -> Tuple[float, float]:
    """Straight-line (row, col) position at a given progress ratio."""
    p = max(0.0, min(1.0, progress))
    return (
        origin[0] + (target[0] - origin[0]) * p,
        origin[1] + (target[1] - origin[1]) * p,
    )


class ProjectileTracker:
    """
    Owns every projectile between launch and arrival.

    Launches made during a tick wait in `_pending` and only join the flight
    set after that tick's advance, so a shot fired on tick T first moves on
    T+1 and lands on tick T + total_ticks.
    """

    def __init__(self) -> None:
        self._in_flight: List[Projectile] = []
        self._pending: List[Projectile] = []
        self._counter = 0

    def new_id(self) -> str:
        self._counter += 1
        return f"p{self._counter}"

    def launch(self, projectile: Projectile) -> None:
        self._pending.append(projectile)

    @property
    def in_flight(self) -> List[Projectile]:
        """Every live projectile, oldest first (pending launches last)."""
        return self._in_flight + self._pending

    def __len__(self) -> int:
        return len(self._in_flight) + len(self._pending)

    def clear(self) -> None:
        self._in_flight = []
        self._pending = []
        self._counter = 0

    def advance(self, state: "SimulationState") -> int:
        """
        Move every projectile one tick and resolve arrivals.
        Returns the number of projectiles that landed damage.
        """
        hits = 0
        still_flying: List[Projectile] = []

        for p in self._in_flight:
            p.elapsed_ticks += 1
            if not p.arrived:
                still_flying.append(p)
                continue

            if self._resolve_arrival(state, p):
                hits += 1

        self._in_flight = still_flying + self._pending
        self._pending = []
        return hits

    @staticmethod
    def _resolve_arrival(state: "SimulationState", p: Projectile) -> bool:
        target = state.get_unit(p.target_id)

        # Target died, moved away, or is (somehow) a teammate -> no damage
        if target is None or target.team == p.team:
            logger.debug("Projectile %s missed: target %s gone", p.id, p.target_id)
            return False
        if target.position != p.target_cell or state.arena.get(*p.target_cell) != target.id:
            logger.debug("Projectile %s missed: target %s left %s", p.id, p.target_id, p.target_cell)
            return False

        state.damage_unit(target, p.damage)
        return True
