# lanebattle/snapshot.py
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from lanebattle.arena import ZONE_NEUTRAL, ZONE_OPPONENT, ZONE_PLAYER
from lanebattle.projectiles import projectile_position

if TYPE_CHECKING:
    from lanebattle.state import SimulationState


@dataclass(frozen=True)
class UnitView:
    id: str
    type_id: str
    emoji: str
    team: str
    row: int
    col: int
    health: int
    max_health: int


@dataclass(frozen=True)
class ProjectileView:
    id: str
    team: str
    origin: Tuple[int, int]
    target: Tuple[int, int]
    progress: float

    @property
    def position(self) -> Tuple[float, float]:
        return projectile_position(self.origin, self.target, self.progress)


@dataclass(frozen=True)
class BattleSnapshot:
    """Everything a renderer may look at. Copies only, never live state."""

    tick: int
    phase: str
    outcome: Optional[str]
    rows: int
    cols: int
    player_zone_cols: int
    opponent_zone_cols: int
    units: List[UnitView] = field(default_factory=list)
    projectiles: List[ProjectileView] = field(default_factory=list)

    def zone_of(self, col: int) -> str:
        if col < self.player_zone_cols:
            return ZONE_PLAYER
        if col >= self.cols - self.opponent_zone_cols:
            return ZONE_OPPONENT
        return ZONE_NEUTRAL

    def unit_at(self, row: int, col: int) -> Optional[UnitView]:
        for u in self.units:
            if u.row == row and u.col == col:
                return u
        return None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def build_snapshot(state: "SimulationState", phase: str, outcome: Optional[str] = None) -> BattleSnapshot:
    units = [
        UnitView(
            id=u.id,
            type_id=u.type_id,
            emoji=u.emoji,
            team=u.team,
            row=u.row,
            col=u.col,
            health=u.health,
            max_health=u.max_health,
        )
        for u in state.living_units()
    ]
    projectiles = [
        ProjectileView(
            id=p.id,
            team=p.team,
            origin=p.origin,
            target=p.target_cell,
            progress=p.progress,
        )
        for p in state.projectiles.in_flight
    ]
    return BattleSnapshot(
        tick=state.tick,
        phase=phase,
        outcome=outcome,
        rows=state.arena.height,
        cols=state.arena.width,
        player_zone_cols=state.arena.player_zone_cols,
        opponent_zone_cols=state.arena.opponent_zone_cols,
        units=units,
        projectiles=projectiles,
    )
