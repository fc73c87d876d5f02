# lanebattle/movement.py
from __future__ import annotations

from typing import TYPE_CHECKING, List

from lanebattle.targeting import enemies_within_range, enemy_in_lane_within, has_adjacent_enemy
from lanebattle.unit import TEAM_PLAYER, Unit

if TYPE_CHECKING:
    from lanebattle.state import SimulationState


def processing_order(state: "SimulationState") -> List[Unit]:
    """
    Fixed per-tick visiting order.

    Player units first, then opponent units. Inside a team the front-most
    unit (furthest along its direction) resolves first, so a column of
    teammates marches as a chain and each unit steps at most once per tick.
    Ties are broken by row, then creation order.
    """
    seq = {unit_id: i for i, unit_id in enumerate(state.units)}

    def key(u: Unit):
        team_rank = 0 if u.team == TEAM_PLAYER else 1
        return team_rank, -u.col * u.direction, u.row, seq[u.id]

    return sorted(state.living_units(), key=key)


def is_movement_blocked(state: "SimulationState", unit: Unit) -> bool:
    behavior = unit.definition.behavior

    if behavior.stop_on_adjacent_enemy and has_adjacent_enemy(state, unit):
        return True
    if behavior.stop_on_enemy_in_lane is not None and enemy_in_lane_within(state, unit, behavior.stop_on_enemy_in_lane):
        return True
    if behavior.stop_on_enemy_within is not None and enemies_within_range(state, unit, behavior.stop_on_enemy_within):
        return True

    # Melee units hold position while something is in reach
    if unit.is_melee() and has_adjacent_enemy(state, unit):
        return True

    return False


def step_movement(state: "SimulationState", unit: Unit) -> bool:
    """
    Tick the move countdown; when it fires, try one step along the lane.
    The countdown always resets, whether or not the unit moved.
    Returns True if the unit changed cell.
    """
    unit.move_countdown -= 1
    if unit.move_countdown > 0:
        return False

    moved = False
    if not is_movement_blocked(state, unit):
        nr, nc = unit.row, unit.col + unit.direction

        # Out of bounds or occupied -> stay
        if state.arena.is_empty(nr, nc) and state.arena.move(unit.id, (unit.row, unit.col), (nr, nc)):
            unit.row, unit.col = nr, nc
            moved = True

    unit.move_countdown = unit.movement_ticks
    return moved
