# lanebattle/targeting.py
"""
Read-only queries over the current unit positions.
Nothing here mutates the grid or the unit store.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from lanebattle.rules import is_enemy
from lanebattle.unit import Unit

if TYPE_CHECKING:
    from lanebattle.state import SimulationState


# Neighbour scan order: right, left, down, up. Melee ties go to the first hit.
NEIGHBOUR_OFFSETS = ((0, 1), (0, -1), (1, 0), (-1, 0))


def manhattan(a_row: int, a_col: int, b_row: int, b_col: int) -> int:
    return abs(a_row - b_row) + abs(a_col - b_col)


def distance(a: Unit, b: Unit) -> int:
    return manhattan(a.row, a.col, b.row, b.col)


def living_enemies(state: "SimulationState", unit: Unit) -> List[Unit]:
    return [
        other for other in state.units.values()
        if other.is_alive() and is_enemy(unit.team, other.team)
    ]


def nearest_enemy_distance(state: "SimulationState", unit: Unit) -> Optional[int]:
    best: Optional[int] = None
    for enemy in living_enemies(state, unit):
        d = distance(unit, enemy)
        if best is None or d < best:
            best = d
    return best


def has_adjacent_enemy(state: "SimulationState", unit: Unit) -> bool:
    return any(distance(unit, e) == 1 for e in living_enemies(state, unit))


def enemy_in_lane_within(state: "SimulationState", unit: Unit, reach: int) -> bool:
    return any(
        e.row == unit.row and abs(e.col - unit.col) <= reach
        for e in living_enemies(state, unit)
    )


def enemies_within_range(state: "SimulationState", unit: Unit, reach: int) -> List[Unit]:
    """Living enemies at Manhattan distance <= reach, in creation order."""
    return [e for e in living_enemies(state, unit) if distance(unit, e) <= reach]


def adjacent_enemies(state: "SimulationState", unit: Unit) -> List[Unit]:
    """Living enemies on the four neighbour cells, in NEIGHBOUR_OFFSETS order."""
    found: List[Unit] = []
    for dr, dc in NEIGHBOUR_OFFSETS:
        other = state.unit_at(unit.row + dr, unit.col + dc)
        if other is not None and other.is_alive() and is_enemy(unit.team, other.team):
            found.append(other)
    return found


def injured_allies_within(state: "SimulationState", unit: Unit, reach: int) -> List[Unit]:
    """Teammates (not unit itself) below max health within reach."""
    return [
        other for other in state.units.values()
        if other.id != unit.id
        and other.team == unit.team
        and other.is_alive()
        and other.health < other.max_health
        and distance(unit, other) <= reach
    ]
