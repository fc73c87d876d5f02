# lanebattle/rules.py
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from lanebattle.unit import TEAM_OPPONENT, TEAM_PLAYER, TEAMS

if TYPE_CHECKING:
    from lanebattle.state import SimulationState


# -----------------------------
# Ownership / sides
# -----------------------------

def is_enemy(team_a: Optional[str], team_b: Optional[str]) -> bool:
    if team_a is None or team_b is None:
        return False
    return team_a != team_b


# -----------------------------
# Deploy rules
# -----------------------------

REJECT_UNKNOWN_TYPE = "unknown_type"
REJECT_UNKNOWN_TEAM = "unknown_team"
REJECT_OUT_OF_BOUNDS = "out_of_bounds"
REJECT_OCCUPIED = "occupied"
REJECT_WRONG_ZONE = "wrong_zone"
REJECT_NOT_IN_SETUP = "not_in_setup"

REJECT_MESSAGES = {
    REJECT_UNKNOWN_TYPE: "Unknown unit type.",
    REJECT_UNKNOWN_TEAM: "Unknown team.",
    REJECT_OUT_OF_BOUNDS: "That cell is off the board.",
    REJECT_OCCUPIED: "That cell is already occupied.",
    REJECT_WRONG_ZONE: "That cell is outside your deploy zone.",
    REJECT_NOT_IN_SETUP: "Units can only be placed during setup.",
}


def is_on_team_side(arena, team: str, col: int) -> bool:
    """
    The board is horizontal:
      - player owns the LEFT zone
      - opponent owns the RIGHT zone
    The neutral middle accepts nobody.
    """
    if team == TEAM_PLAYER:
        return arena.is_player_zone(col)
    if team == TEAM_OPPONENT:
        return arena.is_opponent_zone(col)
    return False


def check_deploy(state: "SimulationState", type_id: str, team: str, row: int, col: int) -> Optional[str]:
    """
    Return None if the placement is valid, else a REJECT_* reason.
    Order: type, team, bounds, occupancy, zone.
    """
    if type_id not in state.registry:
        return REJECT_UNKNOWN_TYPE
    if team not in TEAMS:
        return REJECT_UNKNOWN_TEAM

    arena = state.arena
    if not arena.in_bounds(row, col):
        return REJECT_OUT_OF_BOUNDS
    if arena.get(row, col) is not None:
        return REJECT_OCCUPIED
    if not is_on_team_side(arena, team, col):
        return REJECT_WRONG_ZONE

    return None


def is_valid_deploy(state: "SimulationState", type_id: str, team: str, row: int, col: int) -> bool:
    return check_deploy(state, type_id, team, row, col) is None


# -----------------------------
# Victory
# -----------------------------

OUTCOME_VICTORY = "victory"
OUTCOME_DEFEAT = "defeat"


def evaluate_victory(state: "SimulationState") -> Optional[str]:
    """
    Checked once per tick after units and projectiles.

    Defeat is tested first: no living player units is a defeat even if the
    opponent was wiped out in the same tick.
    """
    if not state.living_units(TEAM_PLAYER):
        return OUTCOME_DEFEAT

    if not state.living_units(TEAM_OPPONENT):
        return OUTCOME_VICTORY

    return None
