# lanebattle/effects.py
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from lanebattle.targeting import injured_allies_within, nearest_enemy_distance
from lanebattle.unit import Unit

if TYPE_CHECKING:
    from lanebattle.state import SimulationState

logger = logging.getLogger(__name__)


# -----------------------------
# Slow-down (proximity stat override)
# -----------------------------

def apply_slow_down(state: "SimulationState", unit: Unit) -> bool:
    """
    Swap to the slowed movement values while an enemy is close, restore the
    base values once it is not. Each switch happens once per transition.
    Returns the unit's slowed flag.
    """
    slow = unit.definition.behavior.slow_down
    if slow is None:
        return unit.slowed

    nearest = nearest_enemy_distance(state, unit)
    close = nearest is not None and nearest <= slow.condition_range_manhattan

    if close and not unit.slowed:
        unit.slowed = True
        unit.movement_ticks = slow.new_movement_ticks
        unit.speed = slow.new_speed
    elif not close and unit.slowed:
        unit.slowed = False
        unit.movement_ticks = unit.definition.stats.movement_ticks
        unit.speed = unit.definition.stats.speed

    return unit.slowed


# -----------------------------
# Heal (decaying support ability)
# -----------------------------

def step_heal(state: "SimulationState", unit: Unit) -> Optional[Unit]:
    """
    Tick the heal countdown; when it fires, heal one random injured ally in
    range by the current heal power and spend one point of power.

    The countdown resets whether or not anyone was healed; with no power
    left the attempt is a no-op. Returns the healed ally, if any.
    """
    heal = unit.definition.behavior.heal
    if heal is None or unit.heal_countdown is None:
        return None

    unit.heal_countdown -= 1
    if unit.heal_countdown > 0:
        return None
    unit.heal_countdown = heal.frequency_ticks

    if unit.heal_power <= 0:
        return None

    candidates = injured_allies_within(state, unit, heal.range_manhattan)
    if not candidates:
        return None

    target = state.rng.choice(candidates)
    restored = target.heal(unit.heal_power)
    unit.heal_power = max(0, unit.heal_power - 1)

    logger.debug(
        "tick %d: %s healed %s for %d (power left %d)",
        state.tick, unit.id, target.id, restored, unit.heal_power,
    )
    return target
