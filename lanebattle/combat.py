# lanebattle/combat.py
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from lanebattle.conditions import select_damage
from lanebattle.effects import apply_slow_down, step_heal
from lanebattle.movement import processing_order, step_movement
from lanebattle.projectiles import Projectile
from lanebattle.targeting import adjacent_enemies, distance, enemies_within_range
from lanebattle.unit import Unit

if TYPE_CHECKING:
    from lanebattle.state import SimulationState

logger = logging.getLogger(__name__)


# -----------------------------
# Melee
# -----------------------------

def pick_melee_target(state: "SimulationState", unit: Unit) -> Optional[Unit]:
    """Lowest-health adjacent enemy; ties go to the first in scan order."""
    target: Optional[Unit] = None
    for enemy in adjacent_enemies(state, unit):
        if target is None or enemy.health < target.health:
            target = enemy
    return target


def melee_damage(unit: Unit, target: Unit) -> int:
    attack = unit.definition.attack
    return select_damage(attack.rules, attack.damage, target)


def melee_attack(state: "SimulationState", unit: Unit) -> bool:
    target = pick_melee_target(state, unit)
    if target is None:
        return False

    dmg = melee_damage(unit, target)
    killed = state.damage_unit(target, dmg)
    logger.debug(
        "tick %d: %s hits %s for %d%s",
        state.tick, unit.id, target.id, dmg, " (killed)" if killed else "",
    )
    return True


# -----------------------------
# Ranged
# -----------------------------

def ranged_attack(state: "SimulationState", unit: Unit) -> Optional[Projectile]:
    """Fire at a random enemy in range. Damage waits for arrival."""
    attack = unit.definition.attack
    targets = enemies_within_range(state, unit, attack.range_manhattan)
    if not targets:
        return None

    target = state.rng.choice(targets)
    speed = attack.projectile_speed or state.config.default_projectile_speed

    projectile = Projectile(
        id=state.projectiles.new_id(),
        origin_row=unit.row,
        origin_col=unit.col,
        target_id=target.id,
        target_row=target.row,
        target_col=target.col,
        total_ticks=distance(unit, target) * speed,
        damage=attack.damage,
        team=unit.team,
    )
    state.projectiles.launch(projectile)
    logger.debug(
        "tick %d: %s fires %s at %s (%d ticks)",
        state.tick, unit.id, projectile.id, target.id, projectile.total_ticks,
    )
    return projectile


# -----------------------------
# Attack step
# -----------------------------

def resolve_attack(state: "SimulationState", unit: Unit) -> bool:
    attack = unit.definition.attack
    if attack is None:
        return False
    if attack.is_melee:
        return melee_attack(state, unit)
    return ranged_attack(state, unit) is not None


def step_attack(state: "SimulationState", unit: Unit) -> bool:
    """
    Tick the attack countdown and attack when it fires.
    Returns True if an attack was made (hit or launch).
    """
    attack = unit.definition.attack
    if attack is None or unit.attack_countdown is None:
        return False

    unit.attack_countdown -= 1
    if unit.attack_countdown > 0:
        return False

    attacked = resolve_attack(state, unit)
    if attacked or state.config.reset_cooldown_on_miss:
        unit.attack_countdown = attack.frequency_ticks
    else:
        unit.attack_countdown = 0
    return attacked


# -----------------------------
# Per-tick unit pass
# -----------------------------

def resolve_units(state: "SimulationState") -> List[Unit]:
    """
    One tick of slow-down, movement, attack and heal for every unit alive at
    the start of the tick, in processing_order.

    A unit killed earlier in this tick is skipped, except that with
    config.simultaneous_exchange a melee unit still lands its strike.
    Dead ranged units never launch.
    Returns the units that fell during the pass.
    """
    order = processing_order(state)

    for unit in order:
        if not state.has_unit(unit.id):
            if state.config.simultaneous_exchange and unit.is_melee():
                step_attack(state, unit)
            continue

        apply_slow_down(state, unit)
        step_movement(state, unit)
        step_attack(state, unit)
        step_heal(state, unit)

    return [u for u in order if not state.has_unit(u.id)]
