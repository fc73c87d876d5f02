# lanebattle/state.py
from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional

from lanebattle.arena import Arena
from lanebattle.config import BattleConfig
from lanebattle.definitions import DefinitionRegistry
from lanebattle.projectiles import ProjectileTracker
from lanebattle.unit import Unit, make_unit_from_definition

logger = logging.getLogger(__name__)


class SimulationState:
    """
    Everything one battle mutates, in one place:
      - units: instance id -> Unit (insertion order = creation order)
      - arena: occupancy grid
      - projectiles: in-flight tracker
      - rng: the only randomness source (seeded from config)
    The registry is shared and read-only.
    """

    def __init__(self, registry: DefinitionRegistry, config: Optional[BattleConfig] = None) -> None:
        self.registry = registry
        self.config = config or BattleConfig()
        self.arena = Arena(
            width=self.config.cols,
            height=self.config.rows,
            player_zone_cols=self.config.player_zone_cols,
            opponent_zone_cols=self.config.opponent_zone_cols,
        )
        self.units: Dict[str, Unit] = {}
        self.projectiles = ProjectileTracker()
        self.rng = random.Random(self.config.seed)
        self.tick = 0
        self._unit_counter = 0

    # -----------------------------
    # Unit store
    # -----------------------------
    def new_unit_id(self) -> str:
        self._unit_counter += 1
        return f"u{self._unit_counter}"

    def spawn(self, type_id: str, team: str, row: int, col: int) -> Unit:
        """Create and place a unit. Caller has validated the cell."""
        unit = make_unit_from_definition(self.new_unit_id(), self.registry[type_id], team, row, col)
        if not self.arena.place(row, col, unit.id):
            raise ValueError(f"Cell ({row}, {col}) is not free")
        self.units[unit.id] = unit
        return unit

    def get_unit(self, unit_id: Optional[str]) -> Optional[Unit]:
        if unit_id is None:
            return None
        return self.units.get(unit_id)

    def unit_at(self, row: int, col: int) -> Optional[Unit]:
        return self.get_unit(self.arena.get(row, col))

    def has_unit(self, unit_id: str) -> bool:
        return unit_id in self.units

    def living_units(self, team: Optional[str] = None) -> List[Unit]:
        return [
            u for u in self.units.values()
            if u.is_alive() and (team is None or u.team == team)
        ]

    def remove_unit(self, unit_id: str) -> bool:
        """Drop a unit from the store and the grid. Safe to call twice."""
        unit = self.units.pop(unit_id, None)
        if unit is None:
            return False
        self.arena.vacate(unit.row, unit.col, unit.id)
        return True

    def damage_unit(self, unit: Unit, dmg: int) -> bool:
        """
        Apply damage; a unit reaching 0 health is removed immediately.
        Returns True if this hit killed it. No-op for already-removed units.
        """
        if unit.id not in self.units:
            return False

        unit.take_damage(dmg)
        if unit.health > 0:
            return False

        self.remove_unit(unit.id)
        logger.debug("tick %d: %s (%s) destroyed", self.tick, unit.id, unit.type_id)
        return True

    # -----------------------------
    # Reset
    # -----------------------------
    def reset(self) -> None:
        self.units = {}
        self.arena.clear()
        self.projectiles.clear()
        self.rng = random.Random(self.config.seed)
        self.tick = 0
        self._unit_counter = 0
