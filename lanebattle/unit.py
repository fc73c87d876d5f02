# lanebattle/unit.py
from __future__ import annotations

from typing import Optional

from lanebattle.definitions import UnitDefinition


# ---- Team constants (helps prevent bugs) ----
TEAM_PLAYER = "player"
TEAM_OPPONENT = "opponent"
TEAMS = (TEAM_PLAYER, TEAM_OPPONENT)


def team_direction(team: str) -> int:
    """Player units march right (+1), opponent units left (-1)."""
    if team == TEAM_PLAYER:
        return 1
    if team == TEAM_OPPONENT:
        return -1
    raise ValueError(f"Unknown team: {team!r}")


class Unit:
    """
    Runtime state of one placed unit.

    Countdowns tick down by one per simulated tick and fire when they reach 0.
    speed / movement_ticks start at the definition values and are swapped by
    the slow-down behaviour; max_health never changes.
    """

    def __init__(self, unit_id: str, definition: UnitDefinition, team: str, row: int, col: int) -> None:
        self.id = unit_id
        self.definition = definition
        self.team = team
        self.row = row
        self.col = col
        self.direction = team_direction(team)

        stats = definition.stats
        self.max_health = stats.health
        self.health = stats.health
        self.speed = stats.speed
        self.movement_ticks = stats.movement_ticks
        self.move_countdown = stats.movement_ticks
        self.slowed = False

        attack = definition.attack
        self.attack_countdown: Optional[int] = attack.frequency_ticks if attack else None

        heal = definition.behavior.heal
        self.heal_countdown: Optional[int] = heal.frequency_ticks if heal else None
        self.heal_power = heal.initial_power if heal else 0

    # -----------------------------
    # Identity helpers
    # -----------------------------
    @property
    def type_id(self) -> str:
        return self.definition.id

    @property
    def emoji(self) -> str:
        return self.definition.emoji

    @property
    def position(self) -> tuple[int, int]:
        return self.row, self.col

    def is_alive(self) -> bool:
        return self.health > 0

    def is_melee(self) -> bool:
        return self.definition.attack is not None and self.definition.attack.is_melee

    def is_ranged(self) -> bool:
        return self.definition.attack is not None and self.definition.attack.is_ranged

    # -----------------------------
    # Health
    # -----------------------------
    def take_damage(self, dmg: int) -> None:
        self.health = max(0, self.health - max(0, dmg))

    def heal(self, amount: int) -> int:
        """Restore health up to max. Returns the amount actually restored."""
        before = self.health
        self.health = min(self.max_health, self.health + max(0, amount))
        return self.health - before

    def __repr__(self) -> str:
        return f"Unit({self.id!r}, {self.type_id!r}, {self.team}, r{self.row}c{self.col}, hp={self.health})"


def make_unit_from_definition(unit_id: str, definition: UnitDefinition, team: str, row: int, col: int) -> Unit:
    """Create a fresh Unit at full health with all countdowns primed."""
    if team not in TEAMS:
        raise ValueError(f"Unknown team: {team!r}")
    return Unit(unit_id, definition, team, row, col)
