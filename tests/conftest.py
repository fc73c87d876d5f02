"""Shared fixtures for the lane battle tests."""

import pytest

from lanebattle.config import BattleConfig
from lanebattle.definitions import registry_from_data
from lanebattle.match import Match
from lanebattle.state import SimulationState


# =============================================================================
# Unit data builders
# =============================================================================

def unit_data(type_id, health=10, speed=10, movement_ticks=1000, attack=None, behavior=None):
    """A raw unit definition as it would appear in a units file."""
    data = {
        "id": type_id,
        "name": type_id.title(),
        "stats": {"health": health, "speed": speed, "movement_ticks": movement_ticks},
    }
    if attack is not None:
        data["attack"] = attack
    if behavior is not None:
        data["behavior"] = behavior
    return data


def melee(damage=5, frequency=1, rules=None):
    attack = {"type": "melee", "damage": damage, "frequency_ticks": frequency}
    if rules is not None:
        attack["rules"] = rules
    return attack


def ranged(damage=4, frequency=1000, reach=5, projectile_speed=50):
    attack = {"type": "ranged", "damage": damage, "frequency_ticks": frequency, "range_manhattan": reach}
    if projectile_speed is not None:
        attack["projectile_speed"] = projectile_speed
    return attack


FROZEN = 100000  # movement_ticks long enough that a unit never steps in a test

TEST_UNITS = [
    unit_data("brawler", health=10, attack=melee(damage=5, frequency=1)),
    unit_data("slugger", health=10, movement_ticks=FROZEN, attack=melee(damage=3, frequency=4)),
    unit_data("dummy", health=10),
    unit_data("sprinter", health=10, speed=30, movement_ticks=5),
    unit_data("wall", health=100, movement_ticks=FROZEN),
    unit_data("archer", health=10, movement_ticks=FROZEN, attack=ranged()),
    unit_data("slinger", health=10, movement_ticks=FROZEN, attack=ranged(damage=2, reach=3, projectile_speed=None)),
    unit_data(
        "medic",
        health=10,
        movement_ticks=FROZEN,
        behavior={"heal": {"frequency_ticks": 5, "initial_power": 3, "range_manhattan": 2}},
    ),
    unit_data(
        "picky",
        health=10,
        movement_ticks=FROZEN,
        attack=melee(
            damage=5,
            rules=[
                {"condition": "target_speed > 20", "damage": 2},
                {"condition": "default", "damage": 7},
            ],
        ),
    ),
    unit_data(
        "scout",
        health=10,
        movement_ticks=10,
        behavior={"slow_down": {"condition_range_manhattan": 3, "new_movement_ticks": 50, "new_speed": 2}},
    ),
    unit_data("spotter", movement_ticks=1, behavior={"stop_on_enemy_in_lane": 3}),
    unit_data("cautious", movement_ticks=1, behavior={"stop_on_enemy_within": 2}),
    unit_data("guard", movement_ticks=1, behavior={"stop_on_adjacent_enemy": True}),
]


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def registry():
    return registry_from_data({"units": TEST_UNITS})


@pytest.fixture
def small_config():
    """3 lanes x 12 columns: player zone 0-3, neutral 4-7, opponent zone 8-11."""
    return BattleConfig(rows=3, cols=12, player_zone_cols=4, opponent_zone_cols=4, seed=7)


@pytest.fixture
def duel_config():
    """One lane, two cells: the two units start adjacent."""
    return BattleConfig(rows=1, cols=2, player_zone_cols=1, opponent_zone_cols=1, seed=1)


@pytest.fixture
def state(registry, small_config):
    return SimulationState(registry, small_config)


@pytest.fixture
def match(registry, small_config):
    return Match(registry, small_config)


@pytest.fixture
def make_match(registry):
    """Factory for matches with a custom board or policy."""
    def _make(**overrides):
        return Match(registry, BattleConfig(**overrides))
    return _make
