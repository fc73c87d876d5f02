"""Tests for the heal and slow-down behaviours."""

from lanebattle.effects import apply_slow_down, step_heal
from lanebattle.unit import TEAM_OPPONENT, TEAM_PLAYER


class TestHeal:
    """Medic: heals every 5 ticks, 3 initial power, range 2."""

    def test_heal_after_five_ticks(self, state):
        medic = state.spawn("medic", TEAM_PLAYER, 0, 0)
        ally = state.spawn("dummy", TEAM_PLAYER, 0, 1)
        ally.health = 5

        results = [step_heal(state, medic) for _ in range(5)]

        assert results == [None, None, None, None, ally]
        assert ally.health == 8
        assert medic.heal_power == 2
        assert medic.heal_countdown == 5

    def test_heal_capped_at_max(self, state):
        medic = state.spawn("medic", TEAM_PLAYER, 0, 0)
        ally = state.spawn("dummy", TEAM_PLAYER, 0, 1)
        ally.health = 9
        medic.heal_countdown = 1

        step_heal(state, medic)
        assert ally.health == ally.max_health

    def test_power_decays_to_zero(self, state):
        medic = state.spawn("medic", TEAM_PLAYER, 0, 0)
        ally = state.spawn("wall", TEAM_PLAYER, 0, 1)
        ally.health = 10

        for _ in range(5 * 3):
            step_heal(state, medic)

        assert ally.health == 10 + 3 + 2 + 1
        assert medic.heal_power == 0

    def test_no_power_is_a_noop_but_resets_countdown(self, state):
        medic = state.spawn("medic", TEAM_PLAYER, 0, 0)
        ally = state.spawn("dummy", TEAM_PLAYER, 0, 1)
        ally.health = 5
        medic.heal_power = 0
        medic.heal_countdown = 1

        assert step_heal(state, medic) is None
        assert ally.health == 5
        assert medic.heal_countdown == 5

    def test_nobody_injured_keeps_power(self, state):
        medic = state.spawn("medic", TEAM_PLAYER, 0, 0)
        state.spawn("dummy", TEAM_PLAYER, 0, 1)
        medic.heal_countdown = 1

        assert step_heal(state, medic) is None
        assert medic.heal_power == 3
        assert medic.heal_countdown == 5

    def test_never_heals_self_enemies_or_far_allies(self, state):
        medic = state.spawn("medic", TEAM_PLAYER, 1, 1)
        enemy = state.spawn("dummy", TEAM_OPPONENT, 1, 2)
        far = state.spawn("dummy", TEAM_PLAYER, 1, 4)
        medic.health = enemy.health = far.health = 5
        medic.heal_countdown = 1

        assert step_heal(state, medic) is None
        assert (medic.health, enemy.health, far.health) == (5, 5, 5)

    def test_non_healer(self, state):
        unit = state.spawn("dummy", TEAM_PLAYER, 0, 0)
        assert step_heal(state, unit) is None


class TestSlowDown:
    """Scout: 10 ticks/step normally, 50 ticks/step (speed 2) within 3."""

    def test_no_enemy_close(self, state):
        scout = state.spawn("scout", TEAM_PLAYER, 0, 0)
        state.spawn("wall", TEAM_OPPONENT, 0, 6)

        assert not apply_slow_down(state, scout)
        assert scout.movement_ticks == 10
        assert scout.speed == 10

    def test_enemy_close_then_gone(self, state):
        scout = state.spawn("scout", TEAM_PLAYER, 0, 0)
        enemy = state.spawn("wall", TEAM_OPPONENT, 1, 2)

        assert apply_slow_down(state, scout)
        assert scout.movement_ticks == 50
        assert scout.speed == 2

        state.remove_unit(enemy.id)
        assert not apply_slow_down(state, scout)
        assert scout.movement_ticks == 10
        assert scout.speed == 10

    def test_switch_happens_once(self, state):
        scout = state.spawn("scout", TEAM_PLAYER, 0, 0)
        state.spawn("wall", TEAM_OPPONENT, 0, 3)

        apply_slow_down(state, scout)
        scout.movement_ticks = 77
        apply_slow_down(state, scout)
        assert scout.movement_ticks == 77

    def test_unit_without_behaviour(self, state):
        unit = state.spawn("dummy", TEAM_PLAYER, 0, 0)
        state.spawn("wall", TEAM_OPPONENT, 0, 1)
        assert not apply_slow_down(state, unit)
        assert unit.movement_ticks == 1000
