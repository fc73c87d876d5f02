"""Tests for projectile flight and arrival."""

import pytest

from lanebattle.combat import ranged_attack
from lanebattle.projectiles import Projectile, ProjectileTracker, projectile_position
from lanebattle.unit import TEAM_OPPONENT, TEAM_PLAYER


def make_projectile(tracker, target, total_ticks=3, damage=4, team=TEAM_PLAYER, origin=(0, 0)):
    return Projectile(
        id=tracker.new_id(),
        origin_row=origin[0],
        origin_col=origin[1],
        target_id=target.id,
        target_row=target.row,
        target_col=target.col,
        total_ticks=total_ticks,
        damage=damage,
        team=team,
    )


class TestFlightTiming:

    def test_lands_exactly_150_ticks_after_launch(self, make_match):
        # player zone 0-3, opponent zone 4-7
        match = make_match(rows=1, cols=8, player_zone_cols=4, opponent_zone_cols=4, seed=3)
        archer = match.place_unit("archer", TEAM_PLAYER, 0, 1)
        wall = match.place_unit("wall", TEAM_OPPONENT, 0, 4)
        archer.attack_countdown = 1
        match.start_battle()

        match.advance(1)
        assert len(match.state.projectiles) == 1
        assert wall.health == 100

        match.advance(149)
        assert match.tick == 150
        assert wall.health == 100

        match.advance(1)
        assert match.tick == 151
        assert wall.health == 96
        assert len(match.state.projectiles) == 0

    def test_not_moved_on_launch_tick(self, state):
        target = state.spawn("wall", TEAM_OPPONENT, 0, 3)
        tracker = state.projectiles
        p = make_projectile(tracker, target)

        tracker.launch(p)
        tracker.advance(state)
        assert p.elapsed_ticks == 0
        assert tracker.in_flight == [p]

        tracker.advance(state)
        assert p.elapsed_ticks == 1


class TestArrival:

    def test_hit(self, state):
        target = state.spawn("wall", TEAM_OPPONENT, 0, 3)
        tracker = state.projectiles
        tracker.launch(make_projectile(tracker, target, total_ticks=1))

        assert tracker.advance(state) == 0
        assert tracker.advance(state) == 1
        assert target.health == 96
        assert len(tracker) == 0

    def test_miss_when_target_moved(self, state):
        target = state.spawn("wall", TEAM_OPPONENT, 0, 3)
        tracker = state.projectiles
        tracker.launch(make_projectile(tracker, target, total_ticks=1))
        tracker.advance(state)

        assert state.arena.move(target.id, (0, 3), (0, 2))
        target.row, target.col = 0, 2

        assert tracker.advance(state) == 0
        assert target.health == 100
        assert len(tracker) == 0

    def test_miss_when_target_gone(self, state):
        target = state.spawn("wall", TEAM_OPPONENT, 0, 3)
        tracker = state.projectiles
        tracker.launch(make_projectile(tracker, target, total_ticks=1))
        tracker.advance(state)

        state.remove_unit(target.id)
        assert tracker.advance(state) == 0
        assert len(tracker) == 0

    def test_lethal_hit_removes_target(self, state):
        target = state.spawn("dummy", TEAM_OPPONENT, 0, 3)
        target.health = 4
        tracker = state.projectiles
        tracker.launch(make_projectile(tracker, target, total_ticks=1))

        tracker.advance(state)
        tracker.advance(state)
        assert not state.has_unit(target.id)
        assert state.arena.get(0, 3) is None

    def test_ranged_attack_then_flight(self, state):
        archer = state.spawn("archer", TEAM_PLAYER, 0, 1)
        target = state.spawn("wall", TEAM_OPPONENT, 0, 2)

        ranged_attack(state, archer)
        for _ in range(50):
            state.projectiles.advance(state)
        assert target.health == 100

        state.projectiles.advance(state)
        assert target.health == 96


class TestTracker:

    def test_ids_are_sequential(self):
        tracker = ProjectileTracker()
        assert [tracker.new_id(), tracker.new_id()] == ["p1", "p2"]
        tracker.clear()
        assert tracker.new_id() == "p1"

    def test_progress(self, state):
        target = state.spawn("wall", TEAM_OPPONENT, 0, 3)
        p = make_projectile(state.projectiles, target, total_ticks=4)
        assert p.progress == 0.0
        p.elapsed_ticks = 2
        assert p.progress == 0.5
        assert not p.arrived
        p.elapsed_ticks = 4
        assert p.arrived

    def test_position_interpolates(self):
        assert projectile_position((0, 0), (0, 4), 0.5) == (0.0, 2.0)
        assert projectile_position((0, 0), (2, 4), 1.5) == (2.0, 4.0)

    @pytest.mark.parametrize("progress, expected", [(0.0, (1.0, 1.0)), (0.25, (1.0, 2.0))])
    def test_position_along_lane(self, progress, expected):
        assert projectile_position((1, 1), (1, 5), progress) == expected
