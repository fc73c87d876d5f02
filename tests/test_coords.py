"""Tests for chat coordinate parsing."""

import pytest

from lanebattle.config import MAX_ROWS, BattleConfig
from lanebattle.coords import coord_to_rc, rc_to_coord


@pytest.mark.parametrize("pos, expected", [
    ("A1", (0, 0)),
    ("c4", (2, 3)),
    (" E30 ", (4, 29)),
])
def test_coord_to_rc(pos, expected):
    assert coord_to_rc(pos) == expected


@pytest.mark.parametrize("pos", ["", "A", "1A", "A0", "AA", "A-1", "?3"])
def test_coord_to_rc_invalid(pos):
    assert coord_to_rc(pos) is None


def test_coord_to_rc_bounds():
    assert coord_to_rc("E30", rows=5, cols=30) == (4, 29)
    assert coord_to_rc("F1", rows=5, cols=30) is None
    assert coord_to_rc("A31", rows=5, cols=30) is None


def test_rc_to_coord():
    assert rc_to_coord(0, 0) == "A1"
    assert rc_to_coord(2, 11) == "C12"
    with pytest.raises(ValueError):
        rc_to_coord(-1, 0)
    with pytest.raises(ValueError):
        rc_to_coord(0, -1)


def test_every_row_of_the_tallest_board_has_a_letter():
    config = BattleConfig(rows=MAX_ROWS, cols=2, player_zone_cols=1, opponent_zone_cols=1)
    last = config.rows - 1
    assert rc_to_coord(last, 0) == "Z1"
    assert coord_to_rc("Z1", config.rows, config.cols) == (last, 0)
