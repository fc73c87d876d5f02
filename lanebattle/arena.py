# lanebattle/arena.py
from __future__ import annotations

from typing import Iterator, Optional, Tuple


# ---- Zone labels ----
ZONE_PLAYER = "player"
ZONE_NEUTRAL = "neutral"
ZONE_OPPONENT = "opponent"


class Arena:
    """
    Arena owns:
      - the occupancy grid (cell -> unit id)
      - board geometry (bounds, deploy zones)
    Arena does NOT own:
      - unit state (state.py)
      - movement/targeting decisions
      - combat rules
    """

    def __init__(self, width: int = 30, height: int = 5, player_zone_cols: int = 10, opponent_zone_cols: int = 10) -> None:
        self.width = width
        self.height = height
        self.player_zone_cols = player_zone_cols
        self.opponent_zone_cols = opponent_zone_cols

        # Grid stores ONLY unit ids
        self.grid: list[list[Optional[str]]] = [[None for _ in range(width)] for _ in range(height)]

    # -----------------------------
    # Grid helpers
    # -----------------------------
    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def get(self, row: int, col: int) -> Optional[str]:
        if not self.in_bounds(row, col):
            return None
        return self.grid[row][col]

    def is_empty(self, row: int, col: int) -> bool:
        return self.in_bounds(row, col) and self.grid[row][col] is None

    def place(self, row: int, col: int, unit_id: str) -> bool:
        """Occupy a cell if it is empty."""
        if not self.is_empty(row, col):
            return False
        self.grid[row][col] = unit_id
        return True

    def vacate(self, row: int, col: int, unit_id: str) -> bool:
        """Clear a cell only if it still holds unit_id."""
        if self.get(row, col) != unit_id:
            return False
        self.grid[row][col] = None
        return True

    def move(self, unit_id: str, src: Tuple[int, int], dst: Tuple[int, int]) -> bool:
        if self.get(*src) != unit_id or not self.is_empty(*dst):
            return False
        self.grid[src[0]][src[1]] = None
        self.grid[dst[0]][dst[1]] = unit_id
        return True

    def clear(self) -> None:
        for r in range(self.height):
            for c in range(self.width):
                self.grid[r][c] = None

    def all_positions(self) -> Iterator[Tuple[int, int, Optional[str]]]:
        for r in range(self.height):
            for c in range(self.width):
                yield r, c, self.grid[r][c]

    def occupied(self) -> Iterator[Tuple[int, int, str]]:
        for r, c, unit_id in self.all_positions():
            if unit_id is not None:
                yield r, c, unit_id

    # -----------------------------
    # Zone helpers
    # -----------------------------
    def zone_of(self, col: int) -> str:
        if col < self.player_zone_cols:
            return ZONE_PLAYER
        if col >= self.width - self.opponent_zone_cols:
            return ZONE_OPPONENT
        return ZONE_NEUTRAL

    def is_player_zone(self, col: int) -> bool:
        return self.zone_of(col) == ZONE_PLAYER

    def is_opponent_zone(self, col: int) -> bool:
        return self.zone_of(col) == ZONE_OPPONENT
