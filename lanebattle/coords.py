# lanebattle/coords.py
from __future__ import annotations

from typing import Optional, Tuple


def coord_to_rc(pos: str, rows: Optional[int] = None, cols: Optional[int] = None) -> Optional[Tuple[int, int]]:
    """
    Convert a board coordinate like 'A1' or 'c12' into (row, col).
    Rows are letters (lanes), columns are 1-based.
    Returns None if the format is invalid or, when rows/cols are given,
    the cell is off the board.
    """
    if not pos:
        return None

    pos = pos.strip().upper()
    if len(pos) < 2:
        return None

    row_char, col_part = pos[0], pos[1:]
    if not ("A" <= row_char <= "Z") or not col_part.isdigit():
        return None

    row = ord(row_char) - ord("A")
    col = int(col_part) - 1
    if col < 0:
        return None

    if rows is not None and row >= rows:
        return None
    if cols is not None and col >= cols:
        return None

    return row, col


def rc_to_coord(row: int, col: int) -> str:
    """Convert (row, col) into a board coordinate like 'A1'."""
    if row < 0 or row > 25 or col < 0:
        raise ValueError(f"No board coordinate for ({row}, {col})")
    return f"{chr(ord('A') + row)}{col + 1}"
