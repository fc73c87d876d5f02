# lanebattle/visuals.py
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from PIL import Image, ImageDraw

from lanebattle.arena import ZONE_NEUTRAL, ZONE_OPPONENT, ZONE_PLAYER
from lanebattle.coords import rc_to_coord
from lanebattle.snapshot import BattleSnapshot, ProjectileView, UnitView
from lanebattle.unit import TEAM_PLAYER


# ---------------------------------------------------------
# HP BARS
# ---------------------------------------------------------

def _hp_ratio(current: int, max_hp: int) -> float:
    if max_hp <= 0:
        return 0.0
    return max(0.0, min(1.0, current / max_hp))


def hp_bar_unit(current: int, max_hp: int) -> str:
    ratio = _hp_ratio(current, max_hp)
    if ratio == 0:
        return "⬛⬛"
    if ratio > 0.5:
        return "🟩🟩"
    if ratio > 0.25:
        return "🟨⬛"
    return "🟥⬛"


ZONE_EMOJI = {
    ZONE_PLAYER: "🟩",
    ZONE_NEUTRAL: "⬜",
    ZONE_OPPONENT: "🟪",
}


def projectile_emoji(p: ProjectileView) -> str:
    return "➜" if p.team == TEAM_PLAYER else "⬅"


def _projectile_cells(snapshot: BattleSnapshot) -> Dict[Tuple[int, int], ProjectileView]:
    cells: Dict[Tuple[int, int], ProjectileView] = {}
    for p in snapshot.projectiles:
        r, c = p.position
        cell = (int(round(r)), int(round(c)))
        cells.setdefault(cell, p)
    return cells


# ---------------------------------------------------------
# EMOJI GRID RENDERING
# ---------------------------------------------------------

def unit_status_lines(snapshot: BattleSnapshot) -> List[str]:
    lines: List[str] = []
    for u in snapshot.units:
        side = "P" if u.team == TEAM_PLAYER else "O"
        lines.append(
            f"{side} {u.emoji} {u.type_id} {rc_to_coord(u.row, u.col)} "
            f"{hp_bar_unit(u.health, u.max_health)} {u.health}/{u.max_health}"
        )
    return lines


def render_board_emoji(snapshot: BattleSnapshot, with_status: bool = True) -> str:
    LEFT_PAD = "   "

    def col_header() -> str:
        return LEFT_PAD + "".join(str((i + 1) % 10) for i in range(snapshot.cols))

    def row_prefix(r: int) -> str:
        return f"{chr(ord('A') + r)}  "

    units = {(u.row, u.col): u for u in snapshot.units}
    arrows = _projectile_cells(snapshot)

    lines: List[str] = [f"Tick {snapshot.tick} | {snapshot.phase}", col_header()]

    for r in range(snapshot.rows):
        row_tiles: List[str] = []
        for c in range(snapshot.cols):
            base = ZONE_EMOJI[snapshot.zone_of(c)]

            # Overlay projectile, then unit
            if (r, c) in arrows:
                base = projectile_emoji(arrows[(r, c)])
            if (r, c) in units:
                base = units[(r, c)].emoji

            row_tiles.append(base)
        lines.append(row_prefix(r) + "".join(row_tiles))

    if with_status:
        status = unit_status_lines(snapshot)
        if status:
            lines.append("")
            lines.extend(status)

    return "```text\n" + "\n".join(lines) + "\n```"


# ---------------------------------------------------------
# BOARD IMAGE (Pillow)
# ---------------------------------------------------------

CELL_PX = 32
ZONE_COLORS = {
    ZONE_PLAYER: (198, 230, 201, 255),
    ZONE_NEUTRAL: (236, 236, 236, 255),
    ZONE_OPPONENT: (225, 206, 238, 255),
}
TEAM_COLORS = {
    "player": (46, 125, 50, 255),
    "opponent": (123, 31, 162, 255),
}
PROJECTILE_COLOR = (33, 33, 33, 255)
GRID_LINE = (180, 180, 180, 255)


def _draw_unit(draw: ImageDraw.ImageDraw, u: UnitView) -> None:
    x0, y0 = u.col * CELL_PX, u.row * CELL_PX
    pad = 5
    draw.ellipse(
        (x0 + pad, y0 + pad, x0 + CELL_PX - pad, y0 + CELL_PX - pad - 4),
        fill=TEAM_COLORS.get(u.team, (0, 0, 0, 255)),
    )

    # HP bar along the bottom of the cell
    bar_w = CELL_PX - 2 * pad
    filled = int(round(bar_w * _hp_ratio(u.health, u.max_health)))
    y = y0 + CELL_PX - pad
    draw.rectangle((x0 + pad, y - 2, x0 + pad + bar_w, y), fill=(80, 80, 80, 255))
    if filled > 0:
        draw.rectangle((x0 + pad, y - 2, x0 + pad + filled, y), fill=(76, 175, 80, 255))


def _draw_projectile(draw: ImageDraw.ImageDraw, p: ProjectileView) -> None:
    r, c = p.position
    cx = c * CELL_PX + CELL_PX / 2
    cy = r * CELL_PX + CELL_PX / 2
    draw.ellipse((cx - 3, cy - 3, cx + 3, cy + 3), fill=PROJECTILE_COLOR)


def make_board_image(
    snapshot: BattleSnapshot,
    output_file: Optional[str] = "board.png",
) -> Image.Image:
    """Draw the snapshot as a PNG-ready image; saved when output_file is set."""
    w, h = snapshot.cols * CELL_PX, snapshot.rows * CELL_PX
    board = Image.new("RGBA", (w, h), (0, 0, 0, 0))
    draw = ImageDraw.Draw(board)

    for r in range(snapshot.rows):
        for c in range(snapshot.cols):
            zone = snapshot.zone_of(c)
            x0, y0 = c * CELL_PX, r * CELL_PX
            draw.rectangle((x0, y0, x0 + CELL_PX - 1, y0 + CELL_PX - 1), fill=ZONE_COLORS[zone], outline=GRID_LINE)

    for u in snapshot.units:
        _draw_unit(draw, u)
    for p in snapshot.projectiles:
        _draw_projectile(draw, p)

    if output_file:
        board.save(output_file)
    return board
