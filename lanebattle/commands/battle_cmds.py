# lanebattle/commands/battle_cmds.py

from __future__ import annotations

import asyncio

import discord
from discord.ext import commands

from lanebattle.ai import spawn_opponent_wave
from lanebattle.config import BattleConfig
from lanebattle.coords import coord_to_rc, rc_to_coord
from lanebattle.definitions import DefinitionRegistry
from lanebattle.errors import LifecycleError, PlacementError
from lanebattle.match import PHASE_SETUP, Match, realtime_loop
from lanebattle.unit import TEAM_OPPONENT, TEAM_PLAYER
from lanebattle.visuals import make_board_image, render_board_emoji


# One match per channel
matches: dict[int, Match] = {}


def setup_battle_cmds(bot: commands.Bot, registry: DefinitionRegistry, config: BattleConfig):

    def get_match(ctx) -> Match | None:
        return matches.get(ctx.channel.id)

    async def place(ctx, team: str, unit_type: str, pos: str) -> None:
        match = get_match(ctx)
        if match is None:
            await ctx.send("❌ No match here. Use `!lb_new` first.")
            return

        parsed = coord_to_rc(pos, config.rows, config.cols)
        if not parsed:
            await ctx.send("❌ Invalid position. Use format like C4.")
            return
        row, col = parsed

        async with match.lock:
            try:
                unit = match.place_unit(unit_type, team, row, col)
            except PlacementError as exc:
                await ctx.send(f"❌ {exc}")
                return

        await ctx.send(f"🎮 {unit.emoji} **{unit.type_id}** ({team}) placed at {rc_to_coord(row, col)}")

    # ---------------------------------------------------------
    # NEW MATCH
    # ---------------------------------------------------------
    @bot.command()
    async def lb_new(ctx):
        existing = get_match(ctx)
        if existing is not None and existing.is_running:
            await ctx.send("⚠️ A battle is already running in this channel. Use `!lb_restart`.")
            return

        match = Match(registry, config)
        matches[ctx.channel.id] = match
        await ctx.send(
            "🗺️ New board ready. Place units with `!lb_place <unit> <pos>` "
            "(player zone on the left), then `!lb_start`."
        )
        await ctx.send(render_board_emoji(match.snapshot()))

    # ---------------------------------------------------------
    # PLACEMENT
    # ---------------------------------------------------------
    @bot.command()
    async def lb_place(ctx, unit_type: str, pos: str):
        await place(ctx, TEAM_PLAYER, unit_type, pos)

    @bot.command()
    async def lb_place_enemy(ctx, unit_type: str, pos: str):
        await place(ctx, TEAM_OPPONENT, unit_type, pos)

    @bot.command()
    async def lb_remove(ctx, pos: str):
        match = get_match(ctx)
        if match is None or match.phase != PHASE_SETUP:
            await ctx.send("❌ Units can only be removed during setup.")
            return

        parsed = coord_to_rc(pos, config.rows, config.cols)
        unit = match.unit_at(*parsed) if parsed else None
        if unit is None:
            await ctx.send("❌ No unit there.")
            return

        async with match.lock:
            match.remove_unit(unit.id)
        await ctx.send(f"🗑️ Removed {unit.emoji} from {pos.upper()}")

    @bot.command()
    async def lb_wave(ctx, *unit_types):
        match = get_match(ctx)
        if match is None or match.phase != PHASE_SETUP:
            await ctx.send("❌ Waves can only be spawned during setup.")
            return

        async with match.lock:
            try:
                placed = spawn_opponent_wave(match, unit_types or None)
            except ValueError as exc:
                await ctx.send(f"❌ {exc}")
                return

        await ctx.send(f"🤖 Opponent wave: {' '.join(u.emoji for u in placed) or 'no free lanes'}")

    # ---------------------------------------------------------
    # LIFECYCLE
    # ---------------------------------------------------------
    @bot.command()
    async def lb_start(ctx):
        match = get_match(ctx)
        if match is None:
            await ctx.send("❌ No match here. Use `!lb_new` first.")
            return

        async with match.lock:
            try:
                match.start_battle()
            except LifecycleError as exc:
                await ctx.send(f"❌ {exc}")
                return

        match.loop_task = asyncio.create_task(realtime_loop(bot, ctx.channel.id, match))
        await ctx.send("⚔️ Battle started!")

    @bot.command()
    async def lb_restart(ctx):
        match = get_match(ctx)
        if match is None:
            await ctx.send("❌ No match here. Use `!lb_new` first.")
            return

        async with match.lock:
            match.restart()
        await ctx.send("🔄 Board cleared, back to setup.")

    # ---------------------------------------------------------
    # BOARD
    # ---------------------------------------------------------
    @bot.command()
    async def lb_board(ctx):
        match = get_match(ctx)
        if match is None:
            await ctx.send("❌ No match here.")
            return
        await ctx.send(render_board_emoji(match.snapshot()))

    @bot.command()
    async def lb_image(ctx):
        match = get_match(ctx)
        if match is None:
            await ctx.send("❌ No match here.")
            return

        board_file = f"board_{ctx.channel.id}.png"
        make_board_image(match.snapshot(), board_file)

        file = discord.File(board_file, filename="board.png")
        embed = discord.Embed(title=f"Tick {match.tick} | {match.phase}")
        embed.set_image(url="attachment://board.png")
        await ctx.send(file=file, embed=embed)
