# lanebattle/commands/unit_cmds.py

from discord.ext import commands

from lanebattle.definitions import DefinitionRegistry, UnitDefinition


def describe_unit(d: UnitDefinition) -> str:
    parts = [f"{d.emoji} **{d.name}** (`{d.id}`) hp {d.stats.health}, speed {d.stats.speed}"]

    if d.attack is not None:
        atk = d.attack
        if atk.is_ranged:
            parts.append(f"ranged {atk.damage} dmg every {atk.frequency_ticks}t, range {atk.range_manhattan}")
        else:
            parts.append(f"melee {atk.damage} dmg every {atk.frequency_ticks}t")

    heal = d.behavior.heal
    if heal is not None:
        parts.append(f"heals {heal.initial_power}↓ every {heal.frequency_ticks}t")

    return " | ".join(parts)


def setup_unit_cmds(bot: commands.Bot, registry: DefinitionRegistry):

    @bot.command()
    async def lb_units(ctx):
        msg = "📜 Units:\n" + "\n".join(f"- {describe_unit(d)}" for d in registry)
        await ctx.send(msg)
