import logging
import os

import discord
from discord.ext import commands

from lanebattle.commands import setup_all_commands
from lanebattle.config import BattleConfig
from lanebattle.definitions import load_definitions

# ================== LOGGING ==================
logging.basicConfig(
    level=os.getenv("LANEBATTLE_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# ================== LOAD UNIT DATA ==================
registry = load_definitions(os.getenv("LANEBATTLE_UNITS_FILE"))
config = BattleConfig()

# ================== DISCORD SETUP ==================
intents = discord.Intents.default()
intents.message_content = True
bot = commands.Bot(command_prefix="!", intents=intents)

# Load all command modules
setup_all_commands(bot, registry, config)

# ================== EVENTS ==================
@bot.event
async def on_ready():
    logging.getLogger("lanebattle.bot").info("Logged in as %s", bot.user)

# ================== RUN BOT ==================
bot.run(os.getenv("DISCORD_TOKEN"), log_handler=None)
