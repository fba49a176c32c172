"""
Main Discord bot entry for Party Wheel.
"""

import logging
import os

# Configure logging BEFORE importing discord to prevent duplicate handlers
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    force=True,  # Override any existing handlers (e.g., from discord.py)
)
logger = logging.getLogger("party_wheel")


class _PyNaClFilter(logging.Filter):
    """Filter out the PyNaCl warning from discord.py; voice is never used."""

    def filter(self, record):
        return "PyNaCl is not installed" not in record.getMessage()


logging.getLogger("discord.client").addFilter(_PyNaClFilter())

import discord
from discord.ext import commands

# discord.py adds its own handler to the 'discord' logger on import
_discord_logger = logging.getLogger("discord")
_discord_logger.handlers.clear()
_discord_logger.setLevel(logging.INFO)

from infrastructure.service_container import ServiceConfig, ServiceContainer

intents = discord.Intents.default()

bot = commands.Bot(command_prefix="!", intents=intents)

# Lazy-initialized service container
_container: ServiceContainer | None = None

EXTENSIONS = [
    "commands.wheel",
]


async def _init_services() -> None:
    """Initialize all services via ServiceContainer (lazy, idempotent)."""
    global _container
    if _container is not None:
        return
    _container = ServiceContainer(ServiceConfig.from_env())
    await _container.initialize()
    _container.expose_to_bot(bot)


async def _load_extensions() -> None:
    """Load command extensions if not already loaded."""
    await _init_services()

    loaded, skipped, failed = [], [], []
    for ext in EXTENSIONS:
        if ext in bot.extensions:
            skipped.append(ext)
            logger.debug(f"Extension {ext} already loaded, skipping")
            continue
        try:
            await bot.load_extension(ext)
            loaded.append(ext)
            logger.info(f"Loaded extension: {ext}")
        except Exception as exc:
            failed.append(ext)
            logger.error(f"Failed to load extension {ext}: {exc}", exc_info=True)

    logger.info(
        f"Extension loading complete: {len(loaded)} loaded, "
        f"{len(skipped)} skipped, {len(failed)} failed"
    )


@bot.event
async def setup_hook():
    await _load_extensions()
    try:
        synced = await bot.tree.sync()
        logger.info(f"Synced {len(synced)} command(s)")
    except discord.HTTPException as exc:
        logger.error(f"Failed to sync commands: {exc}", exc_info=True)


@bot.event
async def on_ready():
    logger.info(f"Logged in as {bot.user} (id={bot.user.id})")


def main():
    """Run the bot."""
    token = os.getenv("DISCORD_BOT_TOKEN")
    if not token:
        from dotenv import load_dotenv

        load_dotenv()
        token = os.getenv("DISCORD_BOT_TOKEN")

    if not token:
        print("ERROR: DISCORD_BOT_TOKEN not found!")
        return

    try:
        # log_handler=None keeps discord.py from adding a second handler
        bot.run(token, log_handler=None)
    except KeyboardInterrupt:
        logger.info("Bot stopped by user (Ctrl+C)")
    except Exception as exc:
        logger.error(f"Bot crashed: {exc}", exc_info=True)
        print(f"\nBot crashed: {exc}")


if __name__ == "__main__":
    main()
