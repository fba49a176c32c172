"""
Wheel commands: the /wheel group.

Each channel runs its own match. Spin outcomes are posted to the channel when
they land, so /wheel spin only announces that the wheel is turning.
"""

import asyncio
import logging

import discord
from discord import app_commands
from discord.ext import commands

from domain.models.match import MatchPhase, SpinReport
from domain.models.segment import GameMode
from services import error_codes
from services.game_session_manager import GameSessionManager
from services.permissions import has_admin_permission
from services.roster_source_service import RosterSourceService
from services.wheel_game_service import WheelGameService
from utils.command_helpers import format_result_error, handle_result
from utils.embeds import (
    MODE_NAMES,
    build_rankings_embed,
    build_spin_result_embed,
    build_status_embed,
    build_suggestions_embed,
)
from utils.guild import normalize_guild_id
from utils.interaction_safety import safe_defer, safe_followup

logger = logging.getLogger("party_wheel.commands.wheel")


class WheelCommands(commands.GroupCog, group_name="wheel", group_description="Spin the party wheel"):
    """Slash commands for running wheel matches."""

    def __init__(
        self,
        bot: commands.Bot,
        session_manager: GameSessionManager,
        roster_source: RosterSourceService | None = None,
    ):
        super().__init__()
        self.bot = bot
        self.session_manager = session_manager
        self.roster_source = roster_source
        # (guild_id, channel_id) -> the session we attached an announcer to
        self._announced: dict[tuple[int, int], WheelGameService] = {}

    def _game(self, interaction: discord.Interaction) -> WheelGameService:
        guild_id = interaction.guild.id if interaction.guild else None
        channel_id = interaction.channel_id
        game = self.session_manager.get_or_create(guild_id, channel_id)
        key = (normalize_guild_id(guild_id), channel_id)
        if self._announced.get(key) is not game:
            game.add_listener(self._make_announcer(game, interaction.channel))
            self._announced[key] = game
        return game

    async def cog_unload(self):
        self.session_manager.shutdown_all()
        self._announced.clear()

    def _existing_game(self, interaction: discord.Interaction) -> WheelGameService | None:
        guild_id = interaction.guild.id if interaction.guild else None
        return self.session_manager.get(guild_id, interaction.channel_id)

    def _make_announcer(self, game: WheelGameService, channel):
        async def announce(report: SpinReport) -> None:
            await channel.send(embed=build_spin_result_embed(report, game.match))
            if report.game_over:
                await channel.send(embed=build_rankings_embed(game.match, game.highlights()))

        return announce

    async def player_autocomplete(
        self, interaction: discord.Interaction, current: str
    ) -> list[app_commands.Choice[str]]:
        """Autocomplete for players on this channel's roster."""
        game = self._existing_game(interaction)
        if game is None:
            return []
        lowered = current.lower()
        matches = [
            app_commands.Choice(name=player.name, value=player.id)
            for player in game.match.players
            if lowered in player.name.lower()
        ]
        return matches[:25]  # Discord limit

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    @app_commands.command(name="setup", description="Choose the game mode for this channel's match")
    @app_commands.describe(
        mode="Normal (race to a score) or Battle Royale (last one standing)",
        target="Normal mode: points needed to win",
    )
    @app_commands.choices(
        mode=[
            app_commands.Choice(name="Battle Royale", value=GameMode.BATTLE_ROYALE.value),
            app_commands.Choice(name="Normal", value=GameMode.NORMAL.value),
        ]
    )
    async def setup_match(
        self,
        interaction: discord.Interaction,
        mode: app_commands.Choice[str],
        target: int | None = None,
    ):
        if not await safe_defer(interaction):
            return
        game = self._game(interaction)
        result = game.configure_match(GameMode(mode.value), target)
        if not await handle_result(interaction, result):
            return
        await safe_followup(interaction, embed=build_status_embed(game.match, auto_spin=game.auto_spin_enabled))

    @app_commands.command(name="join", description="Add players to the roster")
    @app_commands.describe(names="Player name, or several names separated by commas")
    async def join(self, interaction: discord.Interaction, names: str):
        if not await safe_defer(interaction):
            return
        game = self._game(interaction)

        added, problems = [], []
        for name in [n for n in names.split(",") if n.strip()] or [names]:
            result = game.add_player(name)
            if result:
                added.append(result.value.name)
                continue
            problems.append(f"{name.strip() or '(empty)'}: {result.error}")
            if result.error_code in (error_codes.ROSTER_FULL, error_codes.STATE_ERROR):
                break

        lines = []
        if added:
            lines.append(f"✅ Added {', '.join(f'**{n}**' for n in added)} ({len(game.match.players)} players)")
        if problems:
            lines.append("❌ " + "\n❌ ".join(problems))
        await safe_followup(
            interaction,
            content="\n".join(lines),
            ephemeral=not added,
            allowed_mentions=discord.AllowedMentions.none(),
        )

    @app_commands.command(name="remove", description="Remove a player from the roster")
    @app_commands.describe(player="Player to remove")
    @app_commands.autocomplete(player=player_autocomplete)
    async def remove(self, interaction: discord.Interaction, player: str):
        if not await safe_defer(interaction):
            return
        game = self._game(interaction)
        target = game.find_player(player)
        if target is None:
            await safe_followup(interaction, content=f"❌ No player named {player} on the roster.", ephemeral=True)
            return
        result = game.remove_player(target.id)
        await handle_result(
            interaction,
            result,
            success_msg=f"🗑️ Removed **{target.name}** ({len(game.match.players)} players left)",
            ephemeral=False,
        )

    @app_commands.command(name="suggest", description="Show suggested player names")
    @app_commands.describe(add="Add every suggested name to the roster")
    async def suggest(self, interaction: discord.Interaction, add: bool = False):
        if not await safe_defer(interaction, ephemeral=not add):
            return
        if self.roster_source is None:
            await safe_followup(interaction, content="❌ Name suggestions are not configured.", ephemeral=True)
            return

        fetch = await asyncio.to_thread(self.roster_source.fetch_names)
        if not add:
            await safe_followup(
                interaction,
                embed=build_suggestions_embed(fetch.names, stale=fetch.stale, fallback=fetch.fallback),
                ephemeral=True,
            )
            return

        game = self._game(interaction)
        existing = {p.name.lower() for p in game.match.players}
        added = 0
        for name in fetch.names:
            if name.lower() in existing:
                continue
            result = game.add_player(name)
            if not result:
                if result.error_code in (error_codes.ROSTER_FULL, error_codes.STATE_ERROR):
                    await safe_followup(interaction, content=format_result_error(result), ephemeral=True)
                    if not added:
                        return
                    break
                continue
            existing.add(name.lower())
            added += 1
        await safe_followup(
            interaction,
            content=f"✅ Added {added} suggested player(s). Roster: {len(game.match.players)}",
        )

    # ------------------------------------------------------------------
    # Match flow
    # ------------------------------------------------------------------

    @app_commands.command(name="start", description="Start the match with the current roster")
    async def start(self, interaction: discord.Interaction):
        if not await safe_defer(interaction):
            return
        game = self._game(interaction)
        if not await handle_result(interaction, game.start_match()):
            return
        logger.info(
            f"User {interaction.user.id} started a {MODE_NAMES[game.match.mode]} match "
            f"in channel {interaction.channel_id}"
        )
        await safe_followup(interaction, embed=build_status_embed(game.match, auto_spin=game.auto_spin_enabled))

    @app_commands.command(name="spin", description="Spin the wheel for the current player")
    async def spin(self, interaction: discord.Interaction):
        if not await safe_defer(interaction):
            return
        game = self._game(interaction)
        player = game.match.current_player
        result = game.request_spin()
        if not await handle_result(interaction, result):
            return
        await safe_followup(
            interaction,
            content=f"🎡 **{player.name}** spins the wheel...",
            allowed_mentions=discord.AllowedMentions.none(),
        )

    @app_commands.command(name="reset", description="Stop the match and return to setup, keeping the roster")
    async def reset(self, interaction: discord.Interaction):
        if not await safe_defer(interaction):
            return
        game = self._game(interaction)
        await handle_result(
            interaction,
            game.reset_match(),
            success_msg="🔄 Match reset. The roster is unchanged.",
            ephemeral=False,
        )

    @app_commands.command(name="playagain", description="Rematch with the same roster")
    async def playagain(self, interaction: discord.Interaction):
        if not await safe_defer(interaction):
            return
        game = self._game(interaction)
        if not await handle_result(interaction, game.play_again()):
            return
        await safe_followup(interaction, embed=build_status_embed(game.match, auto_spin=game.auto_spin_enabled))

    @app_commands.command(name="newgame", description="Clear the roster and return to setup")
    async def newgame(self, interaction: discord.Interaction):
        if not await safe_defer(interaction):
            return
        game = self._game(interaction)
        await handle_result(
            interaction,
            game.new_game(),
            success_msg="🆕 New game. The roster is empty; use `/wheel join` to add players.",
            ephemeral=False,
        )

    @app_commands.command(name="autospin", description="Spin automatically after each outcome")
    @app_commands.describe(enabled="Turn auto-spin on or off")
    async def autospin(self, interaction: discord.Interaction, enabled: bool):
        if not await safe_defer(interaction):
            return
        game = self._game(interaction)
        game.set_auto_spin(enabled)
        await safe_followup(interaction, content=f"⏩ Auto-spin {'enabled' if enabled else 'disabled'}.")

    @app_commands.command(name="rig", description="Steer a player's spins to good segments (Admin only)")
    @app_commands.describe(player="Player to favour; leave empty to turn the rig off")
    @app_commands.autocomplete(player=player_autocomplete)
    async def rig(self, interaction: discord.Interaction, player: str | None = None):
        if not has_admin_permission(interaction):
            await interaction.response.send_message(
                "❌ Admin only! You need Administrator or Manage Server permissions.",
                ephemeral=True,
            )
            return
        if not await safe_defer(interaction, ephemeral=True):
            return

        game = self._game(interaction)
        if player is None or player.strip().lower() == "off":
            game.disable_rig()
            await safe_followup(interaction, content="Rig disabled.", ephemeral=True)
            return

        target = game.find_player(player)
        if target is None:
            await safe_followup(interaction, content=f"❌ No player named {player} on the roster.", ephemeral=True)
            return
        if not await handle_result(interaction, game.enable_rig(target.id)):
            return
        logger.info(f"Admin {interaction.user.id} rigged the wheel for {target.name}")
        await safe_followup(interaction, content=f"🤫 Rig enabled for **{target.name}**.", ephemeral=True)

    @app_commands.command(name="status", description="Show this channel's match")
    async def status(self, interaction: discord.Interaction):
        if not await safe_defer(interaction):
            return
        game = self._existing_game(interaction)
        if game is None:
            await safe_followup(
                interaction,
                content="No wheel match in this channel yet. Start with `/wheel join`.",
                ephemeral=True,
            )
            return
        await safe_followup(
            interaction,
            embed=build_status_embed(game.match, spinning=game.spinning, auto_spin=game.auto_spin_enabled),
        )
        if game.match.phase is MatchPhase.FINISHED:
            await safe_followup(interaction, embed=build_rankings_embed(game.match, game.highlights()))


async def setup(bot: commands.Bot):
    session_manager = getattr(bot, "session_manager", None)
    roster_source = getattr(bot, "roster_source", None)
    cog = WheelCommands(bot, session_manager, roster_source)
    await bot.add_cog(cog)
