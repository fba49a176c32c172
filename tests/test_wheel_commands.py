"""
Tests for the /wheel command group.
"""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from discord import app_commands

from commands.wheel import WheelCommands
from domain.models.match import MatchPhase
from services.game_session_manager import GameSessionManager
from services.roster_source_service import RosterFetch
from services.wheel_game_service import WheelGameService
from tests.conftest import TEST_CHANNEL_ID, TEST_GUILD_ID, ScriptedRandom


class FakeFollowup:
    def __init__(self):
        self.messages = []

    async def send(self, content=None, ephemeral=None, embed=None, allowed_mentions=None):
        self.messages.append(
            {
                "content": content,
                "ephemeral": ephemeral,
                "embed": embed,
                "allowed_mentions": allowed_mentions,
            }
        )


class FakeChannel:
    def __init__(self):
        self.embeds = []

    async def send(self, embed=None):
        self.embeds.append(embed)


class FakeResponse:
    def __init__(self):
        self.sent = []

    def is_done(self):
        return False

    async def send_message(self, content=None, ephemeral=None):
        self.sent.append({"content": content, "ephemeral": ephemeral})


class FakeInteraction:
    def __init__(self, user_id=1, channel_id=TEST_CHANNEL_ID, channel=None):
        self.user = SimpleNamespace(id=user_id, mention=f"<@{user_id}>")
        self.guild = SimpleNamespace(id=TEST_GUILD_ID, get_member=lambda _uid: None)
        self.channel_id = channel_id
        self.channel = channel or FakeChannel()
        self.followup = FakeFollowup()
        self.response = FakeResponse()


def make_game() -> WheelGameService:
    return WheelGameService(
        rng=ScriptedRandom(value=0.5),
        presentation_delay=0.01,
        auto_spin_delay=0.01,
        auto_spin_enabled=False,
    )


@pytest.fixture
def cog(monkeypatch):
    monkeypatch.setattr("commands.wheel.safe_defer", AsyncMock(return_value=True))
    return WheelCommands(SimpleNamespace(), GameSessionManager(make_game))


def last_message(interaction):
    return interaction.followup.messages[-1]


async def join(cog, interaction, names):
    await cog.join.callback(cog, interaction, names)


class TestRosterCommands:
    @pytest.mark.asyncio
    async def test_join_multiple_names(self, cog):
        interaction = FakeInteraction()
        await join(cog, interaction, "Alice, Bob")

        message = last_message(interaction)
        assert message["content"] == "✅ Added **Alice**, **Bob** (2 players)"
        assert message["ephemeral"] is False
        game = cog.session_manager.get(TEST_GUILD_ID, TEST_CHANNEL_ID)
        assert [p.name for p in game.match.players] == ["Alice", "Bob"]

    @pytest.mark.asyncio
    async def test_join_reports_rejected_names(self, cog):
        interaction = FakeInteraction()
        await join(cog, interaction, "Alice, " + "x" * 30)

        content = last_message(interaction)["content"]
        assert content.startswith("✅ Added **Alice** (1 players)")
        assert "❌ " + "x" * 30 + ": Player names must be 1-24 characters." in content

    @pytest.mark.asyncio
    async def test_join_nothing_added_is_ephemeral(self, cog):
        interaction = FakeInteraction()
        await join(cog, interaction, "   ")
        assert last_message(interaction)["ephemeral"] is True

    @pytest.mark.asyncio
    async def test_remove_unknown_player(self, cog):
        interaction = FakeInteraction()
        await join(cog, interaction, "Alice")
        await cog.remove.callback(cog, interaction, "Zed")
        assert last_message(interaction)["content"] == "❌ No player named Zed on the roster."

    @pytest.mark.asyncio
    async def test_remove_by_name(self, cog):
        interaction = FakeInteraction()
        await join(cog, interaction, "Alice, Bob")
        await cog.remove.callback(cog, interaction, "alice")
        assert last_message(interaction)["content"] == "🗑️ Removed **Alice** (1 players left)"

    @pytest.mark.asyncio
    async def test_player_autocomplete(self, cog):
        interaction = FakeInteraction()
        assert await cog.player_autocomplete(interaction, "a") == []

        await join(cog, interaction, "Alice, Bob, Carla")
        choices = await cog.player_autocomplete(interaction, "a")
        assert [c.name for c in choices] == ["Alice", "Carla"]

    @pytest.mark.asyncio
    async def test_setup_normal_mode(self, cog):
        interaction = FakeInteraction()
        mode = app_commands.Choice(name="Normal", value="normal")
        await cog.setup_match.callback(cog, interaction, mode, 150)

        embed = last_message(interaction)["embed"]
        assert embed.title == "🎡 Party Wheel: Normal"
        game = cog.session_manager.get(TEST_GUILD_ID, TEST_CHANNEL_ID)
        assert game.match.target_score == 150


class TestMatchFlow:
    @pytest.mark.asyncio
    async def test_start_needs_players(self, cog):
        interaction = FakeInteraction()
        await join(cog, interaction, "Alice")
        await cog.start.callback(cog, interaction)

        message = last_message(interaction)
        assert message["content"] == "❌ At least 2 players needed to start."
        assert message["ephemeral"] is True

    @pytest.mark.asyncio
    async def test_spin_announces_outcome_in_channel(self, cog):
        interaction = FakeInteraction()
        await join(cog, interaction, "Alice, Bob")
        await cog.start.callback(cog, interaction)
        await cog.spin.callback(cog, interaction)

        assert last_message(interaction)["content"] == "🎡 **Alice** spins the wheel..."
        for _ in range(100):
            if interaction.channel.embeds:
                break
            await asyncio.sleep(0.01)
        assert interaction.channel.embeds[0].title == "🎯 Alice landed on Victory"

    @pytest.mark.asyncio
    async def test_spin_without_match(self, cog):
        interaction = FakeInteraction()
        await cog.spin.callback(cog, interaction)
        assert last_message(interaction)["content"] == "❌ There is no match in progress."

    @pytest.mark.asyncio
    async def test_announcer_attached_once(self, cog):
        interaction = FakeInteraction()
        await join(cog, interaction, "Alice")
        await join(cog, interaction, "Bob")
        game = cog.session_manager.get(TEST_GUILD_ID, TEST_CHANNEL_ID)
        assert len(game._listeners) == 1

    @pytest.mark.asyncio
    async def test_reset_and_newgame(self, cog):
        interaction = FakeInteraction()
        await join(cog, interaction, "Alice, Bob")
        await cog.start.callback(cog, interaction)

        await cog.reset.callback(cog, interaction)
        assert last_message(interaction)["content"] == "🔄 Match reset. The roster is unchanged."
        game = cog.session_manager.get(TEST_GUILD_ID, TEST_CHANNEL_ID)
        assert game.match.phase is MatchPhase.SETUP
        assert len(game.match.players) == 2

        await cog.newgame.callback(cog, interaction)
        assert game.match.players == []

    @pytest.mark.asyncio
    async def test_playagain_before_finish(self, cog):
        interaction = FakeInteraction()
        await cog.playagain.callback(cog, interaction)
        assert last_message(interaction)["content"] == "❌ The match is not finished yet."

    @pytest.mark.asyncio
    async def test_autospin_toggle(self, cog):
        interaction = FakeInteraction()
        await cog.autospin.callback(cog, interaction, True)
        assert last_message(interaction)["content"] == "⏩ Auto-spin enabled."
        assert cog.session_manager.get(TEST_GUILD_ID, TEST_CHANNEL_ID).auto_spin_enabled

    @pytest.mark.asyncio
    async def test_status_without_session(self, cog):
        interaction = FakeInteraction()
        await cog.status.callback(cog, interaction)
        message = last_message(interaction)
        assert message["content"] == "No wheel match in this channel yet. Start with `/wheel join`."
        assert cog.session_manager.get(TEST_GUILD_ID, TEST_CHANNEL_ID) is None

    @pytest.mark.asyncio
    async def test_status_after_finish_includes_rankings(self, cog):
        interaction = FakeInteraction()
        await join(cog, interaction, "Alice, Bob")
        await cog.start.callback(cog, interaction)
        game = cog.session_manager.get(TEST_GUILD_ID, TEST_CHANNEL_ID)
        game.engine.apply_outcome(1)  # Defeat: Alice out, Bob wins

        await cog.status.callback(cog, interaction)
        titles = [m["embed"].title for m in interaction.followup.messages[-2:]]
        assert titles == ["🎡 Party Wheel: Battle Royale", "🏁 Final standings: Battle Royale"]

    @pytest.mark.asyncio
    async def test_cog_unload_shuts_sessions_down(self, cog):
        interaction = FakeInteraction()
        await join(cog, interaction, "Alice")
        await cog.cog_unload()
        assert cog.session_manager.get(TEST_GUILD_ID, TEST_CHANNEL_ID) is None


class TestRigCommand:
    @pytest.mark.asyncio
    async def test_non_admin_denied(self, cog, monkeypatch):
        monkeypatch.setattr("commands.wheel.has_admin_permission", lambda _interaction: False)
        interaction = FakeInteraction()
        await cog.rig.callback(cog, interaction, "Alice")

        assert interaction.response.sent[0]["content"].startswith("❌ Admin only!")
        assert interaction.response.sent[0]["ephemeral"] is True
        assert interaction.followup.messages == []

    @pytest.mark.asyncio
    async def test_admin_enables_and_disables_rig(self, cog, monkeypatch):
        monkeypatch.setattr("commands.wheel.has_admin_permission", lambda _interaction: True)
        interaction = FakeInteraction()
        await join(cog, interaction, "Alice, Bob")
        game = cog.session_manager.get(TEST_GUILD_ID, TEST_CHANNEL_ID)

        await cog.rig.callback(cog, interaction, "bob")
        assert last_message(interaction)["content"] == "🤫 Rig enabled for **Bob**."
        assert game.rigged_player_id == game.match.players[1].id

        await cog.rig.callback(cog, interaction, "off")
        assert last_message(interaction)["content"] == "Rig disabled."
        assert game.rigged_player_id is None


class TestSuggestCommand:
    @pytest.mark.asyncio
    async def test_not_configured(self, cog):
        interaction = FakeInteraction()
        await cog.suggest.callback(cog, interaction, False)
        assert last_message(interaction)["content"] == "❌ Name suggestions are not configured."

    @pytest.mark.asyncio
    async def test_shows_suggestions(self, cog):
        cog.roster_source = MagicMock()
        cog.roster_source.fetch_names.return_value = RosterFetch(names=["Alpha", "Beta"], fallback=True)
        interaction = FakeInteraction()

        await cog.suggest.callback(cog, interaction, False)

        message = last_message(interaction)
        assert message["ephemeral"] is True
        assert message["embed"].title == "📋 Suggested players (2)"

    @pytest.mark.asyncio
    async def test_add_skips_existing_names(self, cog):
        cog.roster_source = MagicMock()
        cog.roster_source.fetch_names.return_value = RosterFetch(names=["Alpha", "Beta"])
        interaction = FakeInteraction()
        await join(cog, interaction, "alpha")

        await cog.suggest.callback(cog, interaction, True)

        assert last_message(interaction)["content"] == "✅ Added 1 suggested player(s). Roster: 2"
        game = cog.session_manager.get(TEST_GUILD_ID, TEST_CHANNEL_ID)
        assert [p.name for p in game.match.players] == ["alpha", "Beta"]
