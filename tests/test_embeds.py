"""
Tests for the wheel embed builders.
"""

from domain.models.segment import GameMode
from domain.services.ranking_service import compute_highlights
from utils.embed_safety import validate_embed
from utils.embeds import (
    build_rankings_embed,
    build_spin_result_embed,
    build_status_embed,
    build_suggestions_embed,
    format_roster,
)
from tests.conftest import BATTLE_DEFEAT, BATTLE_DOUBLE_ELIM, NORMAL_PLUS_50, NORMAL_SPIN_AGAIN, build_engine


def field_map(embed):
    return {field.name: field.value for field in embed.fields}


class TestFormatRoster:
    def test_marks_current_player(self):
        engine = build_engine(names=("A", "B"))
        lines = format_roster(engine.match)
        assert lines[0].startswith("**1.")
        assert lines[0].endswith("⬅️")
        assert "⬅️" not in lines[1]

    def test_normal_mode_shows_scores(self):
        engine = build_engine(GameMode.NORMAL, ("A", "B"))
        engine.apply_outcome(NORMAL_PLUS_50)
        assert "(50 pts)" in format_roster(engine.match)[0]

    def test_setup_has_no_turn_marker(self):
        engine = build_engine(names=("A", "B"), start=False)
        assert all("⬅️" not in line for line in format_roster(engine.match))


class TestStatusEmbed:
    def test_setup_embed(self):
        engine = build_engine(names=(), start=False)
        embed = build_status_embed(engine.match)
        fields = field_map(embed)
        assert embed.title == "🎡 Party Wheel: Battle Royale"
        assert fields["Phase"] == "Setup"
        assert "No players yet" in fields["Players (0)"]
        assert embed.footer.text == "Auto-spin off"

    def test_playing_battle_royale(self):
        engine = build_engine(names=("A", "B", "C"))
        engine.apply_outcome(BATTLE_DEFEAT)
        embed = build_status_embed(engine.match, spinning=True, auto_spin=True)
        fields = field_map(embed)
        assert fields["Up next"] == "B"
        assert "Players (2/3 alive)" in fields
        assert "Recent spins" in fields
        assert embed.footer.text == "Auto-spin on | the wheel is spinning..."

    def test_normal_mode_target(self):
        engine = build_engine(GameMode.NORMAL, ("A",), target_score=250)
        assert field_map(build_status_embed(engine.match))["Target"] == "250 pts"

    def test_full_roster_of_long_names_fits(self):
        names = tuple(f"Player{idx:02d}-xxxxxxxxxxxxxx" for idx in range(64))
        engine = build_engine(GameMode.NORMAL, names, target_score=10_000)
        for _ in range(30):
            engine.apply_outcome(NORMAL_PLUS_50)
        embed = build_status_embed(engine.match)
        assert validate_embed(embed) == []
        roster = next(v for k, v in field_map(embed).items() if k.startswith("Players"))
        assert "more" in roster


class TestSpinResultEmbed:
    def test_normal_spin_again(self):
        engine = build_engine(GameMode.NORMAL, ("A", "B"))
        report = engine.apply_outcome(NORMAL_SPIN_AGAIN)
        embed = build_spin_result_embed(report, engine.match)
        fields = field_map(embed)
        assert embed.title == "🎯 A landed on Spin Again"
        assert fields["Score"] == "0/100"
        assert fields["Spins again"] == "A"

    def test_battle_game_over_without_winner(self):
        engine = build_engine(names=("A", "B", "C"))
        engine.apply_outcome(BATTLE_DEFEAT)
        report = engine.apply_outcome(BATTLE_DOUBLE_ELIM)
        fields = field_map(build_spin_result_embed(report, engine.match))
        assert fields["🏆 Winner"] == "Nobody survived"
        assert fields["Alive"] == "0"


class TestRankingsEmbed:
    def test_no_standings(self):
        engine = build_engine(start=False)
        assert build_rankings_embed(engine.match).description == "No standings yet."

    def test_battle_royale_rankings_with_highlights(self):
        engine = build_engine(names=("A", "B", "C"))
        engine.apply_outcome(BATTLE_DEFEAT)
        engine.apply_outcome(BATTLE_DOUBLE_ELIM)
        highlights = compute_highlights(engine.match.rankings)

        embed = build_rankings_embed(engine.match, highlights)

        lines = embed.description.split("\n")
        assert lines[0] == "🥈 C: out in round 1 (Double Elimination by B)"
        assert lines[2].startswith("#4 A")
        assert "Use /wheel playagain" in embed.footer.text
        assert "☠️ Most deadly" in field_map(embed)

    def test_normal_rankings_show_scores(self):
        engine = build_engine(GameMode.NORMAL, ("A", "B"), target_score=50)
        engine.apply_outcome(NORMAL_PLUS_50)
        embed = build_rankings_embed(engine.match)
        assert embed.description.split("\n")[0] == "🥇 A: 50 pts"


class TestSuggestionsEmbed:
    def test_lists_names(self):
        embed = build_suggestions_embed(["Alpha", "Beta"])
        assert embed.title == "📋 Suggested players (2)"
        assert embed.description == "• Alpha\n• Beta"
        assert embed.footer.text is None

    def test_fallback_footer(self):
        embed = build_suggestions_embed([], fallback=True)
        assert embed.description == "No suggestions available right now."
        assert "preset" in embed.footer.text

    def test_stale_footer(self):
        embed = build_suggestions_embed(["Alpha"], stale=True)
        assert "last known" in embed.footer.text
