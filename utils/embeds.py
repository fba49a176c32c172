"""
Reusable Discord embed builders for the wheel.
"""

import discord

from domain.models.match import Match, MatchPhase, SpinReport
from domain.models.player import PlayerStatus
from domain.models.ranking import MatchHighlights
from domain.models.segment import GameMode
from utils.embed_safety import join_lines_within, truncate_field

MODE_NAMES = {
    GameMode.NORMAL: "Normal",
    GameMode.BATTLE_ROYALE: "Battle Royale",
}

STATUS_ICONS = {
    PlayerStatus.ACTIVE: "🟢",
    PlayerStatus.ELIMINATED: "💀",
    PlayerStatus.WINNER: "👑",
}

PHASE_COLORS = {
    MatchPhase.SETUP: discord.Color.blurple(),
    MatchPhase.PLAYING: discord.Color.green(),
    MatchPhase.FINISHED: discord.Color.gold(),
}

PLACE_MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}


def format_roster(match: Match) -> list[str]:
    """One line per player in join order, marking whose turn it is."""
    current = match.current_player if match.phase is MatchPhase.PLAYING else None
    lines = []
    for idx, player in enumerate(match.players, 1):
        line = f"{idx}. {STATUS_ICONS[player.status]} {player.name}"
        if match.mode is GameMode.NORMAL and match.phase is not MatchPhase.SETUP:
            line += f" ({player.score} pts)"
        if player.revival_count:
            line += f" ♻️x{player.revival_count}"
        if current is not None and player is current:
            line = f"**{line}** ⬅️"
        lines.append(line)
    return lines


def build_status_embed(
    match: Match,
    *,
    spinning: bool = False,
    auto_spin: bool = False,
) -> discord.Embed:
    """Overview of a channel's match: mode, phase, roster and turn."""
    embed = discord.Embed(
        title=f"🎡 Party Wheel: {MODE_NAMES[match.mode]}",
        color=PHASE_COLORS[match.phase],
    )
    embed.add_field(name="Phase", value=match.phase.value.title(), inline=True)
    if match.mode is GameMode.NORMAL:
        embed.add_field(name="Target", value=f"{match.target_score} pts", inline=True)
    if match.phase is MatchPhase.PLAYING:
        embed.add_field(name="Round", value=str(match.round), inline=True)
        current = match.current_player
        if current is not None:
            embed.add_field(name="Up next", value=current.name, inline=True)

    roster = format_roster(match)
    if match.mode is GameMode.BATTLE_ROYALE and match.phase is not MatchPhase.SETUP:
        roster_title = f"Players ({len(match.active_players())}/{len(match.players)} alive)"
    else:
        roster_title = f"Players ({len(match.players)})"
    embed.add_field(
        name=roster_title,
        value=join_lines_within(roster) if roster else "No players yet. Use `/wheel join`.",
        inline=False,
    )

    if match.results:
        recent = [f"[{r.segment_label}] {r.detail}" for r in match.results[:5]]
        embed.add_field(name="Recent spins", value=join_lines_within(recent), inline=False)

    footer = [f"Auto-spin {'on' if auto_spin else 'off'}"]
    if spinning:
        footer.append("the wheel is spinning...")
    embed.set_footer(text=" | ".join(footer))
    return embed


def build_spin_result_embed(report: SpinReport, match: Match) -> discord.Embed:
    """The outcome of one landed spin."""
    segment = match.segments[report.segment_index]
    embed = discord.Embed(
        title=f"🎯 {report.player_name} landed on {report.segment_label}",
        description=truncate_field(report.detail, 4096),
        color=discord.Color.from_str(segment.color),
    )
    if match.mode is GameMode.NORMAL:
        player = match.get_player(report.player_id)
        if player is not None:
            embed.add_field(name="Score", value=f"{player.score}/{match.target_score}", inline=True)
    else:
        embed.add_field(name="Alive", value=str(len(match.active_players())), inline=True)

    if report.game_over:
        winner = report.winner_name or "Nobody survived"
        embed.add_field(name="🏆 Winner", value=winner, inline=True)
    else:
        embed.add_field(name="Round", value=str(match.round), inline=True)
        current = match.current_player
        if current is not None:
            label = "Spins again" if not report.turn_advanced else "Up next"
            embed.add_field(name=label, value=current.name, inline=True)
    return embed


def build_rankings_embed(match: Match, highlights: MatchHighlights | None = None) -> discord.Embed:
    """Final standings, with highlights for Battle Royale."""
    embed = discord.Embed(
        title=f"🏁 Final standings: {MODE_NAMES[match.mode]}",
        color=discord.Color.gold(),
    )
    if not match.rankings:
        embed.description = "No standings yet."
        return embed

    lines = []
    for entry in match.rankings:
        place = PLACE_MEDALS.get(entry.rank, f"#{entry.rank}")
        line = f"{place} {entry.player_name}"
        if entry.score is not None:
            line += f": {entry.score} pts"
        elif entry.rank == 1:
            line += f": survived {entry.rounds_survived} rounds"
        else:
            line += f": out in round {entry.final_round}"
            if entry.cause:
                line += f" ({entry.cause}"
                line += f" by {entry.eliminated_by})" if entry.eliminated_by else ")"
        lines.append(line)
    embed.description = join_lines_within(lines, 4096)

    if highlights is not None:
        for name, value in (
            ("♻️ Most revived", highlights.most_revived),
            ("☠️ Most deadly", highlights.most_deadly),
            ("⏳ Longest survivor", highlights.longest_survivor),
            ("🥀 First out", highlights.first_eliminated),
        ):
            if value:
                embed.add_field(name=name, value=value, inline=True)

    embed.set_footer(text=f"Finished in round {match.round}. Use /wheel playagain for a rematch.")
    return embed


def build_suggestions_embed(names: list[str], *, stale: bool = False, fallback: bool = False) -> discord.Embed:
    """Suggested player names from the roster source."""
    embed = discord.Embed(
        title=f"📋 Suggested players ({len(names)})",
        color=discord.Color.teal(),
    )
    if names:
        embed.description = join_lines_within([f"• {name}" for name in names], 4096)
    else:
        embed.description = "No suggestions available right now."
    if fallback:
        embed.set_footer(text="Member list unavailable; showing preset names.")
    elif stale:
        embed.set_footer(text="Member list unavailable; showing the last known list.")
    return embed
