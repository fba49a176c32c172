"""
Final standings calculation.

Battle Royale placement is decided by survival: the winner is first, then
eliminated players from most to least recently eliminated.
"""

from collections import Counter
from collections.abc import Sequence

from domain.models.player import Player, PlayerStatus
from domain.models.ranking import MatchHighlights, RankEntry


def _order_key(player: Player) -> int:
    return player.elimination.order_key if player.elimination else 0


def compute_rankings(players: Sequence[Player], round_at_end: int) -> list[RankEntry]:
    """
    Rank a finished Battle Royale roster.

    Args:
        players: Roster in join order
        round_at_end: Round counter when the match finished

    Returns:
        RankEntry list. The winner (if anyone survived) is rank 1; eliminated
        players follow by order key descending. The sort is stable, so equal
        keys keep roster order.
    """
    rankings: list[RankEntry] = []

    winner = next((p for p in players if p.status is PlayerStatus.WINNER), None)
    if winner:
        rankings.append(
            RankEntry(
                player_id=winner.id,
                player_name=winner.name,
                rank=1,
                final_round=round_at_end,
                rounds_survived=round_at_end,
                revival_count=winner.revival_count,
            )
        )

    eliminated = [p for p in players if p.status is PlayerStatus.ELIMINATED]
    eliminated.sort(key=_order_key, reverse=True)

    for offset, player in enumerate(eliminated):
        record = player.elimination
        elimination_round = record.round if record else 0
        rankings.append(
            RankEntry(
                player_id=player.id,
                player_name=player.name,
                rank=offset + 2,
                final_round=elimination_round,
                rounds_survived=elimination_round,
                revival_count=player.revival_count,
                cause=record.cause.value if record else None,
                eliminated_by=record.eliminated_by if record else None,
            )
        )

    return rankings


def compute_score_standings(players: Sequence[Player], round_at_end: int) -> list[RankEntry]:
    """Normal mode standings: winner first, then score descending, ties in roster order."""
    ordered = sorted(
        players,
        key=lambda p: (p.status is not PlayerStatus.WINNER, -p.score),
    )
    return [
        RankEntry(
            player_id=player.id,
            player_name=player.name,
            rank=idx,
            final_round=round_at_end,
            rounds_survived=round_at_end,
            revival_count=player.revival_count,
            score=player.score,
        )
        for idx, player in enumerate(ordered, 1)
    ]


def compute_highlights(rankings: Sequence[RankEntry]) -> MatchHighlights:
    """
    Derive post-match trivia from a Battle Royale ranking.

    Ties go to whoever appears first in the ranking.
    """
    if not rankings:
        return MatchHighlights()

    most_revived = None
    revived = max(rankings, key=lambda r: r.revival_count)
    if revived.revival_count > 0:
        most_revived = f"{revived.player_name} ({revived.revival_count}x)"

    most_deadly = None
    kill_counts = Counter(r.eliminated_by for r in rankings if r.eliminated_by)
    if kill_counts:
        # most_common keeps insertion order among equal counts
        killer, kills = kill_counts.most_common(1)[0]
        most_deadly = f"{killer} ({kills})"

    losers = [r for r in rankings if r.rank > 1]
    longest_survivor = None
    first_eliminated = None
    if losers:
        survivor = max(losers, key=lambda r: r.rounds_survived)
        longest_survivor = f"{survivor.player_name} ({survivor.rounds_survived} rounds)"
        first = losers[-1]
        first_eliminated = f"{first.player_name} (R{first.final_round})"

    return MatchHighlights(
        most_revived=most_revived,
        most_deadly=most_deadly,
        longest_survivor=longest_survivor,
        first_eliminated=first_eliminated,
    )
