"""
Final standings models.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RankEntry:
    """One line of the final standings."""

    player_id: str
    player_name: str
    rank: int  # 1 = winner
    final_round: int
    rounds_survived: int
    revival_count: int = 0
    cause: str | None = None
    eliminated_by: str | None = None
    score: int | None = None  # Normal mode only

    def to_dict(self) -> dict:
        return {
            "player_id": self.player_id,
            "player_name": self.player_name,
            "rank": self.rank,
            "final_round": self.final_round,
            "rounds_survived": self.rounds_survived,
            "revival_count": self.revival_count,
            "cause": self.cause,
            "eliminated_by": self.eliminated_by,
            "score": self.score,
        }


@dataclass(frozen=True)
class MatchHighlights:
    """Post-match trivia derived from a Battle Royale ranking."""

    most_revived: str | None = None
    most_deadly: str | None = None
    longest_survivor: str | None = None
    first_eliminated: str | None = None
