"""
Domain models - pure data structures representing game entities.
"""

from domain.models.match import Match, MatchPhase, SpinReport
from domain.models.player import EliminationCause, EliminationRecord, Player, PlayerStatus
from domain.models.ranking import MatchHighlights, RankEntry
from domain.models.segment import BattleOutcome, GameMode, NormalOutcome, Segment

__all__ = [
    "BattleOutcome",
    "EliminationCause",
    "EliminationRecord",
    "GameMode",
    "Match",
    "MatchHighlights",
    "MatchPhase",
    "NormalOutcome",
    "Player",
    "PlayerStatus",
    "RankEntry",
    "Segment",
    "SpinReport",
]
