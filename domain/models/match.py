"""
Match domain model.
"""

from dataclasses import dataclass, field
from enum import Enum

from domain.models.player import Player, PlayerStatus
from domain.models.ranking import RankEntry
from domain.models.segment import BattleOutcome, GameMode, NormalOutcome, Segment, segments_for_mode


class MatchPhase(str, Enum):
    SETUP = "setup"
    PLAYING = "playing"
    FINISHED = "finished"


@dataclass(frozen=True)
class SpinReport:
    """What a single landed spin did to the match."""

    player_id: str
    player_name: str
    segment_index: int
    segment_label: str
    outcome: NormalOutcome | BattleOutcome
    detail: str
    score_delta: int = 0
    eliminated: tuple[str, ...] = ()
    revived: str | None = None
    turn_advanced: bool = True
    round_completed: bool = False
    game_over: bool = False
    winner_name: str | None = None


@dataclass
class Match:
    """
    Represents one wheel match and its roster.

    players keeps roster (join) order; current_player_index points into it.
    """

    mode: GameMode = GameMode.BATTLE_ROYALE
    phase: MatchPhase = MatchPhase.SETUP
    players: list[Player] = field(default_factory=list)
    current_player_index: int = 0
    round: int = 1
    target_score: int | None = None
    results: list[SpinReport] = field(default_factory=list)  # Newest first
    rankings: list[RankEntry] = field(default_factory=list)
    elimination_sequence: int = 0

    @property
    def segments(self) -> tuple[Segment, ...]:
        return segments_for_mode(self.mode)

    @property
    def current_player(self) -> Player | None:
        if 0 <= self.current_player_index < len(self.players):
            return self.players[self.current_player_index]
        return None

    def active_players(self) -> list[Player]:
        return [p for p in self.players if p.status is PlayerStatus.ACTIVE]

    def eliminated_players(self) -> list[Player]:
        return [p for p in self.players if p.status is PlayerStatus.ELIMINATED]

    def winner(self) -> Player | None:
        return next((p for p in self.players if p.status is PlayerStatus.WINNER), None)

    def get_player(self, player_id: str) -> Player | None:
        return next((p for p in self.players if p.id == player_id), None)

    def next_order_key(self) -> int:
        """Advance the elimination sequence and return the new key."""
        self.elimination_sequence += 1
        return self.elimination_sequence

    def record_result(self, report: SpinReport, limit: int) -> None:
        self.results.insert(0, report)
        del self.results[limit:]

    def reset_runtime(self) -> None:
        """Put the match back to its first turn, keeping the roster."""
        self.current_player_index = 0
        self.round = 1
        self.results = []
        self.rankings = []
        self.elimination_sequence = 0
        for player in self.players:
            player.reset_runtime()
