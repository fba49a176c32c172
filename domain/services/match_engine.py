"""
Match state machine.

Owns a Match and applies landed spins to it. Phases move
setup -> playing -> finished; finished -> playing (play again) and
playing/finished -> setup (reset, new game) are the only other transitions.

Everything here is synchronous and deterministic given the injected random
source and id generator. Scheduling and presentation live in the service layer.
"""

import logging
import random

from domain.models.match import Match, MatchPhase, SpinReport
from domain.models.player import (
    EliminationCause,
    EliminationRecord,
    IdGenerator,
    Player,
    PlayerStatus,
    sequential_id_generator,
)
from domain.models.ranking import RankEntry
from domain.models.segment import (
    NORMAL_SCORE_DELTAS,
    BattleOutcome,
    GameMode,
    NormalOutcome,
    Segment,
)
from domain.services.ranking_service import compute_rankings, compute_score_standings
from domain.services.turn_sequencer import is_round_complete, next_active_index

logger = logging.getLogger("party_wheel.domain.match_engine")

MIN_PLAYERS: dict[GameMode, int] = {
    GameMode.NORMAL: 1,
    GameMode.BATTLE_ROYALE: 2,
}

SUDDEN_DEATH_ELIMINATION_CHANCE = 0.5


class MatchEngine:
    """
    Pure domain service driving one match.

    Responsibilities:
    - Roster management during setup
    - Phase transitions
    - Normal (scoring) and Battle Royale (elimination) outcome handling
    - Turn and round advancement
    - Final standings when the match finishes
    """

    def __init__(
        self,
        mode: GameMode = GameMode.BATTLE_ROYALE,
        target_score: int | None = None,
        *,
        rng: random.Random | None = None,
        id_generator: IdGenerator | None = None,
        max_players: int = 64,
        max_name_length: int = 24,
        default_target_score: int = 100,
        result_log_limit: int = 30,
    ):
        """
        Initialize the engine with an empty roster in the setup phase.

        Args:
            mode: Game mode for the first match
            target_score: Normal mode win threshold (default_target_score if omitted)
            rng: Random source for victims, revivals and sudden death
            id_generator: Produces unique player ids
            max_players: Roster size limit
            max_name_length: Longest accepted player name
            default_target_score: Threshold used when Normal mode is chosen without one
            result_log_limit: Number of spin reports kept on the match
        """
        self.rng = rng or random.Random()
        self.id_generator = id_generator or sequential_id_generator()
        self.max_players = max_players
        self.max_name_length = max_name_length
        self.default_target_score = default_target_score
        self.result_log_limit = result_log_limit
        self.match = Match(mode=mode, target_score=self._target_for(mode, target_score))

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def _target_for(self, mode: GameMode, target_score: int | None) -> int | None:
        if mode is not GameMode.NORMAL:
            return None
        return target_score if target_score is not None else self.default_target_score

    def configure(self, mode: GameMode, target_score: int | None = None) -> bool:
        """Choose the game mode (and Normal target). Setup phase only."""
        if self.match.phase is not MatchPhase.SETUP:
            return False
        if target_score is not None and target_score <= 0:
            return False
        self.match.mode = mode
        self.match.target_score = self._target_for(mode, target_score)
        return True

    def normalize_name(self, name: str) -> str | None:
        """Return the cleaned name, or None if it is empty or too long."""
        cleaned = (name or "").strip()
        if not cleaned or len(cleaned) > self.max_name_length:
            return None
        return cleaned

    def is_roster_full(self) -> bool:
        return len(self.match.players) >= self.max_players

    def add_player(self, name: str) -> Player | None:
        if self.match.phase is not MatchPhase.SETUP or self.is_roster_full():
            return None
        cleaned = self.normalize_name(name)
        if cleaned is None:
            return None
        player = Player(id=self.id_generator(), name=cleaned)
        self.match.players.append(player)
        return player

    def remove_player(self, player_id: str) -> Player | None:
        if self.match.phase is not MatchPhase.SETUP:
            return None
        player = self.match.get_player(player_id)
        if player is None:
            return None
        self.match.players.remove(player)
        return player

    # ------------------------------------------------------------------
    # Phase transitions
    # ------------------------------------------------------------------

    def min_players(self) -> int:
        return MIN_PLAYERS[self.match.mode]

    def can_start(self) -> bool:
        return (
            self.match.phase is MatchPhase.SETUP
            and len(self.match.players) >= self.min_players()
        )

    def _begin(self) -> None:
        self.match.reset_runtime()
        self.match.phase = MatchPhase.PLAYING
        logger.info(
            f"Match started: mode={self.match.mode.value}, players={len(self.match.players)}"
        )

    def start(self) -> bool:
        if not self.can_start():
            return False
        self._begin()
        return True

    def play_again(self) -> bool:
        """Replay a finished match with the same roster."""
        if self.match.phase is not MatchPhase.FINISHED:
            return False
        if len(self.match.players) < self.min_players():
            return False
        self._begin()
        return True

    def reset(self) -> None:
        """Return to setup keeping the roster. Calling it again changes nothing."""
        self.match.reset_runtime()
        self.match.phase = MatchPhase.SETUP

    def new_game(self) -> None:
        """Return to setup with an empty roster."""
        self.reset()
        self.match.players = []

    # ------------------------------------------------------------------
    # Spins
    # ------------------------------------------------------------------

    def can_spin(self) -> bool:
        current = self.match.current_player
        return (
            self.match.phase is MatchPhase.PLAYING
            and current is not None
            and current.is_active
            and bool(self.match.active_players())
        )

    def apply_outcome(self, segment_index: int) -> SpinReport | None:
        """
        Apply the segment the wheel landed on to the current player.

        Returns None (and changes nothing) when no spin is possible: the match
        is not playing, the current player is not active, or nobody is.

        Raises:
            ValueError: If segment_index is not on the wheel
        """
        segments = self.match.segments
        if not 0 <= segment_index < len(segments):
            raise ValueError(f"Segment index {segment_index} out of range 0..{len(segments) - 1}")
        if not self.can_spin():
            return None

        segment = segments[segment_index]
        if self.match.mode is GameMode.NORMAL:
            report = self._apply_normal(segment_index, segment)
        else:
            report = self._apply_battle(segment_index, segment)

        self.match.record_result(report, self.result_log_limit)
        return report

    def _advance_turn(self) -> tuple[bool, bool]:
        from_index = self.match.current_player_index
        next_index = next_active_index(from_index, self.match.players)
        self.match.current_player_index = next_index
        round_completed = is_round_complete(from_index, next_index)
        if round_completed:
            self.match.round += 1
        return True, round_completed

    def _finish(self) -> None:
        self.match.phase = MatchPhase.FINISHED
        if self.match.mode is GameMode.NORMAL:
            self.match.rankings = compute_score_standings(self.match.players, self.match.round)
        else:
            self.match.rankings = compute_rankings(self.match.players, self.match.round)
        logger.info(
            f"Match finished in round {self.match.round}; "
            f"winner={getattr(self.match.winner(), 'name', None)}"
        )

    def _apply_normal(self, segment_index: int, segment: Segment) -> SpinReport:
        player = self.match.current_player
        outcome = segment.outcome
        advance = True

        if outcome in NORMAL_SCORE_DELTAS:
            delta = NORMAL_SCORE_DELTAS[outcome]
            verb = "gains" if delta >= 0 else "loses"
            detail = f"{player.name} {verb} {abs(delta)} points!"
        elif outcome is NormalOutcome.SPIN_AGAIN:
            delta = 0
            advance = False
            detail = f"{player.name} gets to spin again!"
        elif outcome is NormalOutcome.DOUBLE_POINTS:
            delta = player.score
            detail = f"Double points! {player.name} goes from {player.score} to {player.score + delta}!"
        elif outcome is NormalOutcome.LOSE_TURN:
            delta = 0
            detail = f"{player.name} loses their turn!"
        else:
            raise ValueError(f"Unhandled normal outcome: {outcome}")

        player.score += delta

        winner_name = None
        game_over = False
        turn_advanced = False
        round_completed = False
        target = self.match.target_score
        if target is not None and player.score >= target:
            player.status = PlayerStatus.WINNER
            winner_name = player.name
            game_over = True
            detail = f"{detail} {player.name} reaches {player.score} and wins!"
            self._finish()
        elif advance:
            turn_advanced, round_completed = self._advance_turn()

        return SpinReport(
            player_id=player.id,
            player_name=player.name,
            segment_index=segment_index,
            segment_label=segment.label,
            outcome=outcome,
            detail=detail,
            score_delta=delta,
            turn_advanced=turn_advanced,
            round_completed=round_completed,
            game_over=game_over,
            winner_name=winner_name,
        )

    def _eliminate(
        self,
        player: Player,
        cause: EliminationCause,
        eliminated_by: str | None = None,
    ) -> None:
        record = EliminationRecord(
            cause=cause,
            round=self.match.round,
            order_key=self.match.next_order_key(),
            eliminated_by=eliminated_by,
        )
        player.eliminate(record)
        logger.debug(
            f"{player.name} eliminated: cause={cause.value}, round={record.round}, key={record.order_key}"
        )

    def _apply_battle(self, segment_index: int, segment: Segment) -> SpinReport:
        player = self.match.current_player
        outcome = segment.outcome
        eliminated: list[str] = []
        revived: str | None = None

        if outcome is BattleOutcome.VICTORY:
            detail = f"{player.name} is victorious! Advances to next round."
        elif outcome is BattleOutcome.DEFEAT:
            self._eliminate(player, EliminationCause.DEFEAT)
            eliminated.append(player.id)
            detail = f"{player.name} has been defeated and eliminated!"
        elif outcome is BattleOutcome.IMMUNITY:
            detail = f"{player.name} gained immunity! Safe this round."
        elif outcome is BattleOutcome.DOUBLE_ELIMINATION:
            # Spinner first so the victim always gets the larger order key
            self._eliminate(player, EliminationCause.DOUBLE_ELIMINATION)
            eliminated.append(player.id)
            others = [p for p in self.match.players if p.is_active and p is not player]
            if others:
                victim = self.rng.choice(others)
                self._eliminate(victim, EliminationCause.DOUBLE_ELIMINATION, eliminated_by=player.name)
                eliminated.append(victim.id)
                detail = f"Double elimination! {player.name} and {victim.name} are both eliminated!"
            else:
                detail = f"{player.name} has been eliminated!"
        elif outcome is BattleOutcome.SUDDEN_DEATH:
            if self.rng.random() < SUDDEN_DEATH_ELIMINATION_CHANCE:
                self._eliminate(player, EliminationCause.SUDDEN_DEATH)
                eliminated.append(player.id)
                detail = f"Sudden Death! {player.name} didn't survive!"
            else:
                detail = f"Sudden Death! {player.name} survived!"
        elif outcome is BattleOutcome.EXTRA_LIFE:
            candidates = self.match.eliminated_players()
            if candidates:
                lucky = self.rng.choice(candidates)
                lucky.revive()
                revived = lucky.id
                detail = f"Extra Life! {player.name} revived {lucky.name}!"
            else:
                detail = f"{player.name} found an Extra Life, but no one to revive!"
        else:
            raise ValueError(f"Unhandled battle outcome: {outcome}")

        winner_name = None
        game_over = False
        turn_advanced = False
        round_completed = False
        remaining = self.match.active_players()
        if len(remaining) <= 1:
            game_over = True
            if remaining:
                remaining[0].status = PlayerStatus.WINNER
                winner_name = remaining[0].name
            self._finish()
        else:
            turn_advanced, round_completed = self._advance_turn()

        return SpinReport(
            player_id=player.id,
            player_name=player.name,
            segment_index=segment_index,
            segment_label=segment.label,
            outcome=outcome,
            detail=detail,
            eliminated=tuple(eliminated),
            revived=revived,
            turn_advanced=turn_advanced,
            round_completed=round_completed,
            game_over=game_over,
            winner_name=winner_name,
        )

    def standings(self) -> list[RankEntry]:
        """Final standings once finished, a live score table otherwise (Normal mode)."""
        if self.match.phase is MatchPhase.FINISHED:
            return list(self.match.rankings)
        if self.match.mode is GameMode.NORMAL and self.match.phase is MatchPhase.PLAYING:
            return compute_score_standings(self.match.players, self.match.round)
        return []
