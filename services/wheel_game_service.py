"""
Wheel game orchestration.

Wraps a MatchEngine with Result-returning operations and the spin timing
rules: a spin is resolved immediately, its outcome is applied after a fixed
presentation delay, and only one spin may be in flight at a time.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from domain.models.match import Match, MatchPhase, SpinReport
from domain.models.player import Player
from domain.models.ranking import MatchHighlights, RankEntry
from domain.models.segment import GameMode, Segment, favorable_indices
from domain.services.match_engine import MatchEngine
from domain.services.ranking_service import compute_highlights
from domain.services.spin_resolver import DEFAULT_FULL_TURNS, RigDirective, resolve_spin
from services import error_codes
from services.interfaces import IWheelGameService
from services.result import Result
from services.spin_scheduler import DeferredCall

logger = logging.getLogger("party_wheel.services.wheel_game")

OutcomeListener = Callable[[SpinReport], Awaitable[None]]


@dataclass(frozen=True)
class SpinHandle:
    """A resolved spin whose outcome has not been applied yet."""

    target_rotation: float
    segment_index: int
    segment: Segment
    player_id: str
    rigged: bool = False
    _cancel: Callable[[], bool] = field(default=lambda: False, repr=False, compare=False)

    def cancel(self) -> bool:
        """Stop this spin's outcome from being applied. False if it already landed."""
        return self._cancel()


class WheelGameService(IWheelGameService):
    """
    Runs one wheel match for a channel.

    Responsibilities:
    - Roster and phase operations with user-facing error reporting
    - Spin resolution, including the per-player rig
    - Deferred outcome delivery guarded by the spinning flag
    - Auto-spin re-triggering
    - Notifying listeners of every applied outcome
    """

    def __init__(
        self,
        engine: MatchEngine | None = None,
        *,
        presentation_delay: float = 4.1,
        auto_spin_delay: float = 2.0,
        auto_spin_enabled: bool = True,
        rng: random.Random | None = None,
        full_turns: tuple[int, int] = DEFAULT_FULL_TURNS,
    ):
        self.engine = engine or MatchEngine(rng=rng)
        self.rng = rng or self.engine.rng
        self.presentation_delay = presentation_delay
        self.auto_spin_delay = auto_spin_delay
        self.auto_spin_enabled = auto_spin_enabled
        self.full_turns = full_turns
        self.rotation = 0.0
        self.spinning = False
        self.rigged_player_id: str | None = None
        self._spin_serial = 0
        self._spin_call = DeferredCall("spin-outcome")
        self._auto_spin_call = DeferredCall("auto-spin")
        self._listeners: list[OutcomeListener] = []

    @property
    def match(self) -> Match:
        return self.engine.match

    @property
    def auto_spin_pending(self) -> bool:
        return self._auto_spin_call.pending

    def add_listener(self, listener: OutcomeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: OutcomeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def _require_setup(self, action: str) -> Result | None:
        if self.match.phase is not MatchPhase.SETUP:
            return Result.fail(
                f"You can only {action} before the match starts.",
                code=error_codes.STATE_ERROR,
            )
        return None

    def configure_match(self, mode: GameMode, target_score: int | None = None) -> Result[Match]:
        failure = self._require_setup("change the game mode")
        if failure is not None:
            return failure
        if target_score is not None and target_score <= 0:
            return Result.fail("Target score must be positive.", code=error_codes.VALIDATION_ERROR)
        self.engine.configure(mode, target_score)
        logger.info(f"Match configured: mode={mode.value}, target={self.match.target_score}")
        return Result.ok(self.match)

    def add_player(self, name: str) -> Result[Player]:
        failure = self._require_setup("add players")
        if failure is not None:
            return failure
        if self.engine.is_roster_full():
            return Result.fail(
                f"The roster is full ({self.engine.max_players} players).",
                code=error_codes.ROSTER_FULL,
            )
        if self.engine.normalize_name(name) is None:
            return Result.fail(
                f"Player names must be 1-{self.engine.max_name_length} characters.",
                code=error_codes.VALIDATION_ERROR,
            )
        player = self.engine.add_player(name)
        logger.info(f"Player added: {player.name} ({player.id})")
        return Result.ok(player)

    def remove_player(self, player_id: str) -> Result[Player]:
        failure = self._require_setup("remove players")
        if failure is not None:
            return failure
        player = self.engine.remove_player(player_id)
        if player is None:
            return Result.fail("No such player on the roster.", code=error_codes.PLAYER_NOT_FOUND)
        if self.rigged_player_id == player_id:
            self.rigged_player_id = None
        logger.info(f"Player removed: {player.name} ({player.id})")
        return Result.ok(player)

    def find_player(self, query: str) -> Player | None:
        """Look a player up by id, then by case-insensitive name."""
        player = self.match.get_player(query)
        if player:
            return player
        lowered = query.strip().lower()
        return next((p for p in self.match.players if p.name.lower() == lowered), None)

    # ------------------------------------------------------------------
    # Phase transitions
    # ------------------------------------------------------------------

    def start_match(self) -> Result[Match]:
        failure = self._require_setup("start a match")
        if failure is not None:
            return failure
        if not self.engine.can_start():
            needed = self.engine.min_players()
            return Result.fail(
                f"At least {needed} player{'s' if needed != 1 else ''} needed to start.",
                code=error_codes.INSUFFICIENT_PLAYERS,
            )
        self._cancel_timers()
        self.engine.start()
        return Result.ok(self.match)

    def play_again(self) -> Result[Match]:
        if self.match.phase is not MatchPhase.FINISHED:
            return Result.fail("The match is not finished yet.", code=error_codes.STATE_ERROR)
        self._cancel_timers()
        if not self.engine.play_again():
            return Result.fail("Not enough players to play again.", code=error_codes.INSUFFICIENT_PLAYERS)
        return Result.ok(self.match)

    def reset_match(self) -> Result[Match]:
        self._cancel_timers()
        self.engine.reset()
        logger.info("Match reset to setup")
        return Result.ok(self.match)

    def new_game(self) -> Result[Match]:
        self._cancel_timers()
        self.engine.new_game()
        self.rigged_player_id = None
        logger.info("New game: roster cleared")
        return Result.ok(self.match)

    def shutdown(self) -> None:
        """Cancel everything pending; used when the session is discarded."""
        self._cancel_timers()
        self._listeners.clear()

    # ------------------------------------------------------------------
    # Rig and auto-spin
    # ------------------------------------------------------------------

    def enable_rig(self, player_id: str) -> Result[Player]:
        player = self.match.get_player(player_id)
        if player is None:
            return Result.fail("No such player on the roster.", code=error_codes.PLAYER_NOT_FOUND)
        self.rigged_player_id = player.id
        logger.info(f"Rig enabled for {player.name} ({player.id})")
        return Result.ok(player)

    def disable_rig(self) -> None:
        self.rigged_player_id = None

    def set_auto_spin(self, enabled: bool) -> Result[bool]:
        self.auto_spin_enabled = enabled
        if not enabled:
            self._auto_spin_call.cancel()
        return Result.ok(enabled)

    # ------------------------------------------------------------------
    # Spins
    # ------------------------------------------------------------------

    def _rig_for_current(self, rigged_for: str | None) -> RigDirective | None:
        target = rigged_for if rigged_for is not None else self.rigged_player_id
        current = self.match.current_player
        if target is None or current is None or current.id != target:
            return None
        return RigDirective(active=True, favored_indices=favorable_indices(self.match.segments))

    def request_spin(self, rigged_for: str | None = None) -> Result[SpinHandle]:
        """
        Resolve a spin for the current player.

        The landing segment is decided now and returned in the handle; the
        match only changes when the outcome is delivered after
        presentation_delay. Must be called from a running event loop.

        Args:
            rigged_for: Player id to rig this spin for. Defaults to the
                player chosen with enable_rig. Only takes effect when that
                player is the one spinning.
        """
        if self.match.phase is not MatchPhase.PLAYING:
            return Result.fail("There is no match in progress.", code=error_codes.STATE_ERROR)
        if self.spinning:
            return Result.fail("The wheel is already spinning.", code=error_codes.SPIN_IN_PROGRESS)
        if not self.engine.can_spin():
            return Result.fail("The current player cannot spin.", code=error_codes.PLAYER_NOT_ACTIVE)

        segments = self.match.segments
        player = self.match.current_player
        rig = self._rig_for_current(rigged_for)
        resolution = resolve_spin(
            self.rotation,
            len(segments),
            rig=rig,
            rng=self.rng,
            full_turns=self.full_turns,
        )

        self.rotation = resolution.target_rotation
        self.spinning = True
        self._auto_spin_call.cancel()
        self._spin_serial += 1
        serial = self._spin_serial
        index = resolution.segment_index

        async def deliver() -> None:
            await self._deliver_outcome(serial, index)

        self._spin_call.start(self.presentation_delay, deliver)
        logger.debug(
            f"Spin {serial} for {player.name}: index={index} "
            f"rotation={resolution.target_rotation:.2f} rigged={resolution.rigged}"
        )
        return Result.ok(
            SpinHandle(
                target_rotation=resolution.target_rotation,
                segment_index=index,
                segment=segments[index],
                player_id=player.id,
                rigged=resolution.rigged,
                _cancel=lambda: self.cancel_spin(serial),
            )
        )

    def cancel_spin(self, serial: int | None = None) -> bool:
        """
        Cancel the in-flight spin so its outcome is never applied.

        Args:
            serial: Only cancel if this is still the in-flight spin

        Returns:
            True if a spin was cancelled
        """
        if not self.spinning:
            return False
        if serial is not None and serial != self._spin_serial:
            return False
        self._spin_call.cancel()
        self.spinning = False
        logger.debug(f"Spin {self._spin_serial} cancelled")
        return True

    async def _deliver_outcome(self, serial: int, segment_index: int) -> None:
        if serial != self._spin_serial or not self.spinning:
            return
        self.spinning = False
        report = self.engine.apply_outcome(segment_index)
        if report is None:
            logger.debug(f"Spin {serial} landed with no eligible player; ignored")
            return

        logger.info(f"[{report.segment_label}] {report.detail}")
        await self._notify(report)

        if self.auto_spin_enabled and self.match.phase is MatchPhase.PLAYING and not self.spinning:
            self._auto_spin_call.start(self.auto_spin_delay, self._auto_spin)

    async def _auto_spin(self) -> None:
        result = self.request_spin()
        if not result:
            logger.debug(f"Auto-spin skipped: {result.error}")

    async def _notify(self, report: SpinReport) -> None:
        for listener in list(self._listeners):
            try:
                await listener(report)
            except Exception as exc:
                logger.warning(f"Spin listener failed: {exc}", exc_info=True)

    def _cancel_timers(self) -> None:
        self.cancel_spin()
        self._auto_spin_call.cancel()

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    def standings(self) -> list[RankEntry]:
        return self.engine.standings()

    def highlights(self) -> MatchHighlights | None:
        if self.match.phase is not MatchPhase.FINISHED or self.match.mode is not GameMode.BATTLE_ROYALE:
            return None
        return compute_highlights(self.match.rankings)
