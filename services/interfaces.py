"""
Service layer interfaces (ABCs).

These abstract base classes define the contracts the command layer relies on.
Services inherit from their interface; tests can mock against them.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from domain.models.match import Match
    from domain.models.player import Player
    from domain.models.ranking import MatchHighlights, RankEntry
    from domain.models.segment import GameMode
    from services.result import Result
    from services.roster_source_service import RosterFetch
    from services.wheel_game_service import SpinHandle


class IWheelGameService(ABC):
    """Interface for running one wheel match."""

    @abstractmethod
    def configure_match(self, mode: "GameMode", target_score: int | None = None) -> "Result[Match]":
        """Choose the game mode (setup phase only)."""
        ...

    @abstractmethod
    def add_player(self, name: str) -> "Result[Player]":
        """Add a player to the roster (setup phase only)."""
        ...

    @abstractmethod
    def remove_player(self, player_id: str) -> "Result[Player]":
        """Remove a player from the roster (setup phase only)."""
        ...

    @abstractmethod
    def start_match(self) -> "Result[Match]":
        """Move from setup to playing, resetting every player's runtime state."""
        ...

    @abstractmethod
    def request_spin(self, rigged_for: str | None = None) -> "Result[SpinHandle]":
        """Resolve a spin now and deliver its outcome after the presentation delay."""
        ...

    @abstractmethod
    def reset_match(self) -> "Result[Match]":
        """Cancel pending timers and return to setup, keeping the roster."""
        ...

    @abstractmethod
    def play_again(self) -> "Result[Match]":
        """Restart a finished match with the same roster."""
        ...

    @abstractmethod
    def new_game(self) -> "Result[Match]":
        """Cancel pending timers and return to setup with an empty roster."""
        ...

    @abstractmethod
    def standings(self) -> "list[RankEntry]":
        """Current standings (final rankings once finished)."""
        ...

    @abstractmethod
    def highlights(self) -> "MatchHighlights | None":
        """Post-match trivia for a finished Battle Royale match."""
        ...


class IRosterSource(ABC):
    """Interface for suggested player name providers."""

    @abstractmethod
    def fetch_names(self) -> "RosterFetch":
        """Return suggested names. Never raises."""
        ...
