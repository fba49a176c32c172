"""
Wheel session management.

Keeps one WheelGameService per (guild, channel) so several channels can run
independent matches at once.
"""

import logging
from collections.abc import Callable

from services.wheel_game_service import WheelGameService
from utils.guild import normalize_guild_id

logger = logging.getLogger("party_wheel.services.sessions")

SessionKey = tuple[int, int]


class GameSessionManager:
    """
    Manages in-memory wheel sessions.

    Responsibilities:
    - Create a game service on first use in a channel
    - Look sessions up by guild and channel
    - Shut every session's timers down when the cog unloads

    Structure: dict[(guild_id, channel_id), WheelGameService]
    """

    def __init__(self, factory: Callable[[], WheelGameService]):
        self._factory = factory
        self._sessions: dict[SessionKey, WheelGameService] = {}

    @staticmethod
    def _key(guild_id: int | None, channel_id: int) -> SessionKey:
        return normalize_guild_id(guild_id), channel_id

    def get(self, guild_id: int | None, channel_id: int) -> WheelGameService | None:
        """
        Get the session for a channel.

        Args:
            guild_id: Guild ID (or None for DMs)
            channel_id: Channel the match runs in

        Returns:
            The channel's game service, or None if no session exists
        """
        return self._sessions.get(self._key(guild_id, channel_id))

    def get_or_create(self, guild_id: int | None, channel_id: int) -> WheelGameService:
        key = self._key(guild_id, channel_id)
        session = self._sessions.get(key)
        if session is None:
            session = self._factory()
            self._sessions[key] = session
            logger.info(f"Created wheel session for guild={key[0]} channel={channel_id}")
        return session

    def shutdown_all(self) -> None:
        """Cancel every session's pending spin and timers and forget them."""
        for session in self._sessions.values():
            session.shutdown()
        self._sessions.clear()
