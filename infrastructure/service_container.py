"""
Service container for dependency injection and initialization.

This module centralizes service creation and wiring so bot.py and the tests
build the wheel services the same way.

Usage:
    container = ServiceContainer(ServiceConfig.from_env())
    await container.initialize()

    # Access services
    sessions = container.session_manager
    roster_source = container.roster_source
"""

import logging
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from services.game_session_manager import GameSessionManager
    from services.roster_source_service import RosterSourceService

from domain.services.match_engine import MatchEngine
from domain.services.spin_resolver import DEFAULT_FULL_TURNS
from services.wheel_game_service import WheelGameService

logger = logging.getLogger("party_wheel.infrastructure.container")


@dataclass
class ServiceConfig:
    """Configuration for service initialization."""

    # Roster settings
    max_players: int = 64
    max_name_length: int = 24

    # Match settings
    default_target_score: int = 100
    result_log_limit: int = 30

    # Spin timing (seconds)
    spin_presentation_delay: float = 4.1
    auto_spin_delay: float = 2.0
    auto_spin_default: bool = True
    full_turns: tuple[int, int] = DEFAULT_FULL_TURNS

    # Roster source
    roster_source_url: str = ""
    roster_cache_seconds: int = 7200
    roster_fetch_timeout: float = 10.0
    roster_preset_players: list[str] = field(default_factory=list)

    # Seed for reproducible spins (None = system randomness)
    rng_seed: int | None = None

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        """Build a config from the values loaded in config.py."""
        import config

        return cls(
            max_players=config.WHEEL_MAX_PLAYERS,
            max_name_length=config.WHEEL_MAX_NAME_LENGTH,
            default_target_score=config.WHEEL_DEFAULT_TARGET_SCORE,
            result_log_limit=config.WHEEL_RESULT_LOG_LIMIT,
            spin_presentation_delay=config.WHEEL_SPIN_PRESENTATION_DELAY_SECONDS,
            auto_spin_delay=config.WHEEL_AUTO_SPIN_DELAY_SECONDS,
            auto_spin_default=config.WHEEL_AUTO_SPIN_DEFAULT,
            roster_source_url=config.ROSTER_SOURCE_URL,
            roster_cache_seconds=config.ROSTER_CACHE_SECONDS,
            roster_fetch_timeout=config.ROSTER_FETCH_TIMEOUT_SECONDS,
            roster_preset_players=list(config.ROSTER_PRESET_PLAYERS),
        )


class ServiceContainer:
    """
    Central container for the wheel services.

    Example:
        container = ServiceContainer(config)
        await container.initialize()

        # Services are now available
        game = container.session_manager.get_or_create(guild_id, channel_id)
    """

    def __init__(self, config: ServiceConfig | None = None):
        """
        Initialize the container with configuration.

        Args:
            config: Service configuration (uses defaults if None)
        """
        self.config = config or ServiceConfig()
        self._initialized = False
        self._rng = random.Random(self.config.rng_seed)
        self._services: dict[str, Any] = {}

    @property
    def is_initialized(self) -> bool:
        """Check if container has been initialized."""
        return self._initialized

    async def initialize(self) -> None:
        """
        Initialize all services in correct order.

        This method is idempotent - calling it multiple times has no effect.
        """
        if self._initialized:
            logger.debug("ServiceContainer already initialized, skipping")
            return

        logger.info("Initializing ServiceContainer...")

        self._init_roster_source()
        self._init_sessions()

        self._initialized = True
        logger.info("ServiceContainer initialization complete")

    def _init_roster_source(self) -> None:
        from services.roster_source_service import RosterSourceService

        self._services["roster_source"] = RosterSourceService(
            url=self.config.roster_source_url,
            cache_seconds=self.config.roster_cache_seconds,
            fallback_names=self.config.roster_preset_players,
            timeout=self.config.roster_fetch_timeout,
        )

    def _init_sessions(self) -> None:
        from services.game_session_manager import GameSessionManager

        self._services["session_manager"] = GameSessionManager(self.create_game_service)

    def create_game_service(self) -> WheelGameService:
        """Build a fresh game service for one channel."""
        engine = MatchEngine(
            rng=self._rng,
            max_players=self.config.max_players,
            max_name_length=self.config.max_name_length,
            default_target_score=self.config.default_target_score,
            result_log_limit=self.config.result_log_limit,
        )
        return WheelGameService(
            engine,
            presentation_delay=self.config.spin_presentation_delay,
            auto_spin_delay=self.config.auto_spin_delay,
            auto_spin_enabled=self.config.auto_spin_default,
            rng=self._rng,
            full_turns=self.config.full_turns,
        )

    @property
    def session_manager(self) -> "GameSessionManager | None":
        """Get the per-channel session manager."""
        return self._services.get("session_manager")

    @property
    def roster_source(self) -> "RosterSourceService | None":
        """Get the suggested-name source."""
        return self._services.get("roster_source")

    def expose_to_bot(self, bot) -> None:
        """
        Expose services to a Discord bot object.

        Cogs read them as bot.<service_name>.

        Args:
            bot: The Discord bot instance
        """
        bot.session_manager = self.session_manager
        bot.roster_source = self.roster_source
        bot.service_config = self.config

        logger.info("Services exposed to bot object")
