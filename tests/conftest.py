"""
Shared test helpers.

Centralizes the rng stub and factories used across the suite so that
engine and service tests build matches the same way.
"""

from domain.models.match import MatchPhase
from domain.models.segment import GameMode
from domain.services.match_engine import MatchEngine
from services.wheel_game_service import WheelGameService


# =============================================================================
# CENTRALIZED CONSTANTS
# =============================================================================

TEST_GUILD_ID = 12345
"""Standard guild ID for single-guild tests."""

TEST_CHANNEL_ID = 555
"""Standard channel ID for session tests."""

# Segment indices on the two wheels
NORMAL_PLUS_10 = 0
NORMAL_PLUS_25 = 1
NORMAL_MINUS_10 = 2
NORMAL_SPIN_AGAIN = 3
NORMAL_PLUS_50 = 4
NORMAL_DOUBLE_POINTS = 5
NORMAL_MINUS_25 = 6
NORMAL_LOSE_TURN = 7

BATTLE_VICTORY = 0
BATTLE_DEFEAT = 1
BATTLE_IMMUNITY = 2
BATTLE_DOUBLE_ELIM = 3
BATTLE_SUDDEN_DEATH = 4
BATTLE_EXTRA_LIFE = 5


class ScriptedRandom:
    """
    Deterministic stand-in for random.Random.

    random() always returns `value`, uniform() interpolates with it,
    randrange() returns its lower bound and choice() picks index `pick`
    (wrapped to the sequence length).
    """

    def __init__(self, value: float = 0.0, pick: int = 0):
        self.value = value
        self.pick = pick

    def random(self) -> float:
        return self.value

    def uniform(self, a: float, b: float) -> float:
        return a + (b - a) * self.value

    def randrange(self, start: int, stop: int | None = None) -> int:
        return 0 if stop is None else start

    def choice(self, seq):
        return seq[self.pick % len(seq)]


def build_engine(
    mode: GameMode = GameMode.BATTLE_ROYALE,
    names: tuple[str, ...] = ("A", "B", "C"),
    *,
    rng=None,
    target_score: int | None = None,
    start: bool = True,
    **kwargs,
) -> MatchEngine:
    """Create an engine with a roster, started unless start=False."""
    engine = MatchEngine(mode, target_score, rng=rng or ScriptedRandom(), **kwargs)
    for name in names:
        engine.add_player(name)
    if start:
        assert engine.start()
        assert engine.match.phase is MatchPhase.PLAYING
    return engine


def build_game(
    mode: GameMode = GameMode.BATTLE_ROYALE,
    names: tuple[str, ...] = ("A", "B", "C"),
    *,
    rng=None,
    target_score: int | None = None,
    start: bool = False,
    presentation_delay: float = 0.01,
    auto_spin_delay: float = 0.01,
    auto_spin_enabled: bool = False,
    **engine_kwargs,
) -> WheelGameService:
    """Create a game service with a roster. Spin delays are short for async tests."""
    rng = rng or ScriptedRandom()
    engine = build_engine(mode, names, rng=rng, target_score=target_score, start=False, **engine_kwargs)
    game = WheelGameService(
        engine,
        presentation_delay=presentation_delay,
        auto_spin_delay=auto_spin_delay,
        auto_spin_enabled=auto_spin_enabled,
        rng=rng,
    )
    if start:
        assert game.start_match()
    return game

