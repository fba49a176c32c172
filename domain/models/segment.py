"""
Wheel segment definitions for each game mode.
"""

from dataclasses import dataclass
from enum import Enum


class GameMode(str, Enum):
    NORMAL = "normal"
    BATTLE_ROYALE = "battle_royale"


class NormalOutcome(str, Enum):
    """Outcomes available on the Normal (scoring) wheel."""

    PLUS_10 = "plus_10"
    PLUS_25 = "plus_25"
    PLUS_50 = "plus_50"
    MINUS_10 = "minus_10"
    MINUS_25 = "minus_25"
    SPIN_AGAIN = "spin_again"
    DOUBLE_POINTS = "double_points"
    LOSE_TURN = "lose_turn"


class BattleOutcome(str, Enum):
    """Outcomes available on the Battle Royale (elimination) wheel."""

    VICTORY = "victory"
    DEFEAT = "defeat"
    IMMUNITY = "immunity"
    DOUBLE_ELIMINATION = "double_elimination"
    SUDDEN_DEATH = "sudden_death"
    EXTRA_LIFE = "extra_life"


# Flat score deltas for the Normal wheel; outcomes not listed have no flat delta.
NORMAL_SCORE_DELTAS: dict[NormalOutcome, int] = {
    NormalOutcome.PLUS_10: 10,
    NormalOutcome.PLUS_25: 25,
    NormalOutcome.PLUS_50: 50,
    NormalOutcome.MINUS_10: -10,
    NormalOutcome.MINUS_25: -25,
}


@dataclass(frozen=True)
class Segment:
    """One wedge of the wheel: a label, a display color and the outcome it triggers."""

    label: str
    color: str
    outcome: NormalOutcome | BattleOutcome


NORMAL_SEGMENTS: tuple[Segment, ...] = (
    Segment("+10", "#3d7a37", NormalOutcome.PLUS_10),
    Segment("+25", "#3498db", NormalOutcome.PLUS_25),
    Segment("-10", "#4a4a4a", NormalOutcome.MINUS_10),
    Segment("Spin Again", "#8e44ad", NormalOutcome.SPIN_AGAIN),
    Segment("+50", "#f1c40f", NormalOutcome.PLUS_50),
    Segment("Double Pts", "#e67e22", NormalOutcome.DOUBLE_POINTS),
    Segment("-25", "#1a1a1a", NormalOutcome.MINUS_25),
    Segment("Lose Turn", "#c0392b", NormalOutcome.LOSE_TURN),
)

BATTLE_SEGMENTS: tuple[Segment, ...] = (
    Segment("Victory", "#27ae60", BattleOutcome.VICTORY),
    Segment("Defeat", "#c0392b", BattleOutcome.DEFEAT),
    Segment("Immunity", "#2980b9", BattleOutcome.IMMUNITY),
    Segment("Double Elim", "#8e44ad", BattleOutcome.DOUBLE_ELIMINATION),
    Segment("Sudden Death", "#e74c3c", BattleOutcome.SUDDEN_DEATH),
    Segment("Extra Life", "#f39c12", BattleOutcome.EXTRA_LIFE),
    Segment("Victory", "#1abc9c", BattleOutcome.VICTORY),
    Segment("Defeat", "#e67e22", BattleOutcome.DEFEAT),
)

# Outcomes a rigged spin is steered towards
FAVORABLE_OUTCOMES: frozenset[NormalOutcome | BattleOutcome] = frozenset(
    {
        NormalOutcome.PLUS_50,
        NormalOutcome.DOUBLE_POINTS,
        BattleOutcome.VICTORY,
        BattleOutcome.IMMUNITY,
    }
)


def segments_for_mode(mode: GameMode) -> tuple[Segment, ...]:
    """Return the wheel layout for a game mode."""
    if mode is GameMode.NORMAL:
        return NORMAL_SEGMENTS
    if mode is GameMode.BATTLE_ROYALE:
        return BATTLE_SEGMENTS
    raise ValueError(f"Unknown game mode: {mode}")


def favorable_indices(segments: tuple[Segment, ...]) -> frozenset[int]:
    """Indices of the segments a rigged spin may land on."""
    return frozenset(i for i, seg in enumerate(segments) if seg.outcome in FAVORABLE_OUTCOMES)
