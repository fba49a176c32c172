"""
Player domain model.
"""

import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Callable


class PlayerStatus(str, Enum):
    ACTIVE = "active"
    ELIMINATED = "eliminated"
    WINNER = "winner"


class EliminationCause(str, Enum):
    DEFEAT = "Defeat"
    DOUBLE_ELIMINATION = "Double Elimination"
    SUDDEN_DEATH = "Sudden Death"


@dataclass(frozen=True)
class EliminationRecord:
    """
    How and when a player left the match.

    order_key comes from the match's elimination sequence and imposes a strict
    total order over every elimination in the match.
    """

    cause: EliminationCause
    round: int
    order_key: int
    eliminated_by: str | None = None  # Name of the player who triggered a double elimination


@dataclass
class Player:
    """
    Represents a player in a wheel match.

    This is a pure domain model with no infrastructure dependencies.
    """

    id: str
    name: str
    status: PlayerStatus = PlayerStatus.ACTIVE
    score: int = 0
    elimination: EliminationRecord | None = None
    revival_count: int = 0

    @property
    def is_active(self) -> bool:
        return self.status is PlayerStatus.ACTIVE

    def eliminate(self, record: EliminationRecord) -> None:
        self.status = PlayerStatus.ELIMINATED
        self.elimination = record

    def revive(self) -> None:
        """Bring an eliminated player back into the match."""
        self.status = PlayerStatus.ACTIVE
        self.elimination = None
        self.revival_count += 1

    def reset_runtime(self) -> None:
        """Clear everything a match writes, keeping identity."""
        self.status = PlayerStatus.ACTIVE
        self.score = 0
        self.elimination = None
        self.revival_count = 0

    def __str__(self) -> str:
        return f"{self.name} ({self.status.value}, score: {self.score})"


IdGenerator = Callable[[], str]


def sequential_id_generator(prefix: str = "player") -> IdGenerator:
    """
    Build an id generator yielding prefix-1, prefix-2, ...

    Each generator owns its own counter, so ids are unique per generator and
    never reused.
    """
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"
