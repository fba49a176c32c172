"""
Turn order helpers.
"""

from collections.abc import Sequence

from domain.models.player import Player


def next_active_index(from_index: int, players: Sequence[Player]) -> int:
    """
    Find the next active player after from_index, wrapping around the roster.

    The scan visits each roster slot at most once (ending on from_index
    itself). If nobody is active, from_index is returned unchanged; callers
    detect the "no active players" terminal state before calling.
    """
    total = len(players)
    if total == 0:
        return from_index
    for step in range(1, total + 1):
        idx = (from_index + step) % total
        if players[idx].is_active:
            return idx
    return from_index


def is_round_complete(from_index: int, next_index: int) -> bool:
    """
    A round ends when sequencing wraps past the end of the roster.

    This is an index-wrap approximation, not an "everyone has acted once"
    tracker: eliminating a player behind the current index shortens the lap
    without the round counter noticing.
    """
    return next_index <= from_index
