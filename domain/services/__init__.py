"""
Domain services containing pure game logic.
"""

from domain.services.match_engine import MatchEngine
from domain.services.ranking_service import compute_highlights, compute_rankings, compute_score_standings
from domain.services.spin_resolver import RigDirective, SpinResolution, resolve_spin
from domain.services.turn_sequencer import is_round_complete, next_active_index

__all__ = [
    "MatchEngine",
    "RigDirective",
    "SpinResolution",
    "compute_highlights",
    "compute_rankings",
    "compute_score_standings",
    "is_round_complete",
    "next_active_index",
    "resolve_spin",
]
