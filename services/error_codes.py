"""
Standard error codes for the service layer.

Command handlers branch on these instead of parsing error message text.

Usage:
    from services.error_codes import ROSTER_FULL
    from services.result import Result

    if engine.is_roster_full():
        return Result.fail("The roster is full", code=ROSTER_FULL)
"""

# General errors
VALIDATION_ERROR = "validation_error"
STATE_ERROR = "state_error"

# Roster errors
PLAYER_NOT_FOUND = "player_not_found"
ROSTER_FULL = "roster_full"
INSUFFICIENT_PLAYERS = "insufficient_players"

# Spin errors
SPIN_IN_PROGRESS = "spin_in_progress"
PLAYER_NOT_ACTIVE = "player_not_active"
