"""
Application services layer.

Services orchestrate wheel matches on top of the pure domain services.
"""

from services.game_session_manager import GameSessionManager
from services.permissions import has_admin_permission, has_allowlisted_admin

# Result type for consistent error handling
from services.result import Result
from services.roster_source_service import RosterFetch, RosterSourceService
from services.wheel_game_service import SpinHandle, WheelGameService

# Service interfaces (ABCs)
from services.interfaces import IRosterSource, IWheelGameService

__all__ = [
    # Concrete services
    "WheelGameService",
    "SpinHandle",
    "GameSessionManager",
    "RosterSourceService",
    "RosterFetch",
    # Permissions
    "has_admin_permission",
    "has_allowlisted_admin",
    # Result type
    "Result",
    # Interfaces
    "IWheelGameService",
    "IRosterSource",
]
