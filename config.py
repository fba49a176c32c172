"""
Centralized configuration for the Party Wheel bot.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()


def _parse_int(env_var: str, default: int) -> int:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_float(env_var: str, default: float) -> float:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _parse_bool(env_var: str, default: bool) -> bool:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _parse_int_list(env_var: str, default: list[int]) -> list[int]:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return [int(x.strip()) for x in raw.split(",") if x.strip()]
    except ValueError:
        return default


def _parse_str_list(env_var: str, default: list[str]) -> list[str]:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    return [x.strip() for x in raw.split(",") if x.strip()]


DISCORD_BOT_TOKEN = os.getenv("DISCORD_BOT_TOKEN")
ADMIN_USER_IDS: list[int] = _parse_int_list("ADMIN_USER_IDS", [])

# Roster limits
WHEEL_MAX_PLAYERS = _parse_int("WHEEL_MAX_PLAYERS", 64)
WHEEL_MAX_NAME_LENGTH = _parse_int("WHEEL_MAX_NAME_LENGTH", 24)

# Normal mode: first player to reach this score wins
WHEEL_DEFAULT_TARGET_SCORE = _parse_int("WHEEL_DEFAULT_TARGET_SCORE", 100)

# Spin timing (seconds)
WHEEL_SPIN_PRESENTATION_DELAY_SECONDS = _parse_float("WHEEL_SPIN_PRESENTATION_DELAY_SECONDS", 4.1)
WHEEL_AUTO_SPIN_DELAY_SECONDS = _parse_float("WHEEL_AUTO_SPIN_DELAY_SECONDS", 2.0)
WHEEL_AUTO_SPIN_DEFAULT = _parse_bool("WHEEL_AUTO_SPIN_DEFAULT", True)

# Number of spin reports kept per match (newest first)
WHEEL_RESULT_LOG_LIMIT = _parse_int("WHEEL_RESULT_LOG_LIMIT", 30)

# Suggested player names (roster source)
ROSTER_SOURCE_URL = os.getenv(
    "ROSTER_SOURCE_URL",
    "https://eu.finalfantasyxiv.com/lodestone/freecompany/9234631035923366072/member/",
)
ROSTER_CACHE_SECONDS = _parse_int("ROSTER_CACHE_SECONDS", 7200)  # 2 hours
ROSTER_FETCH_TIMEOUT_SECONDS = _parse_float("ROSTER_FETCH_TIMEOUT_SECONDS", 10.0)
ROSTER_PRESET_PLAYERS = _parse_str_list("ROSTER_PRESET_PLAYERS", [])
