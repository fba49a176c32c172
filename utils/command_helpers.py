"""
Command helper utilities for the wheel slash commands.

Turns service Results into Discord replies so each handler only deals with
the success path.
"""

from typing import TYPE_CHECKING

import discord

from utils.interaction_safety import safe_followup

if TYPE_CHECKING:
    from services.result import Result


def format_result_error(result: "Result") -> str:
    """
    Format a Result error for display.

    Args:
        result: A failed Result

    Returns:
        Error string prefixed with a cross, or "" for a successful result
    """
    if result.success:
        return ""
    return f"❌ {result.error or 'Something went wrong.'}"


async def handle_result(
    interaction: discord.Interaction,
    result: "Result",
    success_msg: str | None = None,
    ephemeral: bool = True,
) -> bool:
    """
    Report a failed Result to the user, or send success_msg if given.

    Returns:
        True if the result was successful, False otherwise

    Usage:
        result = game.start_match()
        if not await handle_result(interaction, result):
            return  # Error was already reported to user
    """
    if not result.success:
        await safe_followup(interaction, content=format_result_error(result), ephemeral=True)
        return False

    if success_msg:
        await safe_followup(interaction, content=success_msg, ephemeral=ephemeral)
    return True
