"""
Interaction response helpers that tolerate expired or already-answered interactions.
"""

import logging

import discord

logger = logging.getLogger("party_wheel.utils.interaction_safety")


async def safe_defer(interaction: discord.Interaction, ephemeral: bool = False) -> bool:
    """
    Defer an interaction response.

    Returns:
        True if the interaction can be followed up, False if it expired
    """
    if interaction.response.is_done():
        return True
    try:
        await interaction.response.defer(ephemeral=ephemeral)
        return True
    except discord.NotFound:
        logger.warning(f"Interaction expired before defer (user={interaction.user.id})")
        return False
    except discord.HTTPException as exc:
        logger.warning(f"Failed to defer interaction: {exc}")
        return False


async def safe_followup(
    interaction: discord.Interaction,
    content: str | None = None,
    embed: discord.Embed | None = None,
    ephemeral: bool = False,
    allowed_mentions: discord.AllowedMentions | None = None,
):
    """
    Send a followup message, logging instead of raising on Discord errors.

    Returns:
        The sent message, or None if sending failed
    """
    kwargs = {"ephemeral": ephemeral}
    if content is not None:
        kwargs["content"] = content
    if embed is not None:
        kwargs["embed"] = embed
    if allowed_mentions is not None:
        kwargs["allowed_mentions"] = allowed_mentions
    try:
        return await interaction.followup.send(**kwargs)
    except discord.HTTPException as exc:
        logger.warning(f"Failed to send followup: {exc}")
        return None
