"""
Permission checks for privileged wheel commands (the rig).
"""

import discord

from config import ADMIN_USER_IDS


def has_allowlisted_admin(interaction: discord.Interaction) -> bool:
    """True if the user is listed in ADMIN_USER_IDS. An empty list allows nobody."""
    return interaction.user.id in ADMIN_USER_IDS


def has_admin_permission(interaction: discord.Interaction) -> bool:
    """
    Check if the user may use admin-only wheel commands.

    ADMIN_USER_IDS wins; otherwise Administrator or Manage Server in the
    current guild is required. DMs only pass through the allowlist.
    """
    if has_allowlisted_admin(interaction):
        return True

    if interaction.guild:
        get_member = getattr(interaction.guild, "get_member", None)
        if callable(get_member):
            member = get_member(interaction.user.id)
            if member and getattr(member, "guild_permissions", None):
                return member.guild_permissions.administrator or member.guild_permissions.manage_guild

    # Mocks and partial objects may carry permissions on the user itself
    perms = getattr(interaction.user, "guild_permissions", None)
    if perms:
        return bool(getattr(perms, "administrator", False) or getattr(perms, "manage_guild", False))

    return False
