"""
Guild-related utilities.
"""


def normalize_guild_id(guild_id: int | None) -> int:
    """
    Normalize a guild ID for session keys.

    DMs (and tests) have no guild; they share the key 0.

    Examples:
        >>> normalize_guild_id(123456789)
        123456789
        >>> normalize_guild_id(None)
        0
    """
    return guild_id if guild_id is not None else 0
