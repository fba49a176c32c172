"""Discord embed limits for wheel embeds.

Rosters reach 64 players and the result log 30 entries, so long lists are
trimmed to fit before they are placed in an embed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import discord

EMBED_LIMITS = {
    "title": 256,
    "field_value": 1024,
    "field_name": 256,
    "description": 4096,
    "footer": 2048,
    "max_fields": 25,
}


def truncate_field(text: str, max_len: int = 1024) -> str:
    """Truncate text to fit a field value, ending with "..." when cut."""
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def join_lines_within(lines: list[str], max_len: int = 1024) -> str:
    """
    Join lines with newlines, dropping whole lines that do not fit.

    A "...and N more" line replaces the dropped tail.
    """
    kept: list[str] = []
    used = 0
    reserve = len(f"\n...and {len(lines)} more")
    for idx, line in enumerate(lines):
        cost = len(line) + (1 if kept else 0)
        is_last = idx == len(lines) - 1
        if used + cost + (0 if is_last else reserve) > max_len:
            kept.append(f"...and {len(lines) - idx} more")
            break
        kept.append(line)
        used += cost
    return truncate_field("\n".join(kept), max_len)


def validate_embed(embed: discord.Embed) -> list[str]:
    """Return list of limit violations, empty if the embed is valid."""
    errors = []

    if embed.title and len(embed.title) > EMBED_LIMITS["title"]:
        errors.append(f"Title exceeds {EMBED_LIMITS['title']} chars ({len(embed.title)})")

    if embed.description and len(embed.description) > EMBED_LIMITS["description"]:
        errors.append(
            f"Description exceeds {EMBED_LIMITS['description']} chars ({len(embed.description)})"
        )

    for i, field in enumerate(embed.fields):
        if len(field.name) > EMBED_LIMITS["field_name"]:
            errors.append(f"Field {i} name exceeds {EMBED_LIMITS['field_name']} chars")
        if len(field.value) > EMBED_LIMITS["field_value"]:
            errors.append(
                f"Field {i} '{field.name}' value exceeds {EMBED_LIMITS['field_value']} chars ({len(field.value)})"
            )

    if embed.footer and embed.footer.text and len(embed.footer.text) > EMBED_LIMITS["footer"]:
        errors.append(f"Footer exceeds {EMBED_LIMITS['footer']} chars ({len(embed.footer.text)})")

    if len(embed.fields) > EMBED_LIMITS["max_fields"]:
        errors.append(f"Too many fields: {len(embed.fields)} > {EMBED_LIMITS['max_fields']}")

    return errors
