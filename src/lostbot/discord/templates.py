"""Discord embed templates for the Lost Family Bot.

Small templating helpers to keep embed formatting consistent across cogs.
"""
from __future__ import annotations

import discord

from ..formatting import format_member_lines
from ..pagination import MemberPage

APPLICATION_COLOR = 0x00AE86
MEMBERS_COLOR = 0x0099FF
REMINDER_COLOR = 0xFF0000

_DESCRIPTION_LIMIT = 4096


def application_embed(tickets_mention: str) -> discord.Embed:
    """Daily 'how to apply' announcement."""
    return discord.Embed(
        title="Clan Applications",
        description=(
            f"To apply for a Lost Family clan, please go to {tickets_mention} "
            "and select application from the ticket dropdown."
        ),
        color=APPLICATION_COLOR,
    )


def reminder_embed() -> discord.Embed:
    return discord.Embed(
        title="⏰ Reminder",
        description="We are still awaiting a response from you. Please reply to the ticket when you're ready.",
        color=REMINDER_COLOR,
    )


def members_embed(page: MemberPage) -> discord.Embed:
    description = format_member_lines(page.members, page.start) or "No members."
    return discord.Embed(
        title=f"Clan Members - Page {page.page}/{page.total_pages}",
        description=description[:_DESCRIPTION_LIMIT],
        color=MEMBERS_COLOR,
    )


def help_text(commands: list[tuple[str, str]]) -> str:
    """Render `(name, description)` pairs as a command list."""
    lines = ["📖 **Available commands:**"]
    lines.extend(f"- `/{name}` - {description}" for name, description in commands)
    return "\n".join(lines)
