"""Shared behaviour for slash command cogs."""
from __future__ import annotations

import asyncio
import functools
import logging
from typing import Any, Callable, TypeVar

import discord
from discord import app_commands
from discord.ext import commands

from ...interactions import safe_edit

LOG = logging.getLogger("lostbot.discord.cogs")

T = TypeVar("T")

GENERIC_FAILURE = "Something went wrong."


class GuardedCog(commands.Cog):
    """Cog whose command failures end in a generic reply instead of silence."""

    def __init__(self, bot):
        self.bot = bot

    async def run_blocking(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run a blocking client call off the event loop."""
        return await asyncio.to_thread(functools.partial(func, *args, **kwargs))

    async def cog_app_command_error(
        self, interaction: discord.Interaction, error: app_commands.AppCommandError
    ) -> None:
        original = getattr(error, "original", error)
        command = interaction.command.qualified_name if interaction.command else "?"
        # The tree's on_error logs the traceback
        LOG.error("Interaction error in /%s: %s", command, original)
        await safe_edit(interaction, content=GENERIC_FAILURE)
