from __future__ import annotations

import logging
import math
from typing import Optional

import discord
from discord import app_commands

from ...formatting import DISCORD_MESSAGE_LIMIT, truncate
from ...games import RPS_CHOICES, play_rps
from ...interactions import safe_defer, safe_edit
from ...llm import GenerationConfig, ask, roast
from ..templates import help_text
from .base import GuardedCog

LOG = logging.getLogger("lostbot.discord.fun")

CUT_SHORT = "\n\n*(answer cut short)*"


class FunCog(GuardedCog, name="Fun"):
    """Latency check, AI chat and small games."""

    @property
    def generation_config(self) -> GenerationConfig:
        llm = self.bot.config.llm
        return GenerationConfig(max_tokens=llm.max_tokens, temperature=llm.temperature)

    @app_commands.command(name="ping", description="Check if the bot is alive.")
    async def cmd_ping(self, interaction: discord.Interaction):
        if not await safe_defer(interaction):
            return
        latency = self.bot.latency
        if math.isfinite(latency):
            await safe_edit(interaction, content=f"🏓 Pong! ({latency * 1000:.0f}ms)")
        else:
            await safe_edit(interaction, content="🏓 Pong!")

    @app_commands.command(name="ask", description="Ask any question to OpenAI.")
    @app_commands.describe(question="Your question")
    async def cmd_ask(self, interaction: discord.Interaction, question: str):
        if not await safe_defer(interaction):
            return
        response = await self.run_blocking(ask, self.bot.llm, question, self.generation_config)
        if not response.text:
            await safe_edit(interaction, content="I have no answer to that.")
            return
        if response.is_truncated:
            # Hit max_tokens mid-answer
            content = truncate(response.text, DISCORD_MESSAGE_LIMIT - len(CUT_SHORT)) + CUT_SHORT
        else:
            content = truncate(response.text)
        await safe_edit(interaction, content=content)

    @app_commands.command(name="roast", description="Roast a user.")
    @app_commands.describe(target="Target to roast")
    async def cmd_roast(self, interaction: discord.Interaction, target: Optional[str] = None):
        if not await safe_defer(interaction):
            return
        target = target or interaction.user.name
        text = await self.run_blocking(roast, self.bot.llm, target, self.generation_config)
        await safe_edit(interaction, content=truncate(text))

    @app_commands.command(name="rps", description="Play Rock Paper Scissors.")
    @app_commands.describe(choice="rock, paper, or scissors")
    async def cmd_rps(self, interaction: discord.Interaction, choice: str):
        if not await safe_defer(interaction):
            return
        if choice.strip().lower() not in RPS_CHOICES:
            await safe_edit(interaction, content="Invalid choice.")
            return
        await safe_edit(interaction, content=play_rps(choice))

    @app_commands.command(name="help", description="List all available commands.")
    async def cmd_help(self, interaction: discord.Interaction):
        if not await safe_defer(interaction, ephemeral=True):
            return
        commands = sorted(
            (cmd.name, cmd.description)
            for cmd in self.bot.tree.get_commands()
            if isinstance(cmd, app_commands.Command)
        )
        await safe_edit(interaction, content=help_text(commands))
