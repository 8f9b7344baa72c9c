#!/usr/bin/env python3
from __future__ import annotations

# ══════════════════════════════════════════════════════════════════════════════
#  Lost Family Bot - Discord Bot Core
#  Copyright (c) 2025 SIRIUS Alpha
# ══════════════════════════════════════════════════════════════════════════════
"""
Discord bot for the Lost Family Clash of Clans community.

Features:
- Clash of Clans player, clan, war and leaderboard lookups
- AI answers and roasts
- Paginated clan member lists
- Daily clan application announcement
"""

import asyncio
import logging
from typing import Optional

import discord
from discord.ext import commands

from ..clients.coc import CocClient
from ..config import Config, get_config
from ..llm import LLMProvider, OpenAIProvider
from .cogs import ClashCog, CommunityCog, FunCog, MembersPageButton

logger = logging.getLogger(__name__)


class LostFamilyBot(commands.Bot):
    """
    Slash command bot.

    Remote clients are created once and shared by all cogs through
    `bot.coc` and `bot.llm`.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        coc: Optional[CocClient] = None,
        llm: Optional[LLMProvider] = None,
    ):
        """
        Initialize the bot.

        Args:
            config: Bot configuration
            coc: Clash of Clans client (built from config if None)
            llm: Chat completion provider (built from config if None)
        """
        self.config = config or get_config()

        intents = discord.Intents.default()
        intents.guilds = True
        intents.messages = True
        # Message content is privileged; enable only when allowed in portal
        if self.config.discord.enable_message_content:
            intents.message_content = True

        super().__init__(command_prefix=commands.when_mentioned, intents=intents)

        self.coc = coc or CocClient.from_config(self.config)
        self.llm = llm or OpenAIProvider.from_config(self.config)

        self._guild: Optional[discord.Object] = (
            discord.Object(id=self.config.discord.guild_id) if self.config.discord.guild_id else None
        )

    # ══════════════════════════════════════════════════════════════════════════
    # LIFECYCLE EVENTS
    # ══════════════════════════════════════════════════════════════════════════

    async def setup_hook(self) -> None:
        """Called when the bot is starting up."""
        logger.info("Setting up bot...")

        self.add_dynamic_items(MembersPageButton)

        # Add cogs idempotently to avoid duplicate command registration on reconnect
        for cog_cls in (ClashCog, FunCog, CommunityCog):
            if not self.get_cog(cog_cls.__cog_name__):
                await self.add_cog(cog_cls(self))

        await self.sync_commands()

    async def sync_commands(self) -> None:
        """Push the slash command tree to Discord."""
        try:
            if self._guild:
                self.tree.copy_global_to(guild=self._guild)
                synced = await self.tree.sync(guild=self._guild)
                logger.info(f"Synced {len(synced)} commands to guild {self._guild.id}")
            else:
                synced = await self.tree.sync()
                logger.info(f"Synced {len(synced)} commands globally")
        except discord.HTTPException as e:
            logger.error(f"Failed to sync commands: {e}")

    async def on_ready(self) -> None:
        """Called when the bot is fully connected."""
        logger.info(f"Logged in as {self.user}")
        logger.info(f"Connected to {len(self.guilds)} guild(s)")

    async def on_disconnect(self) -> None:
        logger.warning("Bot disconnected!")

    async def on_resumed(self) -> None:
        logger.info("Bot resumed session")

    async def close(self) -> None:
        await super().close()
        self.coc.close()
        self.llm.close()

    # ══════════════════════════════════════════════════════════════════════════
    # RUNNING
    # ══════════════════════════════════════════════════════════════════════════

    def run_forever(self) -> None:
        """Run the bot until interrupted."""
        token = self.config.discord.token

        if not token:
            raise ValueError("Discord token not configured. Set DISCORD_TOKEN environment variable.")

        async def runner():
            async with self:
                await self.start(token)

        try:
            asyncio.run(runner())
        except KeyboardInterrupt:
            logger.info("Shutdown requested")
