from __future__ import annotations

import datetime as dt
import logging
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import discord
from discord import app_commands
from discord.ext import tasks

from ...interactions import safe_defer, safe_edit
from ..templates import application_embed, reminder_embed
from .base import GuardedCog

LOG = logging.getLogger("lostbot.discord.community")

NO_PERMISSION = "❌ You do not have permission."

_DEFAULT_ANNOUNCE_TIME = dt.time(16, 0, tzinfo=ZoneInfo("Europe/London"))


def announcement_time(announce) -> dt.time:
    """Wall-clock time of the daily announcement from an `AnnounceConfig`."""
    return dt.time(announce.hour, announce.minute, tzinfo=ZoneInfo(announce.timezone))


class CommunityCog(GuardedCog, name="Community"):
    """Clan recruitment helpers and the daily application announcement."""

    async def cog_load(self) -> None:
        announce = self.bot.config.announce
        if not announce.enabled:
            LOG.info("Daily announcement disabled")
            return
        if not self.bot.config.discord.global_channel_id:
            LOG.warning("GLOBAL_CHANNEL_ID not set, daily announcement not scheduled")
            return
        try:
            when = announcement_time(announce)
        except (ValueError, ZoneInfoNotFoundError) as e:
            LOG.error("Invalid announcement schedule, daily announcement not scheduled: %s", e)
            return
        self.announce_loop.change_interval(time=when)
        self.announce_loop.start()
        LOG.info("Daily announcement scheduled at %s %s", when.strftime("%H:%M"), announce.timezone)

    async def cog_unload(self) -> None:
        self.announce_loop.cancel()

    @app_commands.command(name="remind", description="Send a reminder message.")
    async def cmd_remind(self, interaction: discord.Interaction):
        if not await safe_defer(interaction):
            return
        permissions = getattr(interaction.user, "guild_permissions", None)
        if permissions is None or not permissions.administrator:
            await safe_edit(interaction, content=NO_PERMISSION)
            return
        await safe_edit(interaction, embed=reminder_embed())

    @app_commands.command(name="clans", description="How to apply for a Lost Family clan.")
    async def cmd_clans(self, interaction: discord.Interaction):
        if not await safe_defer(interaction):
            return
        mention = self.bot.config.discord.tickets_mention
        await safe_edit(
            interaction,
            content=f'To apply for a Lost Family clan, go to {mention} and select "Application" from the dropdown.',
        )

    async def _resolve_channel(self, channel_id: int) -> Optional[discord.abc.Messageable]:
        channel = self.bot.get_channel(channel_id)
        if channel is None:
            channel = await self.bot.fetch_channel(channel_id)
        if not isinstance(channel, discord.abc.Messageable):
            return None
        return channel

    async def post_announcement(self) -> Optional[discord.Message]:
        """Post the clan application embed to the global channel."""
        config = self.bot.config.discord
        if not config.global_channel_id:
            return None

        try:
            channel = await self._resolve_channel(config.global_channel_id)
            if channel is None:
                LOG.warning("Global channel %s is missing or not text based", config.global_channel_id)
                return None
            message = await channel.send(embed=application_embed(config.tickets_mention))
        except Exception:
            LOG.exception("Error sending daily announcement")
            return None

        LOG.info("Daily announcement sent")
        return message

    @tasks.loop(time=_DEFAULT_ANNOUNCE_TIME)
    async def announce_loop(self) -> None:
        await self.post_announcement()

    @announce_loop.before_loop
    async def before_announce(self) -> None:
        await self.bot.wait_until_ready()
