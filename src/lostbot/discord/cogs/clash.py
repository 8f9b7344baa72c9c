from __future__ import annotations

import logging
import re
from typing import Any, Dict, List

import discord
from discord import app_commands

from ...clients.coc import CocApiError, normalize_tag
from ...formatting import error_line, format_clan, format_leaderboard, format_player, format_war
from ...interactions import classify_error, safe_defer, safe_edit, safe_reply_or_follow
from ...pagination import paginate
from ..templates import members_embed
from .base import GuardedCog

LOG = logging.getLogger("lostbot.discord.clash")

SESSION_EXPIRED = "Session expired. Run the command again."


class MembersPageButton(
    discord.ui.DynamicItem[discord.ui.Button],
    template=r"clanMembers:(?P<tag>[^:]+):(?P<page>-?[0-9]+)",
):
    """Previous/Next button of a clan member list.

    The target page lives in the custom id, so buttons keep working for as
    long as the member list is cached, across view lifetimes.
    """

    def __init__(self, tag: str, page: int, *, label: str, disabled: bool = False):
        super().__init__(
            discord.ui.Button(
                label=label,
                style=discord.ButtonStyle.primary,
                custom_id=f"clanMembers:{tag}:{page}",
                disabled=disabled,
            )
        )
        self.tag = tag
        self.page = page

    @classmethod
    async def from_custom_id(cls, interaction: discord.Interaction, item: discord.ui.Button, match: re.Match[str]):
        return cls(match["tag"], int(match["page"]), label=item.label or "")

    async def callback(self, interaction: discord.Interaction) -> None:
        cog = interaction.client.get_cog(ClashCog.__cog_name__)
        members = cog.members_cache.get(self.tag) if cog else None
        if members is None:
            await safe_reply_or_follow(interaction, content=SESSION_EXPIRED, ephemeral=True)
            return

        page = paginate(members, self.page)
        try:
            await interaction.response.edit_message(embed=members_embed(page), view=members_view(self.tag, page))
        except Exception as e:
            if not classify_error(e).recoverable:
                raise
            LOG.warning("Members page %s for #%s not shown, interaction token issue (%s)", self.page, self.tag, e)


def members_view(tag: str, page) -> discord.ui.View:
    """Previous/Next buttons for `page` of clan `tag`."""
    view = discord.ui.View(timeout=None)
    view.add_item(MembersPageButton(tag, page.page - 1, label="Previous", disabled=not page.has_previous))
    view.add_item(MembersPageButton(tag, page.page + 1, label="Next", disabled=not page.has_next))
    return view


class ClashCog(GuardedCog, name="Clash"):
    """Clash of Clans lookups."""

    def __init__(self, bot):
        super().__init__(bot)
        # normalised clan tag -> member list of the last /clanmembers run
        self.members_cache: Dict[str, List[Dict[str, Any]]] = {}

    @property
    def coc(self):
        return self.bot.coc

    @app_commands.command(name="player", description="Get info about a player.")
    @app_commands.describe(tag="Player tag")
    async def cmd_player(self, interaction: discord.Interaction, tag: str):
        if not await safe_defer(interaction):
            return
        try:
            data = await self.run_blocking(self.coc.get_player, tag)
        except CocApiError as e:
            await safe_edit(interaction, content=error_line(str(e)))
            return
        await safe_edit(interaction, content=format_player(data))

    @app_commands.command(name="clan", description="Get info about a clan.")
    @app_commands.describe(tag="Clan tag")
    async def cmd_clan(self, interaction: discord.Interaction, tag: str):
        if not await safe_defer(interaction):
            return
        try:
            data = await self.run_blocking(self.coc.get_clan, tag)
        except CocApiError as e:
            await safe_edit(interaction, content=error_line(str(e)))
            return
        await safe_edit(interaction, content=format_clan(data))

    @app_commands.command(name="leaderboard", description="Get top 5 global clans.")
    async def cmd_leaderboard(self, interaction: discord.Interaction):
        if not await safe_defer(interaction):
            return
        try:
            clans = await self.run_blocking(self.coc.get_top_clans, 5)
        except CocApiError as e:
            await safe_edit(interaction, content=error_line(str(e)))
            return
        await safe_edit(interaction, content=format_leaderboard(clans))

    @app_commands.command(name="poster", description="Get current war data for a clan.")
    @app_commands.describe(tag="Clan tag")
    async def cmd_poster(self, interaction: discord.Interaction, tag: str):
        if not await safe_defer(interaction):
            return
        try:
            war = await self.run_blocking(self.coc.get_current_war, tag)
        except CocApiError as e:
            await safe_edit(interaction, content=error_line(str(e)))
            return
        await safe_edit(interaction, content=format_war(war))

    @app_commands.command(name="clanmembers", description="List clan members with pagination.")
    @app_commands.describe(tag="Clan tag")
    async def cmd_clanmembers(self, interaction: discord.Interaction, tag: str):
        if not await safe_defer(interaction):
            return
        try:
            members = await self.run_blocking(self.coc.get_clan_members, tag)
        except CocApiError as e:
            await safe_edit(interaction, content=error_line(str(e)))
            return

        key = normalize_tag(tag)
        self.members_cache[key] = members
        LOG.info("Cached %d members for #%s", len(members), key)

        page = paginate(members, 1)
        await safe_edit(interaction, embed=members_embed(page), view=members_view(key, page))

