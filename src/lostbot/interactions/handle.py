"""Acknowledgeable interaction handles.

`AcknowledgeableInteraction` is the capability the guard needs from an
interaction. `DiscordInteraction` adapts a live `discord.Interaction` to it.
The guard never owns the handle; it is borrowed for one command.
"""
from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

import discord

from .errors import EPHEMERAL_FLAG

_DEFERRED_TYPES = {
    discord.InteractionResponseType.deferred_channel_message,
    discord.InteractionResponseType.deferred_message_update,
}


@runtime_checkable
class AcknowledgeableInteraction(Protocol):
    """Anything that can be deferred, replied to, followed up and edited."""

    @property
    def deferred(self) -> bool: ...

    @property
    def replied(self) -> bool: ...

    async def defer_reply(self, **options: Any) -> Any: ...

    async def reply(self, **options: Any) -> Any: ...

    async def follow_up(self, **options: Any) -> Any: ...

    async def edit_reply(self, **options: Any) -> Any: ...


class DiscordInteraction:
    """Adapter from `discord.Interaction` to `AcknowledgeableInteraction`.

    State is read from the wrapped interaction on every access, so several
    adapters over the same interaction always agree.
    """

    def __init__(self, interaction: discord.Interaction):
        self.interaction = interaction

    @property
    def deferred(self) -> bool:
        response = self.interaction.response
        return response.is_done() and response.type in _DEFERRED_TYPES

    @property
    def replied(self) -> bool:
        response = self.interaction.response
        return response.is_done() and response.type not in _DEFERRED_TYPES

    @staticmethod
    def _send_kwargs(options: dict) -> dict:
        kwargs = dict(options)
        flags = kwargs.pop("flags", 0) or 0
        if flags & EPHEMERAL_FLAG:
            kwargs["ephemeral"] = True
        return kwargs

    async def defer_reply(self, **options: Any) -> Any:
        kwargs = self._send_kwargs(options)
        return await self.interaction.response.defer(
            ephemeral=kwargs.get("ephemeral", False),
            thinking=kwargs.get("thinking", True),
        )

    async def reply(self, **options: Any) -> Any:
        return await self.interaction.response.send_message(**self._send_kwargs(options))

    async def follow_up(self, **options: Any) -> Any:
        kwargs = self._send_kwargs(options)
        kwargs.setdefault("wait", True)
        return await self.interaction.followup.send(**kwargs)

    async def edit_reply(self, **options: Any) -> Any:
        # Visibility is fixed by the first acknowledgement
        kwargs = self._send_kwargs(options)
        kwargs.pop("ephemeral", None)
        return await self.interaction.edit_original_response(**kwargs)

    def __repr__(self) -> str:
        return f"<DiscordInteraction id={self.interaction.id} deferred={self.deferred} replied={self.replied}>"


def as_acknowledgeable(interaction: Any) -> Optional[AcknowledgeableInteraction]:
    """
    Probe `interaction` for the acknowledgement capability.

    Returns the handle to act on, or None when the object cannot be
    acknowledged (None itself, or anything else lacking the capability).
    """
    if interaction is None:
        return None
    if isinstance(interaction, discord.Interaction):
        return DiscordInteraction(interaction)
    if isinstance(interaction, AcknowledgeableInteraction):
        return interaction
    return None
