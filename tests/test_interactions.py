from __future__ import annotations

import logging
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from lostbot.interactions import (
    EPHEMERAL_FLAG,
    AckErrorKind,
    DiscordInteraction,
    as_acknowledgeable,
    classify_error,
    safe_defer,
    safe_edit,
    safe_reply_or_follow,
    to_flags,
)

from conftest import FakeInteraction, discord_http_error

STALE = 10062
ALREADY = 40060


# ══════════════════════════════════════════════════════════════════════════════
# OPTION TRANSLATION
# ══════════════════════════════════════════════════════════════════════════════


def test_ephemeral_true_becomes_flag():
    opts = to_flags({"content": "hi", "ephemeral": True})
    assert opts == {"content": "hi", "flags": EPHEMERAL_FLAG}
    assert "ephemeral" not in opts


@pytest.mark.parametrize("given", [{"content": "hi", "ephemeral": False}, {"content": "hi"}])
def test_no_flag_without_ephemeral(given):
    opts = to_flags(given)
    assert "flags" not in opts
    assert "ephemeral" not in opts
    assert opts["content"] == "hi"


def test_to_flags_leaves_caller_options_alone():
    given = {"content": "hi", "ephemeral": True}
    to_flags(given)
    assert given == {"content": "hi", "ephemeral": True}


def test_ephemeral_flag_value():
    assert EPHEMERAL_FLAG == 64 == discord.MessageFlags(ephemeral=True).value


# ══════════════════════════════════════════════════════════════════════════════
# ERROR CLASSIFICATION
# ══════════════════════════════════════════════════════════════════════════════


def test_classify_discord_codes():
    assert classify_error(discord_http_error(STALE, status=404)) is AckErrorKind.STALE_INTERACTION
    assert classify_error(discord_http_error(ALREADY)) is AckErrorKind.ALREADY_ACKNOWLEDGED
    assert classify_error(discord_http_error(50013, status=403)) is AckErrorKind.OTHER
    assert classify_error(RuntimeError("boom")) is AckErrorKind.OTHER


def test_classify_local_already_responded():
    assert classify_error(discord.InteractionResponded(None)) is AckErrorKind.ALREADY_ACKNOWLEDGED


def test_classify_raw_error_payload():
    exc = Exception("wrapped")
    exc.raw_error = {"code": STALE}
    assert classify_error(exc) is AckErrorKind.STALE_INTERACTION


# ══════════════════════════════════════════════════════════════════════════════
# safe_defer
# ══════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_defer_is_idempotent(fake_interaction):
    assert await safe_defer(fake_interaction) is True
    assert await safe_defer(fake_interaction) is True
    assert fake_interaction.call_names == ["defer_reply"]


@pytest.mark.asyncio
async def test_defer_after_reply_is_noop():
    interaction = FakeInteraction(replied=True)
    assert await safe_defer(interaction) is True
    assert interaction.calls == []


@pytest.mark.asyncio
async def test_defer_translates_ephemeral(fake_interaction):
    await safe_defer(fake_interaction, ephemeral=True)
    assert fake_interaction.last("defer_reply") == {"flags": EPHEMERAL_FLAG}


@pytest.mark.asyncio
async def test_defer_stale_returns_false():
    interaction = FakeInteraction(error=discord_http_error(STALE, status=404))
    assert await safe_defer(interaction) is False


@pytest.mark.asyncio
async def test_defer_does_not_swallow_already_acknowledged(caplog):
    interaction = FakeInteraction(error=discord_http_error(ALREADY))
    with caplog.at_level(logging.ERROR, logger="lostbot.interactions.safe"):
        with pytest.raises(discord.HTTPException):
            await safe_defer(interaction)
    assert "unexpected error" in caplog.text


@pytest.mark.asyncio
async def test_defer_unexpected_error_is_logged_and_raised(caplog):
    interaction = FakeInteraction(error=RuntimeError("network down"))
    with caplog.at_level(logging.ERROR, logger="lostbot.interactions.safe"):
        with pytest.raises(RuntimeError):
            await safe_defer(interaction)
    assert "network down" in caplog.text


# ══════════════════════════════════════════════════════════════════════════════
# MISSING CAPABILITY
# ══════════════════════════════════════════════════════════════════════════════


class ReplyOnly:
    """Has a reply method but not the full acknowledgement capability."""

    def __init__(self):
        self.reply = AsyncMock()
        self.edit_reply = AsyncMock()


@pytest.mark.asyncio
@pytest.mark.parametrize("target", [None, object(), "interaction", ReplyOnly()])
async def test_missing_capability_is_silent(target):
    assert await safe_defer(target) is False
    assert await safe_reply_or_follow(target, content="x") is None
    assert await safe_edit(target, content="x") is None
    if isinstance(target, ReplyOnly):
        target.reply.assert_not_called()
        target.edit_reply.assert_not_called()


def test_probe_accepts_protocol_objects(fake_interaction):
    assert as_acknowledgeable(fake_interaction) is fake_interaction
    assert as_acknowledgeable(None) is None
    assert as_acknowledgeable(ReplyOnly()) is None


# ══════════════════════════════════════════════════════════════════════════════
# safe_reply_or_follow
# ══════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_fresh_interaction_gets_initial_reply(fake_interaction):
    result = await safe_reply_or_follow(fake_interaction, content="hello", ephemeral=True)
    assert result == "reply"
    assert fake_interaction.call_names == ["reply"]
    assert fake_interaction.last("reply") == {"content": "hello", "flags": EPHEMERAL_FLAG}


@pytest.mark.asyncio
@pytest.mark.parametrize("state", [{"replied": True}, {"deferred": True}])
async def test_answered_interaction_gets_follow_up(state):
    interaction = FakeInteraction(**state)
    assert await safe_reply_or_follow(interaction, content="again") == "follow_up"
    assert interaction.call_names == ["follow_up"]


@pytest.mark.asyncio
async def test_follow_ups_stack():
    interaction = FakeInteraction(replied=True)
    await safe_reply_or_follow(interaction, content="one")
    await safe_reply_or_follow(interaction, content="two")
    assert interaction.call_names == ["follow_up", "follow_up"]
    assert interaction.replied is True


@pytest.mark.asyncio
@pytest.mark.parametrize("code,status", [(STALE, 404), (ALREADY, 400)])
async def test_reply_swallows_token_errors(code, status, caplog):
    interaction = FakeInteraction(error=discord_http_error(code, status=status))
    with caplog.at_level(logging.WARNING, logger="lostbot.interactions.safe"):
        assert await safe_reply_or_follow(interaction, content="x") is None
    assert "ignoring" in caplog.text


@pytest.mark.asyncio
async def test_reply_swallows_local_interaction_responded():
    interaction = FakeInteraction(error=discord.InteractionResponded(None))
    assert await safe_reply_or_follow(interaction, content="x") is None


@pytest.mark.asyncio
async def test_reply_propagates_other_errors():
    interaction = FakeInteraction(error=discord_http_error(50013, status=403))
    with pytest.raises(discord.HTTPException):
        await safe_reply_or_follow(interaction, content="x")


# ══════════════════════════════════════════════════════════════════════════════
# safe_edit
# ══════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_edit_deferred_interaction(fake_interaction):
    await safe_defer(fake_interaction)
    assert await safe_edit(fake_interaction, content="done") == "edit_reply"
    assert fake_interaction.call_names == ["defer_reply", "edit_reply"]
    assert fake_interaction.last("edit_reply") == {"content": "done"}


@pytest.mark.asyncio
async def test_edit_fresh_interaction_falls_back_to_reply(fake_interaction):
    assert await safe_edit(fake_interaction, content="first", ephemeral=True) == "reply"
    assert fake_interaction.call_names == ["reply"]
    assert fake_interaction.last("reply") == {"content": "first", "flags": EPHEMERAL_FLAG}


@pytest.mark.asyncio
async def test_edit_can_repeat():
    interaction = FakeInteraction(replied=True)
    await safe_edit(interaction, content="a")
    await safe_edit(interaction, content="b")
    assert interaction.call_names == ["edit_reply", "edit_reply"]


@pytest.mark.asyncio
@pytest.mark.parametrize("code,status", [(STALE, 404), (ALREADY, 400)])
@pytest.mark.parametrize("state", [{"deferred": True}, {}])
async def test_edit_swallows_token_errors(code, status, state):
    interaction = FakeInteraction(error=discord_http_error(code, status=status), **state)
    assert await safe_edit(interaction, content="x") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("state", [{"deferred": True}, {}])
async def test_edit_propagates_other_errors(state):
    interaction = FakeInteraction(error=ValueError("bad payload"), **state)
    with pytest.raises(ValueError):
        await safe_edit(interaction, content="x")


# ══════════════════════════════════════════════════════════════════════════════
# DISCORD ADAPTER
# ══════════════════════════════════════════════════════════════════════════════


def make_discord_interaction(done: bool = False, response_type=None):
    interaction = MagicMock(spec=discord.Interaction)
    interaction.id = 42
    interaction.response = MagicMock()
    interaction.response.is_done.return_value = done
    interaction.response.type = response_type
    interaction.response.defer = AsyncMock()
    interaction.response.send_message = AsyncMock()
    interaction.followup = SimpleNamespace(send=AsyncMock())
    interaction.edit_original_response = AsyncMock()
    return interaction


def test_adapter_state_flags():
    fresh = DiscordInteraction(make_discord_interaction())
    assert (fresh.deferred, fresh.replied) == (False, False)

    deferred = DiscordInteraction(
        make_discord_interaction(True, discord.InteractionResponseType.deferred_channel_message)
    )
    assert (deferred.deferred, deferred.replied) == (True, False)

    replied = DiscordInteraction(make_discord_interaction(True, discord.InteractionResponseType.channel_message))
    assert (replied.deferred, replied.replied) == (False, True)


def test_probe_wraps_discord_interactions():
    handle = as_acknowledgeable(make_discord_interaction())
    assert isinstance(handle, DiscordInteraction)


@pytest.mark.asyncio
async def test_adapter_maps_flags_to_discord_kwargs():
    raw = make_discord_interaction()

    assert await safe_defer(raw, ephemeral=True) is True
    raw.response.defer.assert_awaited_once_with(ephemeral=True, thinking=True)

    await safe_reply_or_follow(raw, content="hi", ephemeral=True)
    raw.response.send_message.assert_awaited_once_with(content="hi", ephemeral=True)


@pytest.mark.asyncio
async def test_adapter_follow_up_and_edit():
    raw = make_discord_interaction(True, discord.InteractionResponseType.deferred_channel_message)

    await safe_reply_or_follow(raw, content="more", ephemeral=True)
    raw.followup.send.assert_awaited_once_with(content="more", ephemeral=True, wait=True)

    await safe_edit(raw, content="final", ephemeral=True)
    raw.edit_original_response.assert_awaited_once_with(content="final")
