#!/usr/bin/env python3
# ══════════════════════════════════════════════════════════════════════════════
#  Lost Family Bot - Interaction Acknowledgement Guard
#  Copyright (c) 2025 SIRIUS Alpha
# ══════════════════════════════════════════════════════════════════════════════
"""
Safe acknowledgement helpers for slash command interactions.

Discord gives a command three seconds to be acknowledged and accepts exactly
one initial acknowledgement. These helpers keep command handlers from
crashing when the token has expired (10062) or when another code path has
already acknowledged the interaction (40060).

Usage:
    await safe_defer(interaction)
    data = await fetch_something()
    await safe_edit(interaction, content=format(data))
"""

import logging
from typing import Any, Mapping, Optional

from .errors import EPHEMERAL_FLAG, AckErrorKind, classify_error
from .handle import as_acknowledgeable

logger = logging.getLogger(__name__)


def to_flags(options: Optional[Mapping[str, Any]] = None) -> dict:
    """
    Translate `ephemeral` into Discord message flags.

    Returns a new dict; the caller's mapping is left untouched.
    """
    translated = dict(options or {})
    if "ephemeral" in translated:
        ephemeral = bool(translated.pop("ephemeral"))
        if ephemeral:
            translated["flags"] = translated.get("flags", 0) | EPHEMERAL_FLAG
    return translated


async def safe_defer(interaction: Any, **options: Any) -> bool:
    """
    Defer the reply to `interaction` at most once.

    Returns:
        True if the interaction is (now) deferred or already answered,
        False if it cannot be acknowledged or its token has expired.

    Raises:
        Any failure other than an expired token, after logging it.
    """
    handle = as_acknowledgeable(interaction)
    if handle is None:
        return False
    if handle.deferred or handle.replied:
        return True

    try:
        await handle.defer_reply(**to_flags(options))
    except Exception as e:
        if classify_error(e) is AckErrorKind.STALE_INTERACTION:
            return False
        logger.error("safe_defer: unexpected error: %s", e, exc_info=True)
        raise
    return True


async def safe_reply_or_follow(interaction: Any, **options: Any) -> Optional[Any]:
    """
    Send the initial reply, or a follow-up if the interaction was already
    deferred or answered.

    Expired tokens and acknowledgement races are logged and ignored.
    """
    handle = as_acknowledgeable(interaction)
    if handle is None:
        return None

    translated = to_flags(options)
    try:
        if handle.deferred or handle.replied:
            return await handle.follow_up(**translated)
        return await handle.reply(**translated)
    except Exception as e:
        kind = classify_error(e)
        if kind is AckErrorKind.STALE_INTERACTION:
            logger.warning("safe_reply_or_follow: unknown interaction (token expired), ignoring")
            return None
        if kind is AckErrorKind.ALREADY_ACKNOWLEDGED:
            logger.warning("safe_reply_or_follow: interaction already acknowledged, ignoring")
            return None
        raise


async def safe_edit(interaction: Any, **options: Any) -> Optional[Any]:
    """
    Edit the deferred placeholder or the original reply.

    A fresh interaction has nothing to edit yet, so it gets the same
    treatment as `safe_reply_or_follow`.
    """
    handle = as_acknowledgeable(interaction)
    if handle is None:
        return None

    try:
        if handle.deferred or handle.replied:
            return await handle.edit_reply(**to_flags(options))
        return await safe_reply_or_follow(handle, **options)
    except Exception as e:
        if classify_error(e).recoverable:
            logger.warning("safe_edit: interaction token issue (%s), ignoring", e)
            return None
        raise
