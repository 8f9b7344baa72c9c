#!/usr/bin/env python3
# ══════════════════════════════════════════════════════════════════════════════
#  Lost Family Bot - Acknowledgement Error Taxonomy
#  Copyright (c) 2025 SIRIUS Alpha
# ══════════════════════════════════════════════════════════════════════════════
"""
Classification of failures raised while acknowledging an interaction.

Discord reports token problems through JSON error codes on the HTTP
exception. Callers match on `AckErrorKind` instead of raw numbers.
"""

from enum import Enum

import discord

# Discord JSON error codes
UNKNOWN_INTERACTION = 10062
INTERACTION_ALREADY_ACKNOWLEDGED = 40060

# MessageFlags.ephemeral
EPHEMERAL_FLAG = 1 << 6


class AckErrorKind(Enum):
    """What went wrong with an acknowledgement call."""

    STALE_INTERACTION = "stale_interaction"
    ALREADY_ACKNOWLEDGED = "already_acknowledged"
    OTHER = "other"

    @property
    def recoverable(self) -> bool:
        """Whether reply/edit paths may swallow this kind."""
        return self is not AckErrorKind.OTHER


def error_code(exc: BaseException):
    """Return the Discord error code carried by `exc`, if any."""
    code = getattr(exc, "code", None)
    if code is None:
        raw = getattr(exc, "raw_error", None)
        if isinstance(raw, dict):
            code = raw.get("code")
    return code


def classify_error(exc: BaseException) -> AckErrorKind:
    """
    Map an exception to an `AckErrorKind`.

    discord.py raises `InteractionResponded` locally, before any HTTP call,
    when the response was already used. It counts as an already
    acknowledged interaction.
    """
    if isinstance(exc, discord.InteractionResponded):
        return AckErrorKind.ALREADY_ACKNOWLEDGED

    code = error_code(exc)
    if code == UNKNOWN_INTERACTION:
        return AckErrorKind.STALE_INTERACTION
    if code == INTERACTION_ALREADY_ACKNOWLEDGED:
        return AckErrorKind.ALREADY_ACKNOWLEDGED
    return AckErrorKind.OTHER
