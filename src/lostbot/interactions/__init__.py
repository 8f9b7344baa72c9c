#!/usr/bin/env python3
# ══════════════════════════════════════════════════════════════════════════════
#  Lost Family Bot - Interaction Acknowledgement
#  Copyright (c) 2025 SIRIUS Alpha
# ══════════════════════════════════════════════════════════════════════════════
"""
Interaction acknowledgement guard.

Every command handler acknowledges Discord interactions through these
helpers so that expired tokens and double acknowledgements never crash a
handler.
"""

from .errors import (
    EPHEMERAL_FLAG,
    INTERACTION_ALREADY_ACKNOWLEDGED,
    UNKNOWN_INTERACTION,
    AckErrorKind,
    classify_error,
)
from .handle import AcknowledgeableInteraction, DiscordInteraction, as_acknowledgeable
from .safe import safe_defer, safe_edit, safe_reply_or_follow, to_flags

__all__ = [
    # Guard
    "safe_defer",
    "safe_reply_or_follow",
    "safe_edit",
    "to_flags",
    # Handles
    "AcknowledgeableInteraction",
    "DiscordInteraction",
    "as_acknowledgeable",
    # Errors
    "AckErrorKind",
    "classify_error",
    "EPHEMERAL_FLAG",
    "UNKNOWN_INTERACTION",
    "INTERACTION_ALREADY_ACKNOWLEDGED",
]
