#!/usr/bin/env python3
# ══════════════════════════════════════════════════════════════════════════════
#  Lost Family Bot
#  Copyright (c) 2025 SIRIUS Alpha
# ══════════════════════════════════════════════════════════════════════════════
"""
Lost Family Bot: Discord slash commands for a Clash of Clans community.

Usage:
    python -m lostbot run
    python -m lostbot check
"""

__version__ = "1.0.0"
__author__ = "SIRIUS Alpha"

from .config import Config, get_config
from .interactions import safe_defer, safe_edit, safe_reply_or_follow

__all__ = [
    # Version
    "__version__",
    "__author__",
    # Config
    "Config",
    "get_config",
    # Interaction guard
    "safe_defer",
    "safe_reply_or_follow",
    "safe_edit",
]
