#!/usr/bin/env python3
# ══════════════════════════════════════════════════════════════════════════════
#  Lost Family Bot - Discord Integration
#  Copyright (c) 2025 SIRIUS Alpha
# ══════════════════════════════════════════════════════════════════════════════
"""
Discord bot, slash command cogs and embed templates.
"""

from .bot import LostFamilyBot

__all__ = ["LostFamilyBot"]
