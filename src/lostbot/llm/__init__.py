#!/usr/bin/env python3
# ══════════════════════════════════════════════════════════════════════════════
#  Lost Family Bot - LLM Provider Abstraction
#  Copyright (c) 2025 SIRIUS Alpha
# ══════════════════════════════════════════════════════════════════════════════
"""
Chat completion layer used by the AI commands.
"""

from .base import GenerationConfig, InferenceError, LLMProvider, LLMResponse, ProviderError
from .openai_chat import OpenAIProvider
from .prompts import ROAST_FALLBACK, ask, roast

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "GenerationConfig",
    "ProviderError",
    "InferenceError",
    "OpenAIProvider",
    "ask",
    "roast",
    "ROAST_FALLBACK",
]
