"""Prompts used by the /ask and /roast commands."""

import logging
from typing import Optional

from .base import GenerationConfig, LLMProvider, LLMResponse, ProviderError

logger = logging.getLogger(__name__)

ROAST_SYSTEM_PROMPT = "You are a humorous, sarcastic AI that generates funny but non-offensive roasts."
ROAST_FALLBACK = "I couldn't roast them this time! Maybe they're just too nice?"


def ask(provider: LLMProvider, question: str, config: Optional[GenerationConfig] = None) -> LLMResponse:
    """Answer a free-form question. Provider errors propagate."""
    return provider.generate(question, config)


def roast(provider: LLMProvider, target: str, config: Optional[GenerationConfig] = None) -> str:
    """Lighthearted roast of `target`; never raises on provider failure."""
    base = config or GenerationConfig()
    roast_config = GenerationConfig(
        max_tokens=base.max_tokens,
        temperature=base.temperature,
        system_prompt=ROAST_SYSTEM_PROMPT,
    )
    try:
        text = provider.generate(f"Roast {target} in a funny but lighthearted way.", roast_config).text
    except ProviderError as e:
        logger.warning(f"Roast generation failed: {e}")
        return ROAST_FALLBACK
    return text or ROAST_FALLBACK
