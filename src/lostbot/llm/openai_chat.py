#!/usr/bin/env python3
# ══════════════════════════════════════════════════════════════════════════════
#  Lost Family Bot - OpenAI Provider
#  Copyright (c) 2025 SIRIUS Alpha
# ══════════════════════════════════════════════════════════════════════════════
"""
OpenAI chat completion provider.
"""

import logging
import time
from typing import Optional

from openai import OpenAI, OpenAIError

from .base import GenerationConfig, InferenceError, LLMProvider, LLMResponse

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """
    Chat completions through the official `openai` client.

    The client is blocking; callers on the event loop use asyncio.to_thread.
    """

    name = "openai"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        timeout: float = 60.0,
        client: Optional[OpenAI] = None,
    ):
        """
        Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            model: Chat model name
            timeout: Request timeout in seconds
            client: Preconfigured client (mainly for tests)
        """
        super().__init__()
        self.api_key = api_key
        self.timeout = timeout
        self._model_name = model
        self._client = client

    @classmethod
    def from_config(cls, config) -> "OpenAIProvider":
        """Build a provider from a `Config`."""
        return cls(api_key=config.llm.api_key, model=config.llm.model, timeout=config.llm.timeout)

    def _get_client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(api_key=self.api_key, timeout=self.timeout)
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def generate(
        self,
        prompt: str,
        config: Optional[GenerationConfig] = None,
    ) -> LLMResponse:
        config = config or GenerationConfig()

        messages = []
        if config.system_prompt:
            messages.append({"role": "system", "content": config.system_prompt})
        messages.append({"role": "user", "content": prompt})

        start = time.time()
        try:
            response = self._get_client().chat.completions.create(
                model=self._model_name,
                messages=messages,
                max_tokens=config.max_tokens,
                temperature=config.temperature,
            )
        except OpenAIError as e:
            logger.warning(f"OpenAI request failed: {e}")
            raise InferenceError(f"OpenAI request failed: {e}", provider=self.name) from e

        if not response.choices:
            raise InferenceError("OpenAI returned no choices", provider=self.name)

        choice = response.choices[0]
        usage = getattr(response, "usage", None)

        return LLMResponse(
            text=(choice.message.content or "").strip(),
            tokens_used=getattr(usage, "total_tokens", 0) or 0,
            generation_time=time.time() - start,
            model=getattr(response, "model", self._model_name) or self._model_name,
            provider=self.name,
            finish_reason=choice.finish_reason or "stop",
        )
