#!/usr/bin/env python3
# ══════════════════════════════════════════════════════════════════════════════
#  Lost Family Bot - LLM Base Interface
#  Copyright (c) 2025 SIRIUS Alpha
# ══════════════════════════════════════════════════════════════════════════════
"""
Abstract base class for chat completion providers.

Defines the contract that all LLM backends must implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


class ProviderError(Exception):
    """Base exception for LLM provider errors."""

    def __init__(self, message: str, provider: str):
        super().__init__(message)
        self.provider = provider


class InferenceError(ProviderError):
    """Raised when a completion request fails."""

    pass


@dataclass
class LLMResponse:
    """
    Response from an LLM provider.

    Attributes:
        text: Generated text content
        tokens_used: Number of tokens consumed
        generation_time: Time taken for generation in seconds
        model: Model identifier used
        provider: Provider name
        finish_reason: Why generation stopped (e.g., 'stop', 'length')
    """

    text: str
    tokens_used: int = 0
    generation_time: float = 0.0
    model: str = ""
    provider: str = ""
    finish_reason: str = "stop"

    @property
    def is_truncated(self) -> bool:
        """Check if response was truncated due to token limit."""
        return self.finish_reason == "length"

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return (
            f"LLMResponse(provider={self.provider!r}, model={self.model!r}, "
            f"tokens={self.tokens_used}, time={self.generation_time:.2f}s)"
        )


@dataclass
class GenerationConfig:
    """
    Configuration for text generation.

    Attributes:
        max_tokens: Maximum tokens to generate
        temperature: Sampling temperature (0.0 = deterministic)
        system_prompt: Optional system message sent before the prompt
    """

    max_tokens: int = 800
    temperature: float = 0.8
    system_prompt: Optional[str] = None


class LLMProvider(ABC):
    """
    Abstract base class for LLM providers.
    """

    name: str = "base"

    def __init__(self):
        self._model_name = ""

    @property
    def model_name(self) -> str:
        """Get the configured model name."""
        return self._model_name

    @abstractmethod
    def generate(
        self,
        prompt: str,
        config: Optional[GenerationConfig] = None,
    ) -> LLMResponse:
        """
        Generate a completion for a single user prompt.

        Args:
            prompt: User message
            config: Generation configuration (uses defaults if None)

        Returns:
            LLMResponse with generated text and metadata

        Raises:
            InferenceError: If generation fails
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release network resources."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} model={self._model_name!r}>"
