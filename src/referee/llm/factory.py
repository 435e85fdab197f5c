from __future__ import annotations

from .base import CompletionClient, CompletionConfig
from .errors import ConfigurationError
from .openai_client import OpenAICompletionClient

# Providers speaking the OpenAI chat-completions protocol.
_OPENAI_COMPATIBLE = {"groq", "openai"}


def build_completion_client(config: CompletionConfig) -> CompletionClient:
    """Factory for provider clients.

    Providers:
    - groq (default; OpenAI-compatible endpoint)
    - openai

    Extend by adding new provider clients and mapping here.
    """

    p = config.provider.lower().strip()
    if p in _OPENAI_COMPATIBLE:
        return OpenAICompletionClient(config)

    raise ConfigurationError(f"Unknown completion provider: {config.provider}")
