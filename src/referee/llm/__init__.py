"""Completion service access.

Design goals:
- Keep the provider SDK isolated behind a small `CompletionClient` interface.
- Own the retry policy: transient failures (network, 429, 5xx) back off and
  retry; anything else fails fast as `AiUnavailable`.
- Never interpret the returned text; that is the normalizer's job.
"""

from .base import CompletionClient, CompletionConfig
from .errors import AiUnavailable, ConfigurationError, LLMError, MalformedCompletionError
from .factory import build_completion_client
from ._retry import RetryConfig

__all__ = [
    "AiUnavailable",
    "CompletionClient",
    "CompletionConfig",
    "ConfigurationError",
    "LLMError",
    "MalformedCompletionError",
    "RetryConfig",
    "build_completion_client",
]
