from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol

from referee.config import (
    DEFAULT_API_URL,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_PROVIDER,
    DEFAULT_REQUEST_TIMEOUT_S,
    DEFAULT_TEMPERATURE,
    Settings,
)

from ._retry import RetryConfig


@dataclass(frozen=True)
class CompletionConfig:
    provider: str = DEFAULT_PROVIDER
    model: str = DEFAULT_MODEL
    api_key: str = ""
    base_url: str = DEFAULT_API_URL
    timeout_s: float = DEFAULT_REQUEST_TIMEOUT_S
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    retry: RetryConfig = field(default_factory=RetryConfig)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CompletionConfig":
        return cls(
            provider=settings.provider,
            model=settings.model,
            api_key=settings.api_key,
            base_url=settings.api_url,
            timeout_s=settings.request_timeout_s,
            max_tokens=settings.max_tokens,
            temperature=settings.temperature,
            retry=RetryConfig(
                max_retries=settings.max_retries,
                base_delay_s=settings.base_delay_s,
            ),
        )


class CompletionClient(Protocol):
    """Small interface for "prompt -> completion text" calls."""

    async def complete(
        self,
        prompt: str,
        *,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> str:
        raise NotImplementedError

    async def check_availability(self) -> bool:
        raise NotImplementedError
