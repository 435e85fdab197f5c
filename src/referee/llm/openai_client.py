from __future__ import annotations

from typing import Any, Optional

from openai import AsyncOpenAI

from referee import logger as logger_mod

from ._retry import call_with_retry
from .base import CompletionClient, CompletionConfig
from .errors import ConfigurationError, MalformedCompletionError
from .types import CompletionRequest

log = logger_mod.get_logger()


class OpenAICompletionClient(CompletionClient):
    """Chat-completions client for any OpenAI-compatible endpoint (Groq by default).

    Retries are handled here, not by the SDK (it is built with ``max_retries=0``),
    so the attempt budget and backoff schedule stay under our control.
    """

    def __init__(self, config: CompletionConfig, *, client: Any = None):
        self._cfg = config
        api_key = (config.api_key or "").strip()
        if not api_key:
            raise ConfigurationError(
                "GROQ_API_KEY is not configured; cannot call the completion API"
            )

        if client is None:
            client = AsyncOpenAI(
                api_key=api_key,
                base_url=config.base_url,
                timeout=config.timeout_s,
                max_retries=0,
            )
        self._client = client

    @property
    def config(self) -> CompletionConfig:
        return self._cfg

    def _extract_content(self, resp: Any) -> str:
        choices = getattr(resp, "choices", None) or []
        if not choices:
            raise MalformedCompletionError(
                "Invalid response structure from completion API: no choices"
            )

        message = getattr(choices[0], "message", None)
        if message is None:
            raise MalformedCompletionError(
                "Invalid response structure from completion API: no message"
            )

        content = getattr(message, "content", None)
        if not isinstance(content, str) or not content.strip():
            raise MalformedCompletionError(
                "Completion API returned an empty message content"
            )

        return content.strip()

    async def complete(
        self,
        prompt: str,
        *,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> str:
        request = CompletionRequest(
            prompt=prompt, max_tokens=max_tokens, temperature=temperature
        )
        payload = request.to_payload(
            model=self._cfg.model,
            default_max_tokens=self._cfg.max_tokens,
            default_temperature=self._cfg.temperature,
        )

        async def _attempt() -> str:
            resp = await self._client.chat.completions.create(**payload)
            return self._extract_content(resp)

        text = await call_with_retry(
            _attempt,
            context=f"requesting completion from {self._cfg.model}",
            retry=self._cfg.retry,
        )
        log.debug(f"Completion received ({len(text)} chars) from {self._cfg.model}")
        return text

    async def check_availability(self) -> bool:
        """Cheap connectivity check (model listing). Never raises on failure."""

        try:
            await self._client.models.list()
            return True
        except Exception as e:  # noqa: BLE001
            log.warning(f"Completion API connectivity check failed: {e}")
            return False

    async def aclose(self) -> None:
        close = getattr(self._client, "close", None)
        if close is not None:
            await close()
