from __future__ import annotations

import asyncio
import socket
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

import httpx
import openai

from referee import logger as logger_mod

from .errors import AiUnavailable

log = logger_mod.get_logger()

T = TypeVar("T")


@dataclass(frozen=True)
class RetryConfig:
    """Retry/backoff settings for completion API calls.

    Notes:
    - `max_retries` counts attempts, so 3 means one call plus two retries.
    - Delays double from `base_delay_s` (1s, 2s, 4s ...) and never exceed `max_delay_s`.
    """

    max_retries: int = 3
    base_delay_s: float = 1.0
    max_delay_s: float = 30.0

    def __post_init__(self) -> None:
        # Clamp instead of raising so a bad env value cannot take the service down.
        if self.max_retries < 1:
            object.__setattr__(self, "max_retries", 1)

        if self.base_delay_s <= 0:
            object.__setattr__(self, "base_delay_s", 0.1)

        if self.max_delay_s < self.base_delay_s:
            object.__setattr__(self, "max_delay_s", float(self.base_delay_s))

    def delay_for(self, attempt: int) -> float:
        """Backoff before the retry that follows `attempt` (1-indexed)."""
        return min(self.max_delay_s, self.base_delay_s * (2 ** (attempt - 1)))


def is_retryable_status(status: Optional[int]) -> bool:
    """Rate limiting and server-side failures are transient; everything else is fatal."""

    if not isinstance(status, int):
        return False
    return status == 429 or status >= 500


def is_retryable_transport_error(error: BaseException) -> bool:
    """Return True when a non-HTTP exception is a network/transport failure.

    SDK connection errors (which include SDK-level timeouts), raw httpx
    transport errors and common socket failures are retried.
    """

    if isinstance(error, openai.APIConnectionError):
        return True

    if isinstance(error, httpx.TransportError):
        return True

    if isinstance(error, (TimeoutError, socket.timeout)):
        return True

    if isinstance(error, OSError):
        err_no = getattr(error, "errno", None)
        if err_no in {
            104,  # ECONNRESET
            110,  # ETIMEDOUT
            111,  # ECONNREFUSED
            113,  # EHOSTUNREACH
        }:
            return True

    return False


async def _sleep_with_backoff(*, wait: float, attempt: int, context: str) -> None:
    log.warning(
        f"⚠️ Retryable completion API error while {context}; retrying in {wait:.1f}s "
        f"(attempt {attempt})"
    )
    # Cancellation raised here propagates to the caller untouched.
    await asyncio.sleep(wait)


async def call_with_retry(
    fn: Callable[[], Awaitable[T]],
    *,
    context: str,
    retry: RetryConfig | None = None,
) -> T:
    """Await `fn` with bounded retries, raising AiUnavailable when it cannot succeed.

    AiUnavailable raised by `fn` itself (e.g. a malformed payload) is never retried.
    Exceptions that are neither SDK nor transport failures propagate unchanged.
    """

    retry = retry or RetryConfig()

    for attempt in range(1, retry.max_retries + 1):
        try:
            return await fn()

        except AiUnavailable as e:
            e.attempts = attempt
            log.error(
                f"❌ Unusable completion response while {context} "
                f"(attempt {attempt}/{retry.max_retries}): {e}"
            )
            raise

        except openai.APIStatusError as e:
            status = e.status_code
            if (not is_retryable_status(status)) or attempt == retry.max_retries:
                log.error(
                    f"❌ Completion API error {status} while {context} "
                    f"(attempt {attempt}/{retry.max_retries}): {e}"
                )
                raise AiUnavailable(
                    f"Completion API error: {status} - {e.message}",
                    status_code=status,
                    attempts=attempt,
                ) from e

            await _sleep_with_backoff(
                wait=retry.delay_for(attempt), attempt=attempt, context=context
            )

        except Exception as e:
            if is_retryable_transport_error(e):
                if attempt == retry.max_retries:
                    log.error(
                        f"❌ Network error while {context} "
                        f"(attempt {attempt}/{retry.max_retries}): {e}"
                    )
                    raise AiUnavailable(
                        f"Completion request failed after {attempt} attempts: {e}",
                        attempts=attempt,
                    ) from e

                await _sleep_with_backoff(
                    wait=retry.delay_for(attempt), attempt=attempt, context=context
                )
                continue

            if isinstance(e, openai.OpenAIError):
                log.error(f"❌ Completion client error while {context}: {e}")
                raise AiUnavailable(
                    f"Completion client error: {e}", attempts=attempt
                ) from e

            raise

    # Only reachable if max_retries was forced below 1 after construction.
    raise AiUnavailable(f"No completion attempts made while {context}")
