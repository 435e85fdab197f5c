from typing import Optional


class LLMError(RuntimeError):
    pass


class ConfigurationError(LLMError):
    """Raised before any network call when the client cannot be configured."""


class AiUnavailable(LLMError):
    """The completion service could not produce a response (retries exhausted or fatal status)."""

    def __init__(
        self, message: str, *, status_code: Optional[int] = None, attempts: int = 0
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.attempts = attempts


class MalformedCompletionError(AiUnavailable):
    """The service answered successfully but without usable message content."""
