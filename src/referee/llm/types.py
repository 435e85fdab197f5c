from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional

Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class CompletionMessage:
    role: Role
    content: str


@dataclass(frozen=True)
class CompletionRequest:
    """One completion call: a single user prompt plus optional generation knobs."""

    prompt: str
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None

    def messages(self) -> List[CompletionMessage]:
        return [CompletionMessage(role="user", content=self.prompt)]

    def to_payload(
        self, *, model: str, default_max_tokens: int, default_temperature: float
    ) -> Dict[str, Any]:
        # Explicit zero temperature is a valid request, only None falls back.
        return {
            "model": model,
            "messages": [{"role": m.role, "content": m.content} for m in self.messages()],
            "max_tokens": self.max_tokens or default_max_tokens,
            "temperature": (
                default_temperature if self.temperature is None else self.temperature
            ),
        }
