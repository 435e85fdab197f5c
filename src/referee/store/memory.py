from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from referee.compare.types import NormalizedResult

from .base import ComparisonStore, NotFoundError


@dataclass(frozen=True)
class StoredRequest:
    options: Tuple[str, ...]
    constraints: Tuple[str, ...]


class InMemoryComparisonStore(ComparisonStore):
    """Process-local store for tests and runs without DATABASE_URL."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._requests: Dict[str, StoredRequest] = {}
        self._results: Dict[str, NormalizedResult] = {}

    async def store_request(
        self, options: Sequence[str], constraints: Sequence[str]
    ) -> str:
        comparison_id = str(uuid.uuid4())
        async with self._lock:
            self._requests[comparison_id] = StoredRequest(
                options=tuple(options), constraints=tuple(constraints)
            )
        return comparison_id

    async def store_result(self, comparison_id: str, result: NormalizedResult) -> None:
        async with self._lock:
            if comparison_id not in self._requests:
                raise NotFoundError(f"Unknown comparison id: {comparison_id}")
            self._results[comparison_id] = result

    async def check_connection(self) -> bool:
        return True

    async def load_request(self, comparison_id: str) -> Optional[StoredRequest]:
        async with self._lock:
            return self._requests.get(comparison_id)

    async def load_result(self, comparison_id: str) -> Optional[NormalizedResult]:
        async with self._lock:
            return self._results.get(comparison_id)
