from __future__ import annotations

from typing import Protocol, Sequence

from referee.compare.types import NormalizedResult


class StoreError(RuntimeError):
    """Base error for referee.store."""


class NotFoundError(StoreError):
    """Requested comparison does not exist."""


class ComparisonStore(Protocol):
    """Where requests and their results are kept, keyed by an opaque id.

    A request without a result is a valid state: the comparison is still running
    or failed after the request was stored.
    """

    async def store_request(
        self, options: Sequence[str], constraints: Sequence[str]
    ) -> str:
        raise NotImplementedError

    async def store_result(self, comparison_id: str, result: NormalizedResult) -> None:
        raise NotImplementedError

    async def check_connection(self) -> bool:
        raise NotImplementedError
