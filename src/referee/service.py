from __future__ import annotations

import asyncio
import datetime
from dataclasses import dataclass, field
from typing import Callable, Optional

from referee import logger as logger_mod
from referee.compare.errors import (
    AiUnavailableError,
    InternalError,
    NormalizationError,
    NormalizationFailure,
    PersistenceFailure,
    ServiceError,
)
from referee.compare.normalizer import normalize
from referee.compare.prompt import build_prompt
from referee.compare.types import ComparisonInput, ComparisonRecord, NormalizedResult
from referee.config import Settings
from referee.llm.base import CompletionClient, CompletionConfig
from referee.llm.errors import AiUnavailable
from referee.llm.factory import build_completion_client
from referee.store.base import ComparisonStore
from referee.store.memory import InMemoryComparisonStore
from referee.store.sql import SqlComparisonStore

log = logger_mod.get_logger()


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def _is_up(outcome: object) -> bool:
    """A health check that raised counts as down."""
    return outcome is True


@dataclass(frozen=True)
class HealthReport:
    database: bool
    completion_api: bool
    checked_at: datetime.datetime = field(default_factory=_utcnow)

    @property
    def healthy(self) -> bool:
        return self.database and self.completion_api

    @property
    def status_code(self) -> int:
        return 200 if self.healthy else 503

    def to_dict(self) -> dict:
        return {
            "status": "healthy" if self.healthy else "unhealthy",
            "database": "connected" if self.database else "disconnected",
            "completionApi": "connected" if self.completion_api else "disconnected",
            "timestamp": logger_mod.format_timestamp(self.checked_at),
        }


class ComparisonService:
    """Runs one comparison end to end: store request, ask the model, normalize, store result.

    Every failure leaves as a `ServiceError` subclass carrying its transport
    status. Nothing is retried here (the completion client owns retries) and
    nothing is rolled back: a stored request without a result is an accepted,
    diagnosable state.
    """

    def __init__(
        self,
        *,
        client: CompletionClient,
        store: ComparisonStore,
        clock: Optional[Callable[[], datetime.datetime]] = None,
    ) -> None:
        self._client = client
        self._store = store
        self._clock = clock or _utcnow

    @classmethod
    def from_settings(cls, settings: Settings) -> "ComparisonService":
        """Wire the real collaborators from process configuration.

        Raises ConfigurationError when the completion credential is missing.
        """

        logger_mod.get_logger().setLevel(settings.logging_level)

        client = build_completion_client(CompletionConfig.from_settings(settings))

        if settings.database_url:
            store: ComparisonStore = SqlComparisonStore.from_url(settings.database_url)
            store.init_schema()
        else:
            log.warning("DATABASE_URL is not set; comparisons are kept in memory only")
            store = InMemoryComparisonStore()

        return cls(client=client, store=store)

    @property
    def store(self) -> ComparisonStore:
        return self._store

    async def execute_comparison(self, comparison: ComparisonInput) -> ComparisonRecord:
        try:
            return await self._run(comparison)
        except ServiceError:
            raise
        except Exception as e:
            log.exception(f"Unexpected error while running comparison: {e}")
            raise InternalError(detail=str(e)) from e

    async def _run(self, comparison: ComparisonInput) -> ComparisonRecord:
        try:
            comparison_id = await self._store.store_request(
                comparison.options, comparison.constraints
            )
        except Exception as e:
            log.error(f"Failed to store comparison request: {e}")
            raise PersistenceFailure(
                "Failed to store comparison request", detail=str(e)
            ) from e

        prompt = build_prompt(comparison.options, comparison.constraints)

        try:
            raw = await self._client.complete(prompt)
        except AiUnavailable as e:
            log.error(f"Completion call failed for comparison {comparison_id}: {e}")
            raise AiUnavailableError(detail=str(e)) from e

        try:
            result: NormalizedResult = normalize(raw)
        except NormalizationFailure as e:
            log.error(f"Failed to normalize completion for comparison {comparison_id}: {e}")
            raise NormalizationError(detail=str(e)) from e

        try:
            await self._store.store_result(comparison_id, result)
        except Exception as e:
            log.error(f"Failed to store result for comparison {comparison_id}: {e}")
            raise PersistenceFailure(
                "Failed to store comparison result", detail=str(e)
            ) from e

        log.info(
            f"Comparison {comparison_id} completed: {len(result.options)} options, "
            f"{len(result.trade_offs)} trade-offs"
        )
        return ComparisonRecord(
            id=comparison_id,
            options=result.options,
            trade_offs=result.trade_offs,
            created_at=self._clock(),
        )

    async def health_check(self) -> HealthReport:
        database, completion_api = await asyncio.gather(
            self._store.check_connection(),
            self._client.check_availability(),
            return_exceptions=True,
        )
        for name, outcome in (("database", database), ("completion API", completion_api)):
            if isinstance(outcome, BaseException):
                log.error(f"Health check for {name} raised: {outcome!r}")
        return HealthReport(
            database=_is_up(database),
            completion_api=_is_up(completion_api),
            checked_at=self._clock(),
        )

    async def aclose(self) -> None:
        close = getattr(self._client, "aclose", None)
        if close is not None:
            await close()
        dispose = getattr(self._store, "dispose", None)
        if dispose is not None:
            dispose()
