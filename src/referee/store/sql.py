from __future__ import annotations

import asyncio
import datetime
import uuid
from typing import Any, Optional, Sequence

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    ForeignKey,
    MetaData,
    String,
    Table,
    create_engine,
    select,
    text,
)
from sqlalchemy.engine import Engine

from referee import logger as logger_mod
from referee.compare.types import NormalizedResult

from .base import ComparisonStore, NotFoundError
from .memory import StoredRequest

log = logger_mod.get_logger()

metadata = MetaData()

comparisons = Table(
    "comparisons",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("options", JSON, nullable=False),
    Column("constraints", JSON, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

comparison_results = Table(
    "comparison_results",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("comparison_id", String(36), ForeignKey("comparisons.id"), nullable=False),
    Column("result", JSON, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class SqlComparisonStore(ComparisonStore):
    """SQLAlchemy Core store over a pooled engine.

    Engine calls block, so each one runs in a worker thread; every call checks
    a connection out of the pool and returns it when done.
    """

    def __init__(self, engine: Engine):
        self._engine = engine

    @classmethod
    def from_url(cls, url: str, **engine_kwargs: Any) -> "SqlComparisonStore":
        engine_kwargs.setdefault("pool_pre_ping", True)
        return cls(create_engine(url, **engine_kwargs))

    @property
    def engine(self) -> Engine:
        return self._engine

    def init_schema(self) -> None:
        metadata.create_all(self._engine)
        log.info("Database schema initialized")

    def dispose(self) -> None:
        self._engine.dispose()

    # --- blocking helpers (run via asyncio.to_thread) ---

    def _insert_request(self, options: list, constraints: list) -> str:
        comparison_id = str(uuid.uuid4())
        with self._engine.begin() as conn:
            conn.execute(
                comparisons.insert().values(
                    id=comparison_id,
                    options=options,
                    constraints=constraints,
                    created_at=_utcnow(),
                )
            )
        return comparison_id

    def _insert_result(self, comparison_id: str, payload: dict) -> None:
        with self._engine.begin() as conn:
            exists = conn.execute(
                select(comparisons.c.id).where(comparisons.c.id == comparison_id)
            ).first()
            if exists is None:
                raise NotFoundError(f"Unknown comparison id: {comparison_id}")
            conn.execute(
                comparison_results.insert().values(
                    id=str(uuid.uuid4()),
                    comparison_id=comparison_id,
                    result=payload,
                    created_at=_utcnow(),
                )
            )

    def _ping(self) -> None:
        with self._engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def _select_request(self, comparison_id: str) -> Optional[StoredRequest]:
        with self._engine.connect() as conn:
            row = conn.execute(
                select(comparisons.c.options, comparisons.c.constraints).where(
                    comparisons.c.id == comparison_id
                )
            ).first()
        if row is None:
            return None
        return StoredRequest(options=tuple(row.options), constraints=tuple(row.constraints))

    def _select_result(self, comparison_id: str) -> Optional[NormalizedResult]:
        with self._engine.connect() as conn:
            row = conn.execute(
                select(comparison_results.c.result)
                .where(comparison_results.c.comparison_id == comparison_id)
                .order_by(comparison_results.c.created_at.desc())
            ).first()
        if row is None:
            return None
        return NormalizedResult.from_dict(row.result)

    # --- ComparisonStore ---

    async def store_request(
        self, options: Sequence[str], constraints: Sequence[str]
    ) -> str:
        return await asyncio.to_thread(
            self._insert_request, list(options), list(constraints)
        )

    async def store_result(self, comparison_id: str, result: NormalizedResult) -> None:
        await asyncio.to_thread(self._insert_result, comparison_id, result.to_dict())

    async def check_connection(self) -> bool:
        try:
            await asyncio.to_thread(self._ping)
            return True
        except Exception as e:  # noqa: BLE001
            log.error(f"Database connection check failed: {e}")
            return False

    async def load_request(self, comparison_id: str) -> Optional[StoredRequest]:
        return await asyncio.to_thread(self._select_request, comparison_id)

    async def load_result(self, comparison_id: str) -> Optional[NormalizedResult]:
        return await asyncio.to_thread(self._select_result, comparison_id)
