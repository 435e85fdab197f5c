"""Persistence for comparison requests and results.

External code should depend on :class:`ComparisonStore` and pick an
implementation at startup:

    store = SqlComparisonStore.from_url(settings.database_url)
    store.init_schema()
"""

from .base import ComparisonStore, NotFoundError, StoreError
from .memory import InMemoryComparisonStore, StoredRequest
from .sql import SqlComparisonStore

__all__ = [
    "ComparisonStore",
    "InMemoryComparisonStore",
    "NotFoundError",
    "SqlComparisonStore",
    "StoreError",
    "StoredRequest",
]
