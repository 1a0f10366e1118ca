"""In-memory unit of work for testing."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from yard.domain.repository import UnitOfWork


class InMemoryUnitOfWork(UnitOfWork):
    """Savepoints snapshot the given stores and restore them on error."""

    def __init__(self, *stores: Any) -> None:
        self.stores = stores
        self.commits = 0

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        states = [store.snapshot() for store in self.stores]
        try:
            yield
        except Exception:
            for store, state in zip(self.stores, states):
                store.restore(state)
            raise

    async def commit(self) -> None:
        self.commits += 1
