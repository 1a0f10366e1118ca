"""Transaction boundary interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class UnitOfWork(ABC):
    """Controls the storage transaction shared by a request's repositories."""

    @abstractmethod
    def savepoint(self) -> AbstractAsyncContextManager[None]:
        """Group several writes so they are kept or discarded together."""
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Make everything written so far durable.

        Called before side effects outside the store (notifications).
        """
        pass
