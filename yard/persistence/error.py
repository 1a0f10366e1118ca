"""Translation of driver failures into domain storage errors."""

from collections.abc import Iterator
from contextlib import contextmanager

import logfire
from sqlalchemy.exc import SQLAlchemyError

from yard.domain.error import StorageError


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Re-raise database failures and timeouts as StorageError.

    Args:
        operation: Short name of the repository operation, for logs
    """
    try:
        yield
    except (SQLAlchemyError, TimeoutError) as e:
        logfire.error("Storage operation failed", operation=operation, error=str(e))
        raise StorageError(operation, cause=str(e)) from e
