"""Storage error type shared by the schema bootstrap and its consumers."""

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError


class StorageError(Exception):
    """The backing store is unreachable, read-only, drifted, or rejected a write."""


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    """Re-raise any SQLAlchemy error from the wrapped block as a StorageError."""
    try:
        yield
    except SQLAlchemyError as exc:
        raise StorageError(f"{action}: {exc}") from exc
