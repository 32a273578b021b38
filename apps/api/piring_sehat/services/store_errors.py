"""Translation of data store failures into API errors."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
import logging

from piring_sehat.errors import UpstreamFailure
from piring_sehat.repositories.base import DataStoreError

logger = logging.getLogger(__name__)


@contextmanager
def store_call(operation: str, message: str, *, expose_detail: bool = False) -> Iterator[None]:
    """Re-raise ``DataStoreError`` as ``UpstreamFailure`` carrying a stable message.

    The store's own error text is logged and only returned to the caller when
    ``expose_detail`` is set.
    """
    try:
        yield
    except DataStoreError as exc:
        logger.exception("store.failed operation=%s", operation)
        raise UpstreamFailure(message, details=str(exc) if expose_detail else None) from exc
