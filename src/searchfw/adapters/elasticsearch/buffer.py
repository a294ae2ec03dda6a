"""In-memory buffer of engine-ready documents awaiting a batched write."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from searchfw.adapters.base.exceptions import EngineCallError, FlushError

if TYPE_CHECKING:
    from searchfw.adapters.elasticsearch.sink import EngineSink
    from searchfw.models.document import NormalizedDocument

logger = logging.getLogger(__name__)


class DocumentBuffer:
    """Append-only buffer owned by a single indexing run.

    Not thread-safe: documents are appended from the indexing pipeline's
    single thread of control and flushed once at the end of the run.
    """

    def __init__(self) -> None:
        self._pending: list[NormalizedDocument] = []

    def append(self, document: NormalizedDocument) -> None:
        self._pending.append(document)

    @property
    def pending(self) -> list[NormalizedDocument]:
        """A copy of the pending documents, in append order."""
        return list(self._pending)

    def __len__(self) -> int:
        return len(self._pending)

    def discard(self) -> int:
        """Drop all pending documents and return how many were dropped."""
        count = len(self._pending)
        self._pending.clear()
        return count

    async def flush(self, sink: EngineSink, index: str) -> int:
        """Write all pending documents and refresh ``index``.

        The buffer is cleared only after both the bulk write and the refresh
        succeed.  An empty buffer issues no engine calls.

        Returns:
            Number of documents written.

        Raises:
            FlushError: If the bulk write or the refresh failed.  The pending
                documents are kept for a retry.
        """
        if not self._pending:
            return 0

        documents = list(self._pending)
        try:
            await sink.bulk_write(documents)
            await sink.refresh(index)
        except EngineCallError as e:
            raise FlushError(
                f"Flush of {len(documents)} documents to index '{index}' failed: {e}",
                index=index,
                pending_count=len(documents),
            ) from e

        self._pending.clear()
        logger.info("Flushed %d documents to index %s", len(documents), index)
        return len(documents)
