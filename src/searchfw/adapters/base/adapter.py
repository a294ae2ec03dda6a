"""Base search engine adapter — Abstract interface for engine connectors.

Every search backend must implement this interface to integrate with the
Search Framework.  The adapter is responsible for:
  1. Translating collection schemas into engine mappings at index creation
  2. Turning the pipeline's documents into engine documents and buffering them
  3. Writing buffered documents when the indexing run completes
  4. Forwarding search and delete calls to the engine

The indexing pipeline drives an adapter through explicit lifecycle calls::

    adapter.on_run_start()
    for record in records:
        document = adapter.new_document(collection)
        ...  # set fields, boost, id
        adapter.index_document(collection, document)
    await adapter.on_run_complete()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, Field

from searchfw.models.document import IndexDocument, Normalizer
from searchfw.models.schema import Collection, FieldType


class AdapterHealth(BaseModel):
    """Health status of a search engine adapter."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of last health check in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of last health check")
    message: str | None = Field(default=None, description="Additional health message")


class SearchEngineAdapter(ABC):
    """Abstract base class for search engine adapters.

    All adapters must implement:
      - create_index(): Create the index and submit one mapping per collection
      - index_document(): Convert and buffer a pipeline document
      - on_run_start() / on_run_complete(): Indexing run lifecycle
      - search(): Forward a keyword search to the engine
      - delete(): Delete the active index
      - health_check(): Report adapter health status
    """

    def __init__(self) -> None:
        self._normalizers: dict[FieldType, Normalizer] = {}

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique adapter name (e.g., 'elasticsearch')."""

    @abstractmethod
    async def initialize(self) -> None:
        """Create the engine client.  Called once before first use."""

    @abstractmethod
    async def shutdown(self) -> None:
        """Close engine connections and release resources."""

    def attach_normalizer(self, field_type: FieldType, normalizer: Normalizer) -> SearchEngineAdapter:
        """Normalize values of every ``field_type`` field with ``normalizer``."""
        self._normalizers[field_type] = normalizer
        return self

    def new_document(self, collection: Collection) -> IndexDocument:
        """Return an empty document for one source record of ``collection``."""
        return IndexDocument(collection, dict(self._normalizers))

    @abstractmethod
    async def create_index(self, collections: Iterable[Collection], options: dict[str, Any] | None = None) -> None:
        """Create the index and submit the mappings of ``collections``."""

    @abstractmethod
    def index_document(self, collection: Collection, document: IndexDocument) -> Any:
        """Convert ``document`` and buffer it until the run completes."""

    @abstractmethod
    def on_run_start(self) -> None:
        """Called by the pipeline before the first document of a run."""

    @abstractmethod
    async def on_run_complete(self) -> int:
        """Called by the pipeline after the last document of a run.

        Returns:
            Number of documents written to the engine.
        """

    @abstractmethod
    def discard_pending(self) -> int:
        """Drop buffered documents and leave the run.

        Returns:
            Number of documents dropped.
        """

    @abstractmethod
    async def search(self, keywords: str, options: dict[str, Any] | None = None) -> Any:
        """Execute a keyword search and return the engine's result set."""

    @abstractmethod
    async def delete(self) -> None:
        """Delete the active index."""

    @abstractmethod
    async def health_check(self) -> AdapterHealth:
        """Check the health of the search backend."""

    async def index_records(
        self,
        collection: Collection,
        records: Iterable[Mapping[str, Any]],
        id_field: str | None = None,
    ) -> int:
        """Index plain records in one run.

        Convenience method for callers without their own pipeline: each
        record's items become document fields, and ``id_field`` (if given)
        supplies the explicit identifier.

        A record that fails to convert aborts the run: documents buffered so
        far are dropped and the adapter is ready for a new run.

        Returns:
            Number of documents written to the engine.
        """
        self.on_run_start()
        try:
            for record in records:
                document = self.new_document(collection)
                if id_field is not None and record.get(id_field) is not None:
                    document.set_id(str(record[id_field]))
                for field_id, value in record.items():
                    document.set_field(field_id, value)
                self.index_document(collection, document)
        except Exception:
            self.discard_pending()
            raise
        return await self.on_run_complete()
