"""Elasticsearch adapter — Schema mappings, buffered indexing and search.

Uses the official ``elasticsearch`` client (async).  Documents produced
during an indexing run are normalized and buffered in memory, then written
with one bulk request followed by an index refresh when the run completes.

Usage::

    adapter = ElasticsearchAdapter(
        endpoints=[{"host": "localhost", "port": 9200, "index": "site"}],
    )
    await adapter.initialize()
    await adapter.create_index([collection])
    await adapter.index_records(collection, records, id_field="id")
    results = await adapter.search("solar nowcasting")
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

from searchfw.adapters.base.adapter import AdapterHealth, SearchEngineAdapter
from searchfw.adapters.base.exceptions import AdapterError, ConfigurationError, EngineCallError, FlushError
from searchfw.adapters.elasticsearch.buffer import DocumentBuffer
from searchfw.adapters.elasticsearch.client import ClientConfig, Endpoint, build_client, build_client_config
from searchfw.adapters.elasticsearch.mapping import build_properties
from searchfw.adapters.elasticsearch.normalizer import DEFAULT_DATE_FORMAT, DateNormalizer
from searchfw.adapters.elasticsearch.sink import ElasticsearchSink, EngineSink
from searchfw.models.document import IndexDocument, NormalizedDocument
from searchfw.models.schema import Collection, FieldType
from searchfw.observability.logging import bind_run_context

if TYPE_CHECKING:
    from elasticsearch import AsyncElasticsearch

    from searchfw.config.settings import ElasticsearchSettings

logger = logging.getLogger(__name__)

DEFAULT_INDEX_OPTIONS: dict[str, Any] = {
    "number_of_shards": 4,
    "number_of_replicas": 1,
}


class AdapterState(str, Enum):
    """Where the adapter is within an indexing run."""

    IDLE = "idle"
    INDEXING = "indexing"
    FLUSHING = "flushing"


class ElasticsearchAdapter(SearchEngineAdapter):
    """Search engine adapter for Elasticsearch.

    Args:
        endpoints: Cluster nodes, as ``Endpoint`` objects or dicts with
            ``host``, ``port`` and ``index``.  One endpoint gives a
            single-node client, more give a multi-node client.
        index: Active index.  Defaults to the last endpoint's index.
        index_options: Settings merged over ``DEFAULT_INDEX_OPTIONS`` when
            the index is created.
        date_format: ``strftime`` pattern for date field values.
        sink: Pre-built engine sink (mainly for tests); skips client creation.
        **client_options: Keyword arguments forwarded to ``AsyncElasticsearch``.

    Raises:
        ConfigurationError: If no endpoint or no index name is given.
    """

    def __init__(
        self,
        endpoints: list[Endpoint | dict[str, Any]],
        index: str | None = None,
        index_options: dict[str, Any] | None = None,
        date_format: str = DEFAULT_DATE_FORMAT,
        sink: EngineSink | None = None,
        **client_options: Any,
    ) -> None:
        super().__init__()
        self._endpoints = [Endpoint.model_validate(e) for e in endpoints]
        self._client_config = build_client_config(self._endpoints, client_options)

        self._active_index = index or self._endpoints[-1].index
        if not self._active_index:
            raise ConfigurationError('The "index" option is required.')

        self._index_options = {**DEFAULT_INDEX_OPTIONS, **(index_options or {})}
        self._client: AsyncElasticsearch | None = None
        self._sink: EngineSink | None = sink
        self._buffer = DocumentBuffer()
        self._state = AdapterState.IDLE

        self.attach_normalizer(FieldType.DATE, DateNormalizer(date_format))

    @classmethod
    def from_settings(cls, settings: ElasticsearchSettings) -> ElasticsearchAdapter:
        """Build an adapter from ``ElasticsearchSettings``."""
        return cls(**settings.adapter_options())

    @property
    def name(self) -> str:
        return "elasticsearch"

    # ── Accessors ────────────────────────────────────────────────────────

    @property
    def client_config(self) -> ClientConfig:
        return self._client_config

    @property
    def client(self) -> AsyncElasticsearch | None:
        return self._client

    def set_client(self, client: AsyncElasticsearch) -> ElasticsearchAdapter:
        """Use an existing client instead of building one in ``initialize()``."""
        self._client = client
        self._sink = ElasticsearchSink(client)
        return self

    @property
    def active_index(self) -> str:
        return self._active_index

    def set_active_index(self, index: str) -> ElasticsearchAdapter:
        if not index:
            raise ConfigurationError("Active index name must not be empty.")
        self._active_index = index
        return self

    @property
    def state(self) -> AdapterState:
        return self._state

    @property
    def pending_count(self) -> int:
        return len(self._buffer)

    # ── Lifecycle ────────────────────────────────────────────────────────

    async def initialize(self) -> None:
        """Create the ``AsyncElasticsearch`` client from the endpoints."""
        if self._sink is not None:
            return

        self.set_client(build_client(self._client_config))
        logger.info(
            "Created %s Elasticsearch client for %s (index: %s)",
            "multi-node" if self._client_config.is_multi_node else "single-node",
            ", ".join(self._client_config.hosts),
            self._active_index,
        )

    async def shutdown(self) -> None:
        """Close the Elasticsearch client."""
        if self._client:
            await self._client.close()
            self._client = None
            self._sink = None

    # ── Index administration ─────────────────────────────────────────────

    async def create_index(self, collections: Iterable[Collection], options: dict[str, Any] | None = None) -> None:
        """Create the active index, then put one mapping per collection type."""
        sink = self._require_sink()
        index_options = {**self._index_options, **(options or {})}

        await sink.create_index(self._active_index, index_options)
        logger.info("Created index %s with options %s", self._active_index, index_options)

        for collection in collections:
            properties = build_properties(collection.schema)
            await sink.put_mapping(self._active_index, collection.type, properties)
            logger.info(
                "Put mapping for %s on index %s (%d fields)",
                collection.type,
                self._active_index,
                len(properties),
            )

    async def delete(self) -> None:
        sink = self._require_sink()
        await sink.delete_index(self._active_index)
        logger.info("Deleted index %s", self._active_index)

    # ── Indexing run ─────────────────────────────────────────────────────

    def on_run_start(self) -> None:
        """Start an indexing run with a fresh buffer.

        Raises:
            AdapterError: If a run is already active, or documents from a
                failed flush are still pending.
        """
        if self._state is not AdapterState.IDLE:
            raise AdapterError(f"Cannot start an indexing run while {self._state.value}.")
        if self._buffer:
            raise AdapterError(
                f"{len(self._buffer)} documents from a previous run are still pending "
                f"for index '{self._active_index}'; flush or discard them first."
            )
        self._buffer = DocumentBuffer()
        self._state = AdapterState.INDEXING

    def index_document(self, collection: Collection, document: IndexDocument) -> NormalizedDocument:
        """Normalize ``document`` and append it to the run's buffer.

        Starts a run implicitly when called while idle.
        """
        if self._state is AdapterState.FLUSHING:
            raise AdapterError("Cannot index documents while a flush is in progress.")
        if self._state is AdapterState.IDLE:
            self.on_run_start()

        native_doc = NormalizedDocument.from_index_document(document, self._active_index, doc_type=collection.type)
        self._buffer.append(native_doc)
        return native_doc

    async def on_run_complete(self) -> int:
        """Flush the buffer: one bulk write, then one refresh.

        Raises:
            FlushError: If the engine rejected the write or the refresh.
                The documents stay pending and the adapter returns to idle.
        """
        if self._state is AdapterState.FLUSHING:
            raise AdapterError("A flush is already in progress.")
        sink = self._require_sink()

        self._state = AdapterState.FLUSHING
        try:
            with bind_run_context(index=self._active_index):
                return await self._buffer.flush(sink, self._active_index)
        except FlushError as e:
            logger.warning(
                "Flush to index %s failed; %d documents kept pending",
                e.index,
                e.pending_count,
            )
            raise
        finally:
            self._state = AdapterState.IDLE

    def discard_pending(self) -> int:
        """Drop pending documents and end the current run, if any.

        Used after a failed flush, or to abandon a run midway.

        Returns:
            Number of documents dropped.
        """
        if self._state is AdapterState.FLUSHING:
            raise AdapterError("Cannot discard documents while a flush is in progress.")
        count = self._buffer.discard()
        if self._state is AdapterState.INDEXING:
            self._state = AdapterState.IDLE
        if count:
            logger.warning("Discarded %d pending documents for index %s", count, self._active_index)
        return count

    # ── Search ───────────────────────────────────────────────────────────

    async def search(self, keywords: str, options: dict[str, Any] | None = None) -> Any:
        """Forward ``keywords`` to the engine and return its response unchanged."""
        sink = self._require_sink()
        return await sink.search(self._active_index, keywords, options or {})

    # ── Health ───────────────────────────────────────────────────────────

    async def health_check(self) -> AdapterHealth:
        """Check Elasticsearch cluster health."""
        if not isinstance(self._sink, ElasticsearchSink):
            return AdapterHealth(status="unhealthy", message="Client not initialized")

        try:
            start = time.monotonic()
            health = await self._sink.health()
            latency_ms = int((time.monotonic() - start) * 1000)
        except EngineCallError as e:
            return AdapterHealth(status="unhealthy", message=str(e))

        status_map = {"green": "healthy", "yellow": "degraded", "red": "unhealthy"}
        return AdapterHealth(
            status=status_map.get(health.get("status", "red"), "unhealthy"),
            latency_ms=latency_ms,
            last_check=datetime.now(UTC).isoformat(),
            message=f"Cluster: {health.get('cluster_name')}, Nodes: {health.get('number_of_nodes')}",
        )

    # ── Helpers ──────────────────────────────────────────────────────────

    def _require_sink(self) -> EngineSink:
        if self._sink is None:
            raise AdapterError("Elasticsearch client not initialized. Call initialize() first.")
        return self._sink
