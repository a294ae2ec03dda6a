"""Engine sink — the Elasticsearch operations the adapter relies on.

``EngineSink`` enumerates every call the adapter makes against the cluster.
``ElasticsearchSink`` implements it on top of ``AsyncElasticsearch`` and
turns client failures into ``EngineCallError``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

from elastic_transport import TransportError
from elasticsearch import ApiError
from elasticsearch.helpers import BulkIndexError, async_bulk

from searchfw.adapters.base.exceptions import EngineCallError

if TYPE_CHECKING:
    from elasticsearch import AsyncElasticsearch

    from searchfw.models.document import NormalizedDocument

logger = logging.getLogger(__name__)

_CLIENT_ERRORS = (ApiError, TransportError)

# Legacy string index modes and the current field type replacing each.
_STRING_TYPES = {"analyzed": "text", "not_analyzed": "keyword", "no": "keyword"}


def to_server_property(prop: dict[str, Any]) -> dict[str, Any]:
    """Rewrite one legacy mapping property into the form current servers accept.

    ``string`` becomes ``text`` (analyzed) or ``keyword`` (not analyzed), and
    ``index: no`` becomes ``index: false``.  Other types pass through.
    """
    if prop.get("type") != "string":
        return dict(prop)

    mode = prop.get("index", "not_analyzed")
    converted: dict[str, Any] = {"type": _STRING_TYPES.get(mode, "keyword")}
    if mode == "no":
        converted["index"] = False
    if "store" in prop:
        converted["store"] = prop["store"]
    return converted


class EngineSink(Protocol):
    """Search engine operations used by the adapter.  All may fail."""

    async def create_index(self, name: str, options: dict[str, Any]) -> None: ...

    async def put_mapping(self, index: str, collection_type: str, properties: dict[str, Any]) -> None: ...

    async def bulk_write(self, documents: list[NormalizedDocument]) -> int: ...

    async def refresh(self, index: str) -> None: ...

    async def search(self, index: str, keywords: str, options: dict[str, Any]) -> Any: ...

    async def delete_index(self, index: str) -> None: ...


class ElasticsearchSink:
    """``EngineSink`` backed by an ``AsyncElasticsearch`` client.

    Args:
        client: The Elasticsearch client.
    """

    def __init__(self, client: AsyncElasticsearch) -> None:
        self.client = client
        self._collection_types: dict[str, list[str]] = {}

    async def create_index(self, name: str, options: dict[str, Any]) -> None:
        """Create ``name``, deleting any existing index of that name first."""
        try:
            if await self.client.indices.exists(index=name):
                logger.info("Deleting existing index %s before re-creating it", name)
                await self.client.indices.delete(index=name)
            await self.client.indices.create(index=name, settings=options)
            self._collection_types[name] = []
        except _CLIENT_ERRORS as e:
            raise EngineCallError(f"Failed to create index '{name}': {e}", index=name) from e

    async def put_mapping(self, index: str, collection_type: str, properties: dict[str, Any]) -> None:
        """Add ``properties`` to the index mapping.

        The index ``_meta`` lists every collection type mapped onto it since
        it was created by this sink.
        """
        types = self._collection_types.setdefault(index, [])
        if collection_type not in types:
            types.append(collection_type)
        try:
            await self.client.indices.put_mapping(
                index=index,
                properties={name: to_server_property(prop) for name, prop in properties.items()},
                meta={"collection_types": list(types)},
            )
        except _CLIENT_ERRORS as e:
            raise EngineCallError(
                f"Failed to put mapping for '{collection_type}' on index '{index}': {e}",
                index=index,
            ) from e

    async def bulk_write(self, documents: list[NormalizedDocument]) -> int:
        """Send all documents in a single bulk request.

        Returns:
            Number of documents the engine accepted.
        """
        actions = [doc.to_bulk_action() for doc in documents]
        try:
            success, _ = await async_bulk(self.client, actions, chunk_size=max(len(actions), 1))
        except BulkIndexError as e:
            raise EngineCallError(
                f"Bulk write rejected {len(e.errors)} of {len(actions)} documents",
                pending_count=len(actions),
            ) from e
        except _CLIENT_ERRORS as e:
            raise EngineCallError(f"Bulk write failed: {e}", pending_count=len(actions)) from e
        return success

    async def refresh(self, index: str) -> None:
        try:
            await self.client.indices.refresh(index=index)
        except _CLIENT_ERRORS as e:
            raise EngineCallError(f"Failed to refresh index '{index}': {e}", index=index) from e

    async def search(self, index: str, keywords: str, options: dict[str, Any]) -> Any:
        """Query-string search for ``keywords``; the response is returned unchanged."""
        try:
            return await self.client.search(index=index, q=keywords, **options)
        except _CLIENT_ERRORS as e:
            raise EngineCallError(f"Search on index '{index}' failed: {e}", index=index) from e

    async def delete_index(self, index: str) -> None:
        try:
            await self.client.indices.delete(index=index)
            self._collection_types.pop(index, None)
        except _CLIENT_ERRORS as e:
            raise EngineCallError(f"Failed to delete index '{index}': {e}", index=index) from e

    async def health(self) -> dict[str, Any]:
        """Cluster health summary (used by health checks only)."""
        try:
            response = await self.client.cluster.health()
        except _CLIENT_ERRORS as e:
            raise EngineCallError(f"Cluster health request failed: {e}") from e
        return dict(getattr(response, "body", response))
