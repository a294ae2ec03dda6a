"""Adapter Registry — Registration and lookup of search engine adapters.

The registry maps adapter names to classes and keeps the instances it
created.  It is an ordinary object owned by the caller; nothing is
registered globally.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from searchfw.adapters.base.adapter import AdapterHealth, SearchEngineAdapter
from searchfw.adapters.base.exceptions import AdapterError

logger = logging.getLogger(__name__)


class AdapterNotFoundError(AdapterError):
    """Raised when a requested adapter is not registered."""


class AdapterRegistry:
    """Registry for search engine adapter classes and instances.

    Example:
        >>> registry = AdapterRegistry()
        >>> registry.register("elasticsearch", ElasticsearchAdapter)
        >>> await registry.initialize_adapter("elasticsearch", endpoints=[...])
        >>> adapter = registry.get("elasticsearch")
    """

    def __init__(self) -> None:
        self._classes: dict[str, type[SearchEngineAdapter]] = {}
        self._instances: dict[str, SearchEngineAdapter] = {}

    def register(self, name: str, adapter_class: type[SearchEngineAdapter]) -> None:
        if name in self._classes:
            logger.warning("Overwriting existing adapter registration: %s", name)
        self._classes[name] = adapter_class
        logger.debug("Registered adapter: %s", name)

    async def initialize_adapter(self, name: str, **kwargs: Any) -> SearchEngineAdapter:
        """Create and initialize an adapter instance.

        Args:
            name: The registered adapter name.
            **kwargs: Passed to the adapter constructor.

        Raises:
            AdapterNotFoundError: If no adapter is registered under this name.
        """
        if name not in self._classes:
            raise AdapterNotFoundError(
                f"No adapter registered with name '{name}'. "
                f"Available adapters: {list(self._classes.keys())}"
            )

        adapter = self._classes[name](**kwargs)
        await adapter.initialize()
        self._instances[name] = adapter
        logger.info("Initialized adapter: %s", name)
        return adapter

    def get(self, name: str) -> SearchEngineAdapter:
        if name not in self._instances:
            raise AdapterNotFoundError(
                f"Adapter '{name}' is not initialized. Call initialize_adapter() first."
            )
        return self._instances[name]

    @asynccontextmanager
    async def session(self, name: str, **kwargs: Any) -> AsyncIterator[SearchEngineAdapter]:
        """Initialize ``name`` for the duration of an ``async with`` block.

        The adapter is shut down and forgotten when the block exits, even
        if it raised.
        """
        adapter = await self.initialize_adapter(name, **kwargs)
        try:
            yield adapter
        finally:
            self._instances.pop(name, None)
            await adapter.shutdown()

    async def health_check_all(self) -> dict[str, AdapterHealth]:
        results: dict[str, AdapterHealth] = {}
        for name, adapter in self._instances.items():
            try:
                results[name] = await adapter.health_check()
            except Exception as e:
                results[name] = AdapterHealth(status="unhealthy", message=str(e))
        return results

    async def shutdown_all(self) -> None:
        """Shut down every initialized adapter, logging individual failures."""
        for name, adapter in self._instances.items():
            try:
                await adapter.shutdown()
                logger.info("Shut down adapter: %s", name)
            except Exception:
                logger.warning("Error shutting down adapter: %s", name, exc_info=True)
        self._instances.clear()

    @property
    def registered_adapters(self) -> list[str]:
        return list(self._classes.keys())

    @property
    def active_adapters(self) -> list[str]:
        return list(self._instances.keys())


def default_registry() -> AdapterRegistry:
    """Return a new registry with the built-in adapters registered."""
    from searchfw.adapters.elasticsearch.adapter import ElasticsearchAdapter

    registry = AdapterRegistry()
    registry.register("elasticsearch", ElasticsearchAdapter)
    return registry
