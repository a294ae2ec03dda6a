"""Base adapter interface — Abstract classes for search engine connectors."""

from searchfw.adapters.base.adapter import AdapterHealth, SearchEngineAdapter
from searchfw.adapters.base.registry import AdapterRegistry

__all__ = ["AdapterHealth", "AdapterRegistry", "SearchEngineAdapter"]
