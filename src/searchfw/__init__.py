"""searchfw — Elasticsearch adapters for the Search Framework.

Translates collection schemas into index mappings, normalizes and buffers
documents produced by the indexing pipeline, and forwards search / delete
calls to the cluster client.
"""

__version__ = "0.1.0"
