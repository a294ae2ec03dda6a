"""Elasticsearch adapter — mappings, date normalization and buffered indexing."""

from searchfw.adapters.elasticsearch.adapter import AdapterState, ElasticsearchAdapter
from searchfw.adapters.elasticsearch.buffer import DocumentBuffer
from searchfw.adapters.elasticsearch.client import ClientConfig, Endpoint, build_client_config
from searchfw.adapters.elasticsearch.mapping import FieldMapping, IndexMode, build_properties, map_field
from searchfw.adapters.elasticsearch.normalizer import DateNormalizer
from searchfw.adapters.elasticsearch.sink import ElasticsearchSink, EngineSink

__all__ = [
    "AdapterState",
    "ClientConfig",
    "DateNormalizer",
    "DocumentBuffer",
    "ElasticsearchAdapter",
    "ElasticsearchSink",
    "Endpoint",
    "EngineSink",
    "FieldMapping",
    "IndexMode",
    "build_client_config",
    "build_properties",
    "map_field",
]
