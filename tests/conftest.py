"""Shared test fixtures and configuration."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock

import pytest

from searchfw.adapters.elasticsearch.adapter import ElasticsearchAdapter
from searchfw.config.settings import Settings
from searchfw.models.document import NormalizedDocument
from searchfw.models.schema import Collection, FieldType, Schema, SchemaField


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        debug=True,
        elasticsearch={"endpoints": [{"host": "localhost", "port": 9200, "index": "test-docs"}]},
    )


@pytest.fixture
def article_schema() -> Schema:
    """Schema covering every logical field type."""
    return Schema(
        [
            SchemaField(field_id="title", type=FieldType.STRING),
            SchemaField(field_id="slug", type=FieldType.STRING, analyzed=False),
            SchemaField(field_id="body", name="content", type=FieldType.STRING, stored=False),
            SchemaField(field_id="views", type=FieldType.INTEGER, size="long"),
            SchemaField(field_id="rating", type=FieldType.DECIMAL),
            SchemaField(field_id="published", type=FieldType.DATE),
            SchemaField(field_id="featured", type=FieldType.BOOLEAN),
            SchemaField(field_id="thumbnail", type=FieldType.BINARY, indexed=False),
        ]
    )


@pytest.fixture
def articles(article_schema: Schema) -> Collection:
    return Collection(name="articles", schema=article_schema, type="article")


@pytest.fixture
def sample_records() -> list[dict[str, Any]]:
    return [
        {
            "title": "Advances in Solar Nowcasting Using Deep Learning",
            "slug": "solar-nowcasting",
            "body": "A convolutional approach to solar irradiance nowcasting.",
            "published": "2024-06-15",
        },
        {
            "title": "Transformer Models for Natural Language Understanding",
            "slug": "transformers-nlu",
            "body": "A survey of transformer-based language models.",
            "published": 1700000000,
        },
    ]


@pytest.fixture
def mock_sink() -> AsyncMock:
    """Engine sink whose calls all succeed."""
    sink = AsyncMock()
    sink.bulk_write.return_value = 0
    return sink


@pytest.fixture
def adapter(mock_sink: AsyncMock) -> ElasticsearchAdapter:
    return ElasticsearchAdapter(
        endpoints=[{"host": "localhost", "port": 9200, "index": "test-docs"}],
        sink=mock_sink,
    )


@pytest.fixture
def make_document() -> Callable[..., NormalizedDocument]:
    """Factory for small engine-ready documents."""

    def _make(title: str, index: str = "test-docs", doc_id: str | None = None) -> NormalizedDocument:
        return NormalizedDocument(index=index, doc_type="article", doc_id=doc_id, fields={"title": title})

    return _make
