"""Tests for document models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from searchfw.models.document import IndexDocument, NormalizedDocument
from searchfw.models.schema import Collection


class TestIndexDocument:
    def test_iterates_in_insertion_order(self, articles: Collection) -> None:
        document = IndexDocument(articles)
        document.set_field("slug", "b").set_field("title", "a")
        assert list(document) == [("slug", "b"), ("title", "a")]
        assert len(document) == 2

    def test_without_normalizers_values_are_kept(self, articles: Collection) -> None:
        document = IndexDocument(articles).set_field("published", "2024-01-05")
        assert dict(document)["published"] == "2024-01-05"


class TestNormalizedDocument:
    def test_later_values_overwrite_same_name(self, articles: Collection) -> None:
        document = IndexDocument(articles)
        document.set_field("content", "first").set_field("body", "second")

        native = NormalizedDocument.from_index_document(document, "site")
        assert native.fields == {"content": "second"}

    def test_frozen(self) -> None:
        native = NormalizedDocument(index="site", doc_type="article")
        with pytest.raises(ValidationError):
            native.index = "other"  # type: ignore[misc]

    def test_bulk_action_without_id(self) -> None:
        native = NormalizedDocument(index="site", doc_type="article", fields={"title": "a"})
        assert native.to_bulk_action() == {"_index": "site", "_source": {"title": "a"}}

    def test_bulk_action_with_boost_and_id(self, articles: Collection) -> None:
        document = IndexDocument(articles).set_boost(2.5).set_id("doc-1").set_field("title", "a")
        native = NormalizedDocument.from_index_document(document, "site")

        assert native.boost == 2.5
        assert native.to_bulk_action() == {
            "_index": "site",
            "_id": "doc-1",
            "_source": {"_boost": 2.5, "title": "a"},
        }
