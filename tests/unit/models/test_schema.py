"""Tests for schema models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from searchfw.models.schema import Collection, FieldType, Schema, SchemaField


class TestSchemaField:
    def test_defaults(self) -> None:
        field = SchemaField(field_id="title")
        assert field.name == "title"
        assert field.type is FieldType.STRING
        assert field.indexed and field.stored and field.analyzed
        assert field.size is None

    def test_type_from_string(self) -> None:
        assert SchemaField(field_id="d", type="DATE").type is FieldType.DATE

    def test_unknown_type_kept_verbatim(self) -> None:
        assert SchemaField(field_id="g", type="geo_point").type == "geo_point"

    def test_frozen(self) -> None:
        field = SchemaField(field_id="title")
        with pytest.raises(ValidationError):
            field.name = "other"  # type: ignore[misc]


class TestSchema:
    def test_iteration_order(self, article_schema: Schema) -> None:
        assert [f.field_id for f in article_schema][:3] == ["title", "slug", "body"]
        assert len(article_schema) == 8

    def test_field_name_lookup(self, article_schema: Schema) -> None:
        assert article_schema.get_field_name("body") == "content"
        assert article_schema.get_field_name("undeclared") == "undeclared"
        assert "body" in article_schema
        assert article_schema.get_field("undeclared") is None

    def test_from_dict(self) -> None:
        schema = Schema.from_dict(
            {
                "title": {"type": "string", "analyzed": True},
                "views": {"type": "integer", "size": "long"},
                "tags": None,
            }
        )
        assert [f.field_id for f in schema] == ["title", "views", "tags"]
        assert schema.get_field("views").size == "long"
        assert schema.get_field("tags").type is FieldType.STRING


class TestCollection:
    def test_type_defaults_to_name(self) -> None:
        assert Collection(name="pages", schema=Schema()).type == "pages"

    def test_explicit_type(self, articles: Collection) -> None:
        assert articles.type == "article"
        assert "article" in repr(articles)
