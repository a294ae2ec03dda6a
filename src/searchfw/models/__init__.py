"""Framework models — collections, schemas and documents."""

from searchfw.models.document import IndexDocument, NormalizedDocument, Normalizer
from searchfw.models.schema import Collection, FieldType, Schema, SchemaField

__all__ = [
    "Collection",
    "FieldType",
    "IndexDocument",
    "NormalizedDocument",
    "Normalizer",
    "Schema",
    "SchemaField",
]
