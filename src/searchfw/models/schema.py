"""Schema models — Collections and the field descriptors they declare.

A ``Collection`` groups source records sharing one ``Schema``.  The schema is
an ordered set of ``SchemaField`` descriptors which the engine adapters
translate into backend-specific mappings.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class FieldType(str, Enum):
    """Logical field types understood by the framework."""

    STRING = "string"
    INTEGER = "integer"
    DECIMAL = "decimal"
    DATE = "date"
    BOOLEAN = "boolean"
    BINARY = "binary"


class SchemaField(BaseModel):
    """Describes one field of a collection's schema.

    ``type`` is normally a ``FieldType``.  Any other string is kept verbatim
    so that adapters can apply their own fallback instead of rejecting the
    schema.
    """

    model_config = ConfigDict(frozen=True)

    field_id: str = Field(description="Identifier used by the indexing pipeline")
    name: str = Field(default="", description="Output field name sent to the engine (defaults to field_id)")
    type: FieldType | str = Field(
        default=FieldType.STRING, union_mode="left_to_right", description="Logical field type"
    )
    indexed: bool = Field(default=True, description="Whether the field is searchable")
    stored: bool = Field(default=True, description="Whether the raw value is stored")
    analyzed: bool = Field(default=True, description="Whether text is analyzed (tokenized)")
    size: str | None = Field(default=None, description="Size hint, e.g. 'long' or 'double'")

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, v: Any) -> FieldType | str:
        if isinstance(v, FieldType):
            return v
        try:
            return FieldType(str(v).lower())
        except ValueError:
            return str(v)

    @model_validator(mode="before")
    @classmethod
    def _default_name(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("name"):
            data = {**data, "name": data.get("field_id", "")}
        return data


class Schema:
    """Ordered set of field descriptors for a collection.

    Example:
        >>> schema = Schema([SchemaField(field_id="title"), SchemaField(field_id="created", type="date")])
        >>> [f.field_id for f in schema]
        ['title', 'created']
    """

    def __init__(self, fields: list[SchemaField] | None = None) -> None:
        self._fields: dict[str, SchemaField] = {}
        for field in fields or []:
            self.add_field(field)

    def add_field(self, field: SchemaField) -> Schema:
        """Add a field, replacing any earlier field with the same id."""
        self._fields[field.field_id] = field
        return self

    def get_field(self, field_id: str) -> SchemaField | None:
        return self._fields.get(field_id)

    def get_field_name(self, field_id: str) -> str:
        """Return the output name of a field, or the id itself when undeclared."""
        field = self._fields.get(field_id)
        return field.name if field else field_id

    def __iter__(self) -> Iterator[SchemaField]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, field_id: object) -> bool:
        return field_id in self._fields

    @classmethod
    def from_dict(cls, data: dict[str, dict[str, Any]]) -> Schema:
        """Build a schema from ``{field_id: {option: value}}`` (e.g. parsed YAML)."""
        return cls([SchemaField(field_id=field_id, **(options or {})) for field_id, options in data.items()])


class Collection:
    """A named group of source records sharing one schema.

    Args:
        name: Collection name.
        schema: The collection's schema.
        type: Document category name used for routing and mappings.
            Defaults to ``name``.
    """

    def __init__(self, name: str, schema: Schema, type: str | None = None) -> None:
        self.name = name
        self.schema = schema
        self.type = type or name

    def __repr__(self) -> str:
        return f"Collection(name={self.name!r}, type={self.type!r}, fields={len(self.schema)})"
