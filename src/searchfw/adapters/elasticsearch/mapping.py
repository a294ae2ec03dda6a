"""Schema-to-mapping translation for Elasticsearch.

Converts framework ``SchemaField`` descriptors into Elasticsearch core-type
mapping properties.  Unknown logical types never raise; they fall back to a
non-analyzed string so index creation can proceed.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from searchfw.models.schema import FieldType, Schema, SchemaField


class IndexMode(str, Enum):
    """Value of the ``index`` mapping directive."""

    ANALYZED = "analyzed"
    NOT_ANALYZED = "not_analyzed"
    NO = "no"


class FieldMapping(BaseModel):
    """Engine-side declaration of how one field is indexed and stored."""

    model_config = ConfigDict(frozen=True)

    engine_type: str = Field(description="Elasticsearch core type name")
    index_mode: IndexMode | None = Field(default=None, description="Indexing directive (strings only)")
    store: bool = Field(default=False, description="Whether the raw value is stored")

    def to_dict(self) -> dict[str, Any]:
        prop: dict[str, Any] = {"type": self.engine_type}
        if self.index_mode is not None:
            prop["index"] = self.index_mode.value
        prop["store"] = self.store
        return prop


def map_field(field: SchemaField) -> FieldMapping:
    """Translate a schema field into its Elasticsearch mapping.

    Size hints are used verbatim as the type for numeric fields
    (``byte``/``short``/``integer``/``long`` and ``float``/``double``).
    A field that is not indexed always gets ``index: no``, whatever its
    ``analyzed`` flag says.
    """
    field_type = field.type

    if field_type == FieldType.STRING:
        if not field.indexed:
            mode = IndexMode.NO
        elif field.analyzed:
            mode = IndexMode.ANALYZED
        else:
            mode = IndexMode.NOT_ANALYZED
        return FieldMapping(engine_type="string", index_mode=mode, store=field.stored)
    elif field_type == FieldType.INTEGER:
        return FieldMapping(engine_type=field.size or "integer", store=field.stored)
    elif field_type == FieldType.DECIMAL:
        return FieldMapping(engine_type=field.size or "float", store=field.stored)
    elif field_type == FieldType.DATE:
        return FieldMapping(engine_type="date", store=field.stored)
    elif field_type == FieldType.BOOLEAN:
        return FieldMapping(engine_type="boolean", store=field.stored)
    elif field_type == FieldType.BINARY:
        return FieldMapping(engine_type="binary", store=field.stored)
    else:
        return FieldMapping(engine_type="string", index_mode=IndexMode.NOT_ANALYZED, store=field.stored)


def build_properties(schema: Schema) -> dict[str, dict[str, Any]]:
    """Build the ``properties`` body of a mapping, keyed by output field name."""
    return {field.name: map_field(field).to_dict() for field in schema}
